"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep RATECALC_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("RATECALC_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sample_config(tmp_path: Path):
    """Create a sample Config writing into a temporary directory."""
    from models import Config

    return Config(
        hourly_rate="25",
        worker_name="Jane Doe",
        currency_symbol="$",
        payment_terms_days=14,
        output_dir=tmp_path,
        notes="Thank you for your business.",
    )


@pytest.fixture
def sample_expenses():
    """An expense list with two items: 2 x 10.50 and 1 x 5."""
    from earnings import ExpenseList

    expenses = ExpenseList()
    expenses.add("Materials", 2, Decimal("10.5"))
    expenses.add("Parking", 1, Decimal("5"))
    return expenses


@pytest.fixture
def sample_inputs(sample_expenses):
    """Form values for an overnight shift with two expenses."""
    from models import CalculatorInputs

    return CalculatorInputs(
        hourly_rate="25",
        start_time="22:00",
        end_time="06:00",
        duration_text="",
        worker_name="Jane Doe",
        client_name="ABC Company",
        client_address="1 Main St\nSpringfield",
        expenses=sample_expenses.items,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 27, 9, 30, 0)


@pytest.fixture
def sample_invoice(sample_inputs, sample_config, fixed_now):
    """Invoice built from the sample inputs."""
    from invoice import build_invoice

    return build_invoice(sample_inputs, sample_config, now=fixed_now)


@pytest.fixture
def empty_invoice():
    """Invoice with no lines and no address."""
    from models import InvoiceData

    return InvoiceData(
        issuer_name="",
        client_name="",
        client_address="",
        invoice_number="INV-20260101-000000",
        issue_date=date(2026, 1, 1),
        due_date=date(2026, 1, 31),
    )
