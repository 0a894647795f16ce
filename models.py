from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path


@dataclass
class ExpenseItem:
    id: int
    name: str = ""
    quantity: int = 1
    unit_price: Decimal = Decimal("0")

    @property
    def line_total(self) -> Decimal:
        """Quantity times unit price."""
        return Decimal(self.quantity) * self.unit_price


@dataclass(frozen=True)
class EarningsTotals:
    hourly_rate: Decimal = Decimal("0")
    hours: Decimal = Decimal("0")
    gross_income: Decimal = Decimal("0")
    expense_total: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")


@dataclass
class CalculatorInputs:
    """Raw field values as entered in the form."""

    hourly_rate: str = ""
    start_time: str = ""
    end_time: str = ""
    duration_text: str = ""
    worker_name: str = ""
    client_name: str = ""
    client_address: str = ""
    expenses: list[ExpenseItem] = field(default_factory=list)


@dataclass
class InvoiceLine:
    description: str
    quantity: Decimal
    rate: Decimal

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.rate


@dataclass
class InvoiceData:
    issuer_name: str
    client_name: str
    client_address: str
    invoice_number: str
    issue_date: date
    due_date: date
    lines: list[InvoiceLine] = field(default_factory=list)
    currency_symbol: str = "$"
    notes: str = ""
    terms: str = ""

    @property
    def subtotal(self) -> Decimal:
        """Sum of line amounts."""
        return sum((line.amount for line in self.lines), Decimal("0"))

    @property
    def tax(self) -> Decimal:
        """Tax is not computed; always zero."""
        return Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax


@dataclass
class Config:
    hourly_rate: str = ""
    worker_name: str = ""
    currency_symbol: str = "$"
    payment_terms_days: int = 30
    output_dir: Path = field(default_factory=Path.cwd)
    notes: str = ""
    log_file: Path | None = None
