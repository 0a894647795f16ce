"""Build the invoice description handed to the PDF renderer."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from duration import hours_to_clock_text
from earnings import calculate
from models import CalculatorInputs, Config, InvoiceData, InvoiceLine
from utils import format_currency

DEFAULT_EXPENSE_DESCRIPTION = "Expense"


def generate_invoice_number(now: datetime) -> str:
    """Invoice number from the current timestamp, e.g. INV-20260127-093000."""
    return now.strftime("INV-%Y%m%d-%H%M%S")


def payment_terms(config: Config) -> str:
    if config.payment_terms_days <= 0:
        return "Due on receipt"
    return f"Payment due within {config.payment_terms_days} days"


def build_invoice(inputs: CalculatorInputs, config: Config,
                  now: datetime | None = None) -> InvoiceData:
    """Turn the current form values into an invoice.

    The labor line carries the unrounded hours so the invoice total always
    matches the net income shown in the form.
    """
    now = now or datetime.now()
    issue_date = now.date()
    calculation = calculate(inputs)
    totals = calculation.totals

    lines: list[InvoiceLine] = []
    if totals.hours > 0:
        lines.append(InvoiceLine(
            description=f"Labor ({hours_to_clock_text(totals.hours)} hours "
                        f"@ {format_currency(totals.hourly_rate, config.currency_symbol)}/h)",
            quantity=totals.hours,
            rate=totals.hourly_rate,
        ))

    for item in inputs.expenses:
        lines.append(InvoiceLine(
            description=item.name.strip() or DEFAULT_EXPENSE_DESCRIPTION,
            quantity=Decimal(item.quantity),
            rate=item.unit_price,
        ))

    return InvoiceData(
        issuer_name=inputs.worker_name.strip() or config.worker_name,
        client_name=inputs.client_name.strip(),
        client_address=inputs.client_address.strip(),
        invoice_number=generate_invoice_number(now),
        issue_date=issue_date,
        due_date=issue_date + timedelta(days=max(config.payment_terms_days, 0)),
        lines=lines,
        currency_symbol=config.currency_symbol,
        notes=config.notes,
        terms=payment_terms(config),
    )
