"""Custom widgets for the rate calculator."""

from __future__ import annotations

from textual.widgets import Static
from rich.text import Text

from duration import hours_to_clock_text
from models import EarningsTotals
from utils import format_currency, format_hours


class InvoiceHeader(Static):
    """Shows the app title on the left and who the invoice is for on the right."""

    HEADING = "HOURLY RATE CALCULATOR"
    # Column where the party names end
    WIDTH = 74

    def update_display(self, worker_name: str, client_name: str):
        parties = ""
        if worker_name and client_name:
            parties = f"{worker_name} ► {client_name}"
        elif worker_name:
            parties = f"From {worker_name}"
        elif client_name:
            parties = f"To {client_name}"

        text = Text()
        text.append(self.HEADING, style="bold")

        spacing = self.WIDTH - len(self.HEADING) - len(parties)
        if spacing > 1:
            text.append(" " * spacing)
        else:
            text.append("  ")

        text.append(parties, style="bold")
        self.update(text)


class TotalsSummary(Static):
    """Shows the earnings breakdown and the total to receive."""

    def __init__(self, currency_symbol: str = "$", **kwargs):
        super().__init__(**kwargs)
        self.currency_symbol = currency_symbol

    def update_display(self, totals: EarningsTotals):
        def money(amount):
            return format_currency(amount, self.currency_symbol)

        hours = f"{hours_to_clock_text(totals.hours)} ({format_hours(totals.hours)}h)"

        text = Text()
        # Breakdown lines are dimmed when there is nothing to show
        work_line = f"{'Hours':>20}  {hours:>16}\n"
        text.append(work_line, style="dim" if not totals.hours else "")

        gross_line = f"{'Total for Work':>20}  {money(totals.gross_income):>16}\n"
        text.append(gross_line, style="dim" if not totals.gross_income else "")

        expense_line = f"{'Expenses':>20}  {'+' + money(totals.expense_total):>16}\n"
        text.append(expense_line, style="dim" if not totals.expense_total else "green")

        text.append(f"{'':>20}  {'─' * 16}\n")
        text.append(f"{'Total to Receive':>20}  {money(totals.net_income):>16}", style="bold")

        self.update(text)
