#!/usr/bin/env python3
"""Hourly rate and invoice calculator TUI application."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.coordinate import Coordinate
from textual.widgets import DataTable, Footer, Input, Label
from textual.widgets.data_table import CellDoesNotExist

from config import load_config
from earnings import Calculation, ExpenseList, calculate
from invoice import build_invoice
from models import CalculatorInputs, Config, EarningsTotals, ExpenseItem
from pdf_export import ExportError, InvoiceExporter
from screens import ConfirmScreen, EditExpenseScreen, ExpenseDraft
from utils import format_currency
from widgets import InvoiceHeader, TotalsSummary

# Input widget id -> CalculatorInputs field
FORM_FIELDS = {
    "worker-name": "worker_name",
    "client-name": "client_name",
    "client-address": "client_address",
    "hourly-rate": "hourly_rate",
    "start-time": "start_time",
    "end-time": "end_time",
    "duration-text": "duration_text",
}


class CalculatorApp(App):
    """Main calculator application."""

    CSS = """
    Screen {
        background: $surface;
    }

    #invoice-header {
        height: auto;
        background: $primary;
        color: $text;
        padding: 0 1;
        text-style: bold;
    }

    #form {
        height: auto;
        padding: 1 2 0 2;
    }

    .field-row {
        width: 100%;
        height: auto;
        margin-bottom: 1;
    }

    .field-group {
        width: 1fr;
        height: auto;
        margin: 0 1 0 0;
    }

    .field-label {
        height: 1;
        color: $text-muted;
    }

    .field-row Input {
        width: 100%;
    }

    #expenses-label {
        padding: 0 2;
        text-style: bold;
    }

    #expense-table {
        height: auto;
        max-height: 12;
        margin: 0 2;
    }

    #totals-summary {
        height: auto;
        padding: 1 2;
        color: $text;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f2", "add_expense", "Add expense"),
        Binding("f3", "edit_expense", "Edit expense"),
        Binding("f8", "remove_expense", "Remove expense"),
        Binding("f5", "export_invoice", "Invoice PDF"),
        Binding("f10", "clear_times", "Clear times"),
    ]

    def __init__(self, config: Config | None = None):
        super().__init__()
        self.settings = config or load_config()

        # Raw form values, keyed by CalculatorInputs field name
        self.form: dict[str, str] = {name: "" for name in FORM_FIELDS.values()}
        self.form["hourly_rate"] = self.settings.hourly_rate
        self.form["worker_name"] = self.settings.worker_name

        self.expenses = ExpenseList()
        self.exporter = InvoiceExporter()
        self.totals = EarningsTotals()

    def compose(self) -> ComposeResult:
        yield InvoiceHeader(id="invoice-header")
        with VerticalScroll(id="form"):
            with Horizontal(classes="field-row"):
                yield from self._field("Worker Name (From)", "worker-name", "John Doe")
                yield from self._field("Client Name (To)", "client-name", "ABC Company")
            with Horizontal(classes="field-row"):
                yield from self._field("Client Address", "client-address", "1 Main St, Springfield")
            with Horizontal(classes="field-row"):
                yield from self._field("Hourly Rate ($/h)", "hourly-rate", "25", input_type="number")
                yield from self._field("Start (HH:MM)", "start-time", "09:00")
                yield from self._field("End (HH:MM)", "end-time", "17:30")
                yield from self._field("Hours (8.5 or 8:30)", "duration-text", "8")
        yield Label("Expenses", id="expenses-label")
        yield DataTable(id="expense-table")
        yield TotalsSummary(self.settings.currency_symbol, id="totals-summary")
        yield Footer()

    def _field(self, label: str, input_id: str, placeholder: str,
               input_type: str = "text") -> ComposeResult:
        with Vertical(classes="field-group"):
            yield Label(label, classes="field-label")
            yield Input(
                value=self.form[FORM_FIELDS[input_id]],
                placeholder=placeholder,
                id=input_id,
                type=input_type,
            )

    def on_mount(self):
        table = self.query_one("#expense-table", DataTable)
        table.cursor_type = "row"
        table.add_column("Description", width=30)
        table.add_column("Qty", width=6)
        table.add_column("Unit price", width=12)
        table.add_column("Total", width=12)
        self._recalculate()
        self.query_one("#hourly-rate", Input).focus()

    def _current_inputs(self) -> CalculatorInputs:
        return CalculatorInputs(expenses=self.expenses.items, **self.form)

    def _compute(self) -> Calculation:
        """Recalculate totals from the current form values and expenses.

        When the duration is worked out from start/end times, the canonical
        text replaces the typed duration.
        """
        calculation = calculate(self._current_inputs())
        if calculation.duration.display_text is not None:
            self.form["duration_text"] = calculation.duration.display_text
        self.totals = calculation.totals
        return calculation

    def _recalculate(self) -> None:
        calculation = self._compute()

        if calculation.duration.display_text is not None:
            duration_input = self.query_one("#duration-text", Input)
            if duration_input.value != calculation.duration.display_text:
                duration_input.value = calculation.duration.display_text

        self._refresh_display()

    def _refresh_display(self) -> None:
        header = self.query_one("#invoice-header", InvoiceHeader)
        header.update_display(self.form["worker_name"].strip(), self.form["client_name"].strip())

        self.query_one("#totals-summary", TotalsSummary).update_display(self.totals)
        self._refresh_expense_table()

    def _refresh_expense_table(self) -> None:
        table = self.query_one("#expense-table", DataTable)
        current_row = table.cursor_row
        table.clear()

        symbol = self.settings.currency_symbol
        for item in self.expenses:
            table.add_row(
                item.name or "(unnamed)",
                str(item.quantity),
                format_currency(item.unit_price, symbol),
                format_currency(item.line_total, symbol),
                key=str(item.id),
            )

        if len(self.expenses):
            table.move_cursor(row=min(current_row, len(self.expenses) - 1))

    def on_input_changed(self, event: Input.Changed) -> None:
        """Recalculate on every edit."""
        field = FORM_FIELDS.get(event.input.id or "")
        if field is None:
            return
        self.form[field] = event.value
        self._recalculate()

    def _get_selected_expense(self) -> ExpenseItem | None:
        if not len(self.expenses):
            return None
        table = self.query_one("#expense-table", DataTable)
        try:
            cell_key = table.coordinate_to_cell_key(Coordinate(table.cursor_row, 0))
        except CellDoesNotExist:
            return None
        return self.expenses.get(int(cell_key.row_key.value))

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable actions that cannot run right now."""
        if action == "export_invoice" and self.exporter.generating:
            return False
        if action in ("edit_expense", "remove_expense") and not len(self.expenses):
            return None
        return True

    def action_add_expense(self) -> None:
        self.push_screen(EditExpenseScreen(), self._on_expense_added)

    def _on_expense_added(self, draft: ExpenseDraft | None) -> None:
        if draft is None:
            return
        item = self.expenses.add(draft.name, draft.quantity, draft.unit_price)
        self._recalculate()
        self.query_one("#expense-table", DataTable).move_cursor(row=len(self.expenses) - 1)
        self.notify(f"Added {item.name or 'expense'}")

    def action_edit_expense(self) -> None:
        item = self._get_selected_expense()
        if item is None:
            self.notify("No expenses to edit", severity="warning")
            return
        self._edit_expense(item)

    def _edit_expense(self, item: ExpenseItem) -> None:
        def on_edited(draft: ExpenseDraft | None) -> None:
            if draft is None:
                return
            self.expenses.update(item.id, "name", draft.name)
            self.expenses.update(item.id, "quantity", draft.quantity)
            self.expenses.update(item.id, "unit_price", draft.unit_price)
            self._recalculate()

        self.push_screen(EditExpenseScreen(item), on_edited)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter on an expense row opens it for editing."""
        if event.row_key.value is None:
            return
        item = self.expenses.get(int(event.row_key.value))
        if item is not None:
            self._edit_expense(item)

    def action_remove_expense(self) -> None:
        item = self._get_selected_expense()
        if item is None:
            self.notify("No expenses to remove", severity="warning")
            return

        def on_confirmed(confirmed: bool | None) -> None:
            if confirmed and self.expenses.remove(item.id):
                self._recalculate()
                self.notify(f"Removed {item.name or 'expense'}")

        symbol = self.settings.currency_symbol
        detail = (f"{item.quantity} x {format_currency(item.unit_price, symbol)}"
                  f" = {format_currency(item.line_total, symbol)}")
        self.push_screen(
            ConfirmScreen(f"Remove {item.name or 'this expense'}?", detail, "Remove"),
            on_confirmed,
        )

    def action_clear_times(self) -> None:
        """Clear start/end so the typed duration is used again."""
        for input_id in ("start-time", "end-time"):
            self.query_one(f"#{input_id}", Input).value = ""

    def action_export_invoice(self) -> None:
        if self.exporter.generating:
            return

        try:
            invoice = build_invoice(self._current_inputs(), self.settings)
            path = self.exporter.export(invoice, self.settings.output_dir)
        except ExportError as e:
            self.notify(str(e), severity="error")
            return
        except (ArithmeticError, ValueError) as e:
            self.notify(f"Could not build invoice: {e}", severity="error")
            return
        finally:
            self.refresh_bindings()

        self.notify(f"Saved {path}")


def main():
    import sys
    config = load_config()

    if len(sys.argv) > 1 and sys.argv[1] == "--show-config":
        print(f"Hourly rate:   {config.hourly_rate or '(not set)'}")
        print(f"Worker name:   {config.worker_name or '(not set)'}")
        print(f"Currency:      {config.currency_symbol}")
        print(f"Payment terms: {config.payment_terms_days} days")
        print(f"Output dir:    {config.output_dir}")
        print(f"Log file:      {config.log_file or '(not set)'}")
        return

    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    app = CalculatorApp(config)
    app.run()


if __name__ == "__main__":
    main()
