"""Modal screens for the rate calculator."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label
from textual.screen import ModalScreen

from models import ExpenseItem


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog, with an optional detail line under the question."""

    CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $warning;
    }

    #confirm-detail {
        color: $text-muted;
    }

    #confirm-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    #confirm-buttons Button {
        width: 1fr;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
    ]

    def __init__(self, message: str, detail: str = "", confirm_label: str = "Yes"):
        super().__init__()
        self.message = message
        self.detail = detail
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self.message)
            if self.detail:
                yield Label(self.detail, id="confirm-detail")
            with Horizontal(id="confirm-buttons"):
                yield Button(f"{self.confirm_label} (Y)", variant="warning", id="yes")
                yield Button("No (N)", variant="default", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


@dataclass
class ExpenseDraft:
    """Field values entered in the expense dialog, still as raw text."""

    name: str
    quantity: str
    unit_price: str


class EditExpenseScreen(ModalScreen[ExpenseDraft | None]):
    """Modal screen for adding or editing an expense line."""

    CSS = """
    EditExpenseScreen {
        align: center middle;
    }

    #expense-dialog {
        width: 70;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #expense-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .field-group {
        width: 1fr;
        height: auto;
        margin: 0 1 0 0;
    }

    .field-group:last-of-type {
        margin-right: 0;
    }

    .field-label {
        height: 1;
        margin-bottom: 0;
        color: $text-muted;
    }

    .field-row {
        width: 100%;
        height: auto;
        margin-bottom: 1;
    }

    .field-row Input {
        width: 100%;
    }

    #name-group {
        width: 2fr;
    }

    #expense-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
        align: center middle;
    }

    #expense-buttons Button {
        width: auto;
        min-width: 12;
        margin: 0 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    # Field order for Enter key navigation
    FIELD_ORDER = ["expense-name", "expense-quantity", "expense-price"]

    def __init__(self, item: ExpenseItem | None = None):
        super().__init__()
        self.item = item  # None means adding a new expense

    def compose(self) -> ComposeResult:
        title = "Edit Expense" if self.item else "New Expense"
        with Vertical(id="expense-dialog"):
            yield Label(title, id="expense-title")

            with Horizontal(classes="field-row"):
                with Vertical(classes="field-group", id="name-group"):
                    yield Label("Description", classes="field-label")
                    yield Input(
                        value=self.item.name if self.item else "",
                        placeholder="Materials",
                        id="expense-name",
                    )
                with Vertical(classes="field-group"):
                    yield Label("Qty", classes="field-label")
                    yield Input(
                        value=str(self.item.quantity) if self.item else "1",
                        placeholder="1",
                        id="expense-quantity",
                        type="integer",
                    )
                with Vertical(classes="field-group"):
                    yield Label("Unit price ($)", classes="field-label")
                    yield Input(
                        value=str(self.item.unit_price) if self.item else "",
                        placeholder="0.00",
                        id="expense-price",
                        type="number",
                    )

            with Horizontal(id="expense-buttons"):
                yield Button("Save", variant="primary", id="save")
                yield Button("Cancel", variant="default", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#expense-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Move to next field on Enter, or save if on last field."""
        current_id = event.input.id
        if current_id in self.FIELD_ORDER:
            current_idx = self.FIELD_ORDER.index(current_id)
            if current_idx < len(self.FIELD_ORDER) - 1:
                next_id = self.FIELD_ORDER[current_idx + 1]
                self.query_one(f"#{next_id}", Input).focus()
            else:
                self._save_expense()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "save":
            self._save_expense()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _save_expense(self) -> None:
        self.dismiss(ExpenseDraft(
            name=self.query_one("#expense-name", Input).value.strip(),
            quantity=self.query_one("#expense-quantity", Input).value,
            unit_price=self.query_one("#expense-price", Input).value,
        ))
