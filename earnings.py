"""Earnings aggregation: rate times hours plus itemized expenses."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator

from duration import DurationResolution, resolve_duration
from models import CalculatorInputs, EarningsTotals, ExpenseItem
from utils import parse_decimal, parse_int

EXPENSE_FIELDS = ("name", "quantity", "unit_price")


def _clean_quantity(val: str | int | None) -> int:
    return max(parse_int(val), 0)


def _clean_price(val: str | int | float | Decimal | None) -> Decimal:
    return max(parse_decimal(val), Decimal("0"))


class ExpenseList:
    """Ordered expense line items for one session.

    Ids come from a counter owned by the list, so two items added in quick
    succession can never share an id.
    """

    def __init__(self, items: Iterable[ExpenseItem] = ()):
        self._items: list[ExpenseItem] = list(items)
        start = max((item.id for item in self._items), default=0) + 1
        self._ids = itertools.count(start)

    def __iter__(self) -> Iterator[ExpenseItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[ExpenseItem]:
        """Snapshot of the items in insertion order."""
        return list(self._items)

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self._items), Decimal("0"))

    def get(self, item_id: int) -> ExpenseItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add(self, name: str = "", quantity: str | int = 1,
            unit_price: str | Decimal = Decimal("0")) -> ExpenseItem:
        """Append a new item and return it."""
        item = ExpenseItem(
            id=next(self._ids),
            name=name,
            quantity=_clean_quantity(quantity),
            unit_price=_clean_price(unit_price),
        )
        self._items.append(item)
        return item

    def remove(self, item_id: int) -> bool:
        """Remove the item with this id. Returns False if there is none."""
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[idx]
                return True
        return False

    def update(self, item_id: int, field: str, value) -> bool:
        """Set one field of an item in place. Returns False if the id is unknown."""
        if field not in EXPENSE_FIELDS:
            raise ValueError(f"Unknown expense field: {field!r}")

        item = self.get(item_id)
        if item is None:
            return False

        if field == "name":
            item.name = "" if value is None else str(value)
        elif field == "quantity":
            item.quantity = _clean_quantity(value)
        else:
            item.unit_price = _clean_price(value)
        return True


@dataclass(frozen=True)
class Calculation:
    totals: EarningsTotals
    duration: DurationResolution


def compute_totals(hourly_rate: Decimal, hours: Decimal,
                   expenses: Iterable[ExpenseItem]) -> EarningsTotals:
    """Combine rate, hours and expenses into gross, expense and net totals."""
    expense_total = sum((item.line_total for item in expenses), Decimal("0"))
    gross_income = hourly_rate * hours
    return EarningsTotals(
        hourly_rate=hourly_rate,
        hours=hours,
        gross_income=gross_income,
        expense_total=expense_total,
        net_income=gross_income + expense_total,
    )


def calculate(inputs: CalculatorInputs) -> Calculation:
    """Resolve the worked time and compute totals for the current form values."""
    resolution = resolve_duration(inputs.start_time, inputs.end_time, inputs.duration_text)
    totals = compute_totals(
        parse_decimal(inputs.hourly_rate),
        resolution.hours,
        inputs.expenses,
    )
    return Calculation(totals=totals, duration=resolution)
