"""Utility functions for parsing form values and formatting money."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

CENT = Decimal("0.01")

# Larger magnitudes are typos, not amounts, and count as unparsable
MAX_MAGNITUDE = 10 ** 12


def parse_decimal(val: str | int | float | Decimal | None) -> Decimal:
    """Parse a user-entered number. Anything unparsable becomes zero."""
    if val is None:
        return Decimal("0")
    if isinstance(val, Decimal):
        result = val
    else:
        try:
            result = Decimal(str(val).strip())
        except InvalidOperation:
            return Decimal("0")
    # NaN, infinities and absurd magnitudes are treated as unparsable
    if not result.is_finite() or result.copy_abs() > MAX_MAGNITUDE:
        return Decimal("0")
    return result


def is_number(val: str) -> bool:
    """True if the text is a decimal number parse_decimal would accept."""
    try:
        result = Decimal(val.strip())
    except InvalidOperation:
        return False
    return result.is_finite() and result.copy_abs() <= MAX_MAGNITUDE


def parse_int(val: str | int | None) -> int:
    """Parse a user-entered whole number. Anything unparsable becomes zero."""
    if val is None:
        return 0
    if isinstance(val, int):
        result = val
    else:
        try:
            result = int(str(val).strip())
        except ValueError:
            return 0
    if abs(result) > MAX_MAGNITUDE:
        return 0
    return result


def round_cents(amount: Decimal) -> Decimal:
    """Round half-up to cents, with enough precision for any finite amount."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        ctx.Emax = max(ctx.Emax, amount.adjusted() + 1)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount US-dollar style, e.g. $1,234.50 or -$3.00."""
    cents = round_cents(amount)
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol}{cents.copy_abs():,.2f}"


def format_hours(hours: Decimal) -> str:
    """Format decimal hours to two places, e.g. 8.50."""
    return f"{round_cents(hours):f}"
