"""Helpers for monetary values stored as SQLite ``REAL`` columns."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """Return ``value`` as a ``Decimal`` rounded to whole cents.

    Floats go through ``str`` first so that ``15.5`` becomes
    ``Decimal("15.50")`` rather than its binary expansion.  Raises
    ``ValueError`` for anything that is not a number.
    """
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
