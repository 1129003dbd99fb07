from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero (12.5 -> 13)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
