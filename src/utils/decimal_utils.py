"""Conversion of database numerics into Decimal."""

from decimal import Decimal
from typing import Optional


def coerce_decimal(
    value,
    default: Optional[Decimal] = Decimal("0"),
) -> Optional[Decimal]:
    """Convert a numeric value read from SQL into a Decimal.

    Only for columns the driver already types as numbers; user-facing or
    text data is parsed with ``parse_decimal`` instead.

    Args:
        value: Raw value returned by the driver.
        default: Result for NULL columns and blank strings.

    Returns:
        Decimal | None: Exact value, or ``default`` when there is none.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if not text:
        return default
    return Decimal(text)


__all__ = ["coerce_decimal"]
