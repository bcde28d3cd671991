"""Exact decimal arithmetic for balances and prices.

Every monetary or token quantity handled by the engine is a ``Decimal``
parsed from its canonical string form. Parsing is strict: a malformed value
is a data-integrity problem and is raised, never coerced to zero.
"""

from decimal import Decimal, InvalidOperation

from src.domain.errors import DataIntegrityError

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def parse_decimal(
    value,
    *,
    field: str,
    context: str | None = None,
    allow_none: bool = False,
) -> Decimal:
    """Parse a raw value into a finite Decimal.

    Args:
        value: Raw value (str, int or Decimal).
        field: Field name reported on failure.
        context: Record identity reported on failure.
        allow_none: Resolve None or an empty string to zero.

    Returns:
        Decimal: Parsed value.

    Raises:
        DataIntegrityError: If the value is missing, malformed, a float,
            or not finite.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if allow_none:
            return ZERO
        raise DataIntegrityError(
            f"Missing decimal value for {field}",
            field=field,
            value=value,
            context=context,
        )
    if isinstance(value, bool) or isinstance(value, float):
        raise DataIntegrityError(
            f"Refusing binary float for {field}: {value!r}",
            field=field,
            value=value,
            context=context,
        )
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as exc:
            raise DataIntegrityError(
                f"Malformed decimal for {field}: {value!r}",
                field=field,
                value=value,
                context=context,
            ) from exc
    else:
        raise DataIntegrityError(
            f"Unsupported type for {field}: {type(value).__name__}",
            field=field,
            value=value,
            context=context,
        )
    if not parsed.is_finite():
        raise DataIntegrityError(
            f"Non-finite decimal for {field}: {value!r}",
            field=field,
            value=value,
            context=context,
        )
    return parsed


def add(left: Decimal, right: Decimal) -> Decimal:
    """Return ``left + right``."""
    return left + right


def subtract(left: Decimal, right: Decimal) -> Decimal:
    """Return ``left - right``."""
    return left - right


def multiply(left: Decimal, right: Decimal) -> Decimal:
    """Return ``left * right``."""
    return left * right


def is_zero(value: Decimal) -> bool:
    """Return True when the value is exactly zero."""
    return value.is_zero()


def compare(left: Decimal, right: Decimal) -> int:
    """Compare two decimals.

    Returns:
        int: -1, 0 or 1 as ``left`` is lower, equal or greater.
    """
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def sum_decimals(values) -> Decimal:
    """Sum an iterable of decimals starting from an exact zero."""
    return sum(values, ZERO)


def to_decimal_string(value: Decimal) -> str:
    """Render a decimal without exponent notation.

    Trailing zeros carried by the value are kept, so ``Decimal("150.750")``
    renders as ``"150.750"``. Negative zero renders without its sign.

    Args:
        value: Decimal to render.

    Returns:
        str: Canonical fixed-point string.
    """
    if value.is_zero():
        value = abs(value)
    return format(value, "f")


__all__ = [
    "ZERO",
    "HUNDRED",
    "parse_decimal",
    "add",
    "subtract",
    "multiply",
    "is_zero",
    "compare",
    "sum_decimals",
    "to_decimal_string",
]
