"""Domain constants for portfolio valuation."""

REFERENCE_CURRENCY = "USD"

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20


__all__ = ["REFERENCE_CURRENCY", "DEFAULT_PAGE", "DEFAULT_PAGE_LIMIT"]
