"""Domain normalization helpers."""


def normalize_symbol(symbol: str | None) -> str | None:
    """Normalize token symbol values.

    Args:
        symbol: Raw symbol or base symbol from a repository.

    Returns:
        str | None: Upper-cased symbol, or None when blank.
    """
    if not symbol:
        return None
    cleaned = symbol.strip()
    return cleaned.upper() if cleaned else None


def normalize_network(value: str | None) -> str:
    """Normalize blockchain and network version labels.

    Args:
        value: Raw blockchain or network version label.

    Returns:
        str: Lower-cased label, empty when missing.
    """
    if not value:
        return ""
    return value.strip().lower()


__all__ = ["normalize_symbol", "normalize_network"]
