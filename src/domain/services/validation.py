"""Domain validation helpers."""

from logging import Logger

from src.domain.models.balances import AggregatedBalance, TokenMetadata


def validate_display_metadata(
    existing: AggregatedBalance,
    token: TokenMetadata,
    logger: Logger | None,
) -> None:
    """Warn when a merged token carries different display metadata.

    The first-seen metadata is kept; divergence is reported only.

    Args:
        existing: Aggregate holding the first-seen metadata.
        token: Metadata of the record being merged in.
        logger: Logger used for warnings.
    """
    if logger is None:
        return
    mismatches = []
    if existing.decimals != token.decimals:
        mismatches.append(f"decimals {existing.decimals} != {token.decimals}")
    if existing.symbol != token.symbol:
        mismatches.append(f"symbol {existing.symbol} != {token.symbol}")
    if existing.name != token.name:
        mismatches.append(f"name {existing.name!r} != {token.name!r}")
    if mismatches:
        logger.warning(
            f"Divergent metadata for {existing.base_symbol}/"
            f"{existing.balance_type.value} on {token.blockchain}: "
            + ", ".join(mismatches)
        )


__all__ = ["validate_display_metadata"]
