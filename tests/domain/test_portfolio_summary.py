"""Tests for portfolio valuation summaries and snapshots."""

from decimal import Decimal
from itertools import permutations
from unittest.mock import MagicMock

import pytest

from src.domain.errors import DataIntegrityError
from src.domain.models import (
    AggregatedBalance,
    BalanceType,
    NetworkContribution,
    RawBalanceRecord,
    TokenMetadata,
    TokenPrice,
)
from src.domain.services.portfolio import (
    build_portfolio_snapshot,
    compute_change_24h,
    compute_type_totals,
    filter_zero_balances,
    resolve_record_price,
)


def _record(
    symbol: str,
    amount: str,
    *,
    blockchain: str = "ethereum",
    balance_type: BalanceType = BalanceType.SPOT,
    wallet_id: str = "w1",
    current_price: str | None = None,
    change: str | None = None,
) -> RawBalanceRecord:
    return RawBalanceRecord(
        wallet_id=wallet_id,
        token_id=f"{symbol}-{blockchain}",
        balance_type=balance_type,
        amount=amount,
        token=TokenMetadata(
            symbol=symbol,
            base_symbol=symbol,
            name=symbol.title(),
            decimals=8,
            blockchain=blockchain,
            network_version="mainnet",
            current_price=(
                Decimal(current_price) if current_price is not None else None
            ),
            change_percent_24h=Decimal(change) if change else None,
        ),
    )


def _price(price: str, change: str | None = None) -> TokenPrice:
    return TokenPrice(Decimal(price), Decimal(change) if change else None)


def _balance(
    symbol: str,
    value: str,
    *,
    amount: str = "1",
    change: str | None = None,
    balance_type: BalanceType = BalanceType.SPOT,
) -> AggregatedBalance:
    return AggregatedBalance(
        symbol=symbol,
        base_symbol=symbol,
        name=symbol,
        decimals=8,
        balance_type=balance_type,
        total_amount=Decimal(amount),
        total_usd_value=Decimal(value),
        network_contributions=(
            NetworkContribution(
                blockchain="ethereum",
                network_version="mainnet",
                amount=Decimal(amount),
                balance_type=balance_type,
                usd_value=Decimal(value),
                change_percent_24h=Decimal(change) if change else None,
            ),
        ),
    )


def test_two_networks_of_usdt_build_one_entry() -> None:
    """USDT on two networks is a single merged balance."""
    records = [
        _record("USDT", "100.50", blockchain="ethereum"),
        _record("USDT", "50.25", blockchain="tron"),
    ]

    snapshot = build_portfolio_snapshot(records, {"USDT": _price("1.00")})

    assert len(snapshot.balances) == 1
    balance = snapshot.balances[0]
    assert balance.base_symbol == "USDT"
    assert balance.total_amount == Decimal("150.75")
    assert balance.total_usd_value == Decimal("150.75")
    assert [c.blockchain for c in balance.network_contributions] == [
        "ethereum",
        "tron",
    ]


def test_weighted_change_of_btc_and_eth() -> None:
    """BTC +5% on 10000 and ETH -10% on 2000 give +300, 2.5%."""
    records = [_record("BTC", "1"), _record("ETH", "1")]
    prices = {
        "BTC": _price("10000", "5"),
        "ETH": _price("2000", "-10"),
    }

    snapshot = build_portfolio_snapshot(records, prices)

    assert snapshot.totals.change_24h == Decimal("300")
    assert snapshot.totals.change_percent_24h == Decimal("2.5")
    assert snapshot.totals.total == Decimal("12000")


def test_zero_filter_drops_worthless_entries_before_counting() -> None:
    """Hidden zero balances are excluded from the total count."""
    records = [_record("DOGE", "1000"), _record("BTC", "0.0001")]
    prices = {"DOGE": _price("0"), "BTC": _price("50000")}

    snapshot = build_portfolio_snapshot(
        records,
        prices,
        show_zero_balances=False,
    )

    assert [b.symbol for b in snapshot.balances] == ["BTC"]
    assert snapshot.pagination.total == 1
    assert snapshot.totals.spot_total == Decimal("5.0000")


def test_pagination_slices_after_sorting_full_set() -> None:
    """page=2, limit=1 over A $30, B $10, C $0 returns B."""
    records = [_record("C", "1"), _record("B", "1"), _record("A", "1")]
    prices = {"A": _price("30"), "B": _price("10"), "C": _price("0")}

    snapshot = build_portfolio_snapshot(records, prices, page=2, limit=1)

    assert [b.symbol for b in snapshot.page_balances] == ["B"]
    assert [b.symbol for b in snapshot.balances] == ["A", "B", "C"]
    assert snapshot.pagination.has_more is True
    assert snapshot.pagination.total_pages == 3


def test_totals_use_unsliced_set() -> None:
    """Totals cover every balance, not only the visible page."""
    records = [_record("A", "1"), _record("B", "1"), _record("C", "1")]
    prices = {"A": _price("30"), "B": _price("10"), "C": _price("5")}

    snapshot = build_portfolio_snapshot(records, prices, page=1, limit=1)

    assert len(snapshot.page_balances) == 1
    assert snapshot.totals.spot_total == Decimal("45")


def test_empty_input_gives_defined_empty_snapshot() -> None:
    """No balances is a valid result with zero totals."""
    snapshot = build_portfolio_snapshot([], {})

    assert snapshot.balances == ()
    assert snapshot.page_balances == ()
    assert snapshot.totals.total == 0
    assert snapshot.totals.change_24h == 0
    assert snapshot.totals.change_percent_24h == 0
    assert snapshot.pagination.total == 0
    assert snapshot.pagination.total_pages == 0
    assert snapshot.pagination.has_more is False


def test_unpriced_asset_stays_listed_with_zero_value() -> None:
    """Assets without a price are kept and contribute nothing."""
    records = [_record("NEW", "42"), _record("BTC", "1")]
    prices = {"BTC": _price("100", "10")}

    snapshot = build_portfolio_snapshot(records, prices)

    assert [b.symbol for b in snapshot.balances] == ["BTC", "NEW"]
    assert snapshot.balances[1].total_usd_value == 0
    assert snapshot.totals.change_24h == Decimal("10")
    assert snapshot.totals.change_percent_24h == Decimal("10")


def test_embedded_token_price_is_used_when_lookup_has_none() -> None:
    """Market data on the token row backs up the price lookup."""
    record = _record("ETH", "2", current_price="1500")

    assert resolve_record_price(record, {}) == TokenPrice(Decimal("1500"))
    assert resolve_record_price(
        record,
        {"ETH": _price("1600")},
    ) == _price("1600")
    assert resolve_record_price(_record("X", "1"), {"X": None}) is None


def test_type_totals_split_spot_and_funding() -> None:
    """Spot and funding totals are computed separately."""
    records = [
        _record("BTC", "1"),
        _record("BTC", "2", balance_type=BalanceType.FUNDING),
        _record("ETH", "1", balance_type=BalanceType.FUNDING),
    ]
    prices = {"BTC": _price("100"), "ETH": _price("10.5")}

    snapshot = build_portfolio_snapshot(records, prices)

    assert snapshot.totals.spot_total == Decimal("100")
    assert snapshot.totals.funding_total == Decimal("210.5")
    assert snapshot.totals.total == Decimal("310.5")


def test_balance_type_filter_applies_before_valuation() -> None:
    """Only the requested balance type is aggregated."""
    records = [
        _record("BTC", "1"),
        _record("BTC", "2", balance_type=BalanceType.FUNDING),
    ]

    snapshot = build_portfolio_snapshot(
        records,
        {"BTC": _price("100")},
        balance_type=BalanceType.FUNDING,
    )

    assert [b.balance_type for b in snapshot.balances] == [
        BalanceType.FUNDING
    ]
    assert snapshot.totals.spot_total == 0


def test_malformed_amount_aborts_the_snapshot() -> None:
    """No partial snapshot is produced from corrupt data."""
    records = [_record("BTC", "1"), _record("ETH", "1..0")]

    with pytest.raises(DataIntegrityError) as excinfo:
        build_portfolio_snapshot(records, {"BTC": _price("1")})

    assert "ETH" in str(excinfo.value)


def test_divergent_metadata_is_logged_not_raised() -> None:
    """Mismatched metadata still produces a snapshot."""
    logger = MagicMock()
    first = _record("USDT", "1", blockchain="ethereum")
    second = RawBalanceRecord(
        wallet_id="w2",
        token_id="usdt-bsc",
        balance_type=BalanceType.SPOT,
        amount="1",
        token=TokenMetadata(
            symbol="USDT",
            base_symbol="USDT",
            name="Usdt",
            decimals=18,
            blockchain="bsc",
            network_version="BEP20",
        ),
    )

    snapshot = build_portfolio_snapshot(
        [first, second],
        {"USDT": _price("1")},
        logger=logger,
    )

    assert snapshot.balances[0].decimals == 8
    logger.warning.assert_called_once()


def test_zero_filter_is_idempotent() -> None:
    """Filtering twice equals filtering once."""
    balances = [_balance("A", "0"), _balance("B", "1"), _balance("C", "0.0")]

    once = filter_zero_balances(balances)

    assert filter_zero_balances(once) == once
    assert [b.symbol for b in once] == ["B"]


def test_change_percent_is_zero_without_value() -> None:
    """A valueless portfolio has 0% change instead of dividing by zero."""
    balances = [
        _balance("A", "0", change="50"),
        _balance("B", "0", amount="0", change="-3"),
    ]

    assert compute_change_24h(balances) == (Decimal("0"), Decimal("0"))
    assert compute_change_24h([]) == (Decimal("0"), Decimal("0"))


def test_change_ignores_empty_holdings_and_unknown_changes() -> None:
    """Only positive holdings with a known change contribute."""
    balances = [
        _balance("A", "200", change="10"),
        _balance("B", "200"),
        _balance("C", "0", amount="0", change="90"),
    ]

    change, percent = compute_change_24h(balances)

    assert change == Decimal("20")
    assert percent == Decimal("5")


def test_type_totals_over_empty_set() -> None:
    """No balances means zero totals."""
    assert compute_type_totals([]) == (Decimal("0"), Decimal("0"))


def test_snapshot_totals_do_not_depend_on_record_order() -> None:
    """Any permutation of records yields the same merged result."""
    records = [
        _record("USDT", "10.10", blockchain="ethereum"),
        _record("USDT", "5.05", blockchain="tron"),
        _record("BTC", "0.5", balance_type=BalanceType.FUNDING),
        _record("ETH", "0"),
    ]
    prices = {
        "USDT": _price("0.9998", "0.01"),
        "BTC": _price("60000", "-2.5"),
        "ETH": _price("3000", "1"),
    }
    baseline = build_portfolio_snapshot(records, prices)

    for ordering in permutations(records):
        snapshot = build_portfolio_snapshot(list(ordering), prices)
        assert snapshot.totals == baseline.totals
        assert [
            (b.asset_key, b.total_amount, b.total_usd_value)
            for b in snapshot.balances
        ] == [
            (b.asset_key, b.total_amount, b.total_usd_value)
            for b in baseline.balances
        ]


def test_per_network_changes_do_not_depend_on_record_order() -> None:
    """Networks carrying their own market data give one stable change."""
    records = [
        _record(
            "USDT",
            "100",
            blockchain="ethereum",
            current_price="1",
            change="10",
        ),
        _record(
            "USDT",
            "100",
            blockchain="tron",
            current_price="1",
            change="-10",
        ),
    ]

    results = set()
    for ordering in permutations(records):
        snapshot = build_portfolio_snapshot(list(ordering), {})
        balance = snapshot.balances[0]
        results.add(
            (
                balance.change_percent_24h,
                balance.change_24h,
                snapshot.totals.change_24h,
                snapshot.totals.change_percent_24h,
            )
        )

    assert len(results) == 1
    percent, change, total_change, total_percent = results.pop()
    assert percent == 0
    assert change == 0
    assert total_change == 0
    assert total_percent == 0


def test_change_is_weighted_by_network_value() -> None:
    """Each network's change counts in proportion to its value."""
    records = [
        _record(
            "ETH",
            "3",
            blockchain="ethereum",
            current_price="1000",
            change="4",
        ),
        _record(
            "ETH",
            "1",
            blockchain="arbitrum",
            current_price="1000",
            change="-8",
        ),
    ]

    snapshot = build_portfolio_snapshot(records, {})

    balance = snapshot.balances[0]
    assert balance.change_24h == Decimal("40")
    assert balance.change_percent_24h == Decimal("1")
    assert snapshot.totals.change_24h == Decimal("40")
    assert snapshot.totals.change_percent_24h == Decimal("1")
