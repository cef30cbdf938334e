from datetime import date, datetime

import pytest

from option_exposure.core import (
    InstrumentId,
    MarketSlice,
    OptionChain,
    OptionContract,
    OptionType,
    expirations,
    filter_by_days_to_expiry,
    locate_chain,
    select_by_expiry_distance,
)

SPY = InstrumentId.equity("SPY")
QQQ = InstrumentId.equity("QQQ")


def _contract(
    name: str,
    expiry: date,
    *,
    underlying: InstrumentId = SPY,
    strike: float = 470.0,
    option_type: OptionType = OptionType.CALL,
) -> OptionContract:
    return OptionContract(
        instrument=InstrumentId.option(name, underlying),
        expiry=expiry,
        strike=strike,
        option_type=option_type,
    )


@pytest.fixture
def spy_chain() -> OptionChain:
    return OptionChain(
        underlying=SPY,
        contracts=(
            _contract("C-0119", date(2024, 1, 19)),
            _contract("C-0315", date(2024, 3, 15)),
            _contract("P-0119", date(2024, 1, 19), option_type=OptionType.PUT),
            _contract("C-0216", date(2024, 2, 16)),
        ),
    )


@pytest.fixture
def spy_slice(spy_chain: OptionChain) -> MarketSlice:
    return MarketSlice.from_chains([spy_chain], time=datetime(2024, 1, 10, 15, 30))


def test_locate_chain_without_slice_returns_none():
    assert locate_chain(None, SPY) is None


def test_locate_chain_without_option_data_returns_none():
    assert locate_chain(MarketSlice(option_chains=None), SPY) is None
    assert locate_chain(MarketSlice(option_chains={}), SPY) is None


def test_locate_chain_matches_on_key_underlying(spy_slice, spy_chain):
    assert locate_chain(spy_slice, SPY) is spy_chain
    assert locate_chain(spy_slice, QQQ) is None


def test_locate_chain_returns_first_match_in_insertion_order():
    first = OptionChain(underlying=SPY, contracts=(_contract("A", date(2024, 1, 19)),))
    second = OptionChain(underlying=SPY, contracts=(_contract("B", date(2024, 1, 19)),))
    market_slice = MarketSlice(
        option_chains={
            InstrumentId.option("?SPY", SPY): first,
            InstrumentId.option("SPY_W", SPY): second,
        }
    )
    assert locate_chain(market_slice, SPY) is first


def test_locate_chain_ignores_chain_whose_key_value_matches_ticker():
    # Keys are matched through their underlying, not their own ticker.
    chain = OptionChain(underlying=SPY)
    market_slice = MarketSlice(option_chains={InstrumentId.option("SPY", QQQ): chain})
    assert locate_chain(market_slice, SPY) is None


def test_expirations_are_distinct_and_ascending(spy_chain):
    assert expirations(spy_chain) == [
        date(2024, 1, 19),
        date(2024, 2, 16),
        date(2024, 3, 15),
    ]


def test_select_nearest_expiry_returns_all_contracts_on_that_date(spy_slice):
    selected = select_by_expiry_distance(spy_slice, SPY, 0)
    assert [c.instrument.value for c in selected] == ["C-0119", "P-0119"]


def test_select_second_expiry_returns_single_contract(spy_slice):
    selected = select_by_expiry_distance(spy_slice, SPY, 1)
    assert [c.instrument.value for c in selected] == ["C-0216"]


def test_select_third_expiry(spy_slice):
    selected = select_by_expiry_distance(spy_slice, SPY, 2)
    assert [c.expiry for c in selected] == [date(2024, 3, 15)]


def test_select_beyond_distinct_expiries_returns_none(spy_slice):
    # Duplicate 01-19 expiries must not count twice.
    assert select_by_expiry_distance(spy_slice, SPY, 3) is None


def test_select_without_chain_returns_none(spy_slice):
    assert select_by_expiry_distance(spy_slice, QQQ, 0) is None
    assert select_by_expiry_distance(None, SPY, 0) is None


def test_select_empty_chain_returns_none():
    market_slice = MarketSlice.from_chains([OptionChain(underlying=SPY)])
    assert select_by_expiry_distance(market_slice, SPY, 0) is None


def test_select_preserves_chain_order_among_same_expiry():
    expiry = date(2024, 1, 19)
    chain = OptionChain(
        underlying=SPY,
        contracts=tuple(
            _contract(f"C{strike:g}", expiry, strike=strike)
            for strike in (480.0, 460.0, 470.0)
        ),
    )
    selected = select_by_expiry_distance(MarketSlice.from_chains([chain]), SPY, 0)
    assert [c.strike for c in selected] == [480.0, 460.0, 470.0]


def test_select_negative_distance_raises(spy_slice):
    with pytest.raises(ValueError, match="distance"):
        select_by_expiry_distance(spy_slice, SPY, -1)


def test_filter_by_days_to_expiry_is_inclusive_and_sorted(spy_chain):
    as_of = date(2024, 1, 10)
    # 01-19 -> 9 days, 02-16 -> 37 days, 03-15 -> 65 days
    window = filter_by_days_to_expiry(spy_chain, as_of, 9, 37)
    assert [c.instrument.value for c in window] == ["C-0119", "P-0119", "C-0216"]


def test_filter_by_days_to_expiry_accepts_datetime(spy_chain):
    window = filter_by_days_to_expiry(spy_chain, datetime(2024, 1, 10, 16, 0), 60, 90)
    assert [c.instrument.value for c in window] == ["C-0315"]


def test_filter_by_days_to_expiry_rejects_inverted_window(spy_chain):
    with pytest.raises(ValueError, match="min_days"):
        filter_by_days_to_expiry(spy_chain, date(2024, 1, 10), 30, 10)
