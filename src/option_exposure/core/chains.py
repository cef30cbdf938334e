"""Option-chain lookup and expiry-based contract selection.

All helpers are pure reads over the slice handed in by the host. A missing
chain or a missing expiry is an expected, per-tick condition and is reported
as ``None`` rather than raised.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from .types import InstrumentId, MarketSlice, OptionChain, OptionContract

logger = logging.getLogger(__name__)


def locate_chain(
    market_slice: MarketSlice | None,
    underlying: InstrumentId,
) -> OptionChain | None:
    """Return the chain quoted for ``underlying`` in the slice, if any.

    Chains are scanned in the order the host inserted them and the first key
    whose ``underlying`` equals the requested instrument wins.
    """
    if market_slice is None or market_slice.option_chains is None:
        logger.debug("No option chains in current slice (requested %s)", underlying)
        return None

    for key, chain in market_slice.option_chains.items():
        if key.underlying == underlying:
            return chain

    logger.debug("No option chain keyed to underlying %s", underlying)
    return None


def expirations(chain: OptionChain) -> list[date]:
    """Distinct expiry dates of ``chain`` in ascending order."""
    seen: list[date] = []
    for contract in chain:
        if contract.expiry not in seen:
            seen.append(contract.expiry)
    return sorted(seen)


def select_by_expiry_distance(
    market_slice: MarketSlice | None,
    underlying: InstrumentId,
    distance: int,
) -> list[OptionContract] | None:
    """Return every contract sharing the ``distance``-th nearest expiry.

    ``distance=0`` is the nearest expiry the chain currently contains. Returns
    ``None`` when there is no chain for ``underlying`` or fewer than
    ``distance + 1`` distinct expiries.
    """
    if distance < 0:
        raise ValueError(f"distance must be >= 0, got {distance}")

    chain = locate_chain(market_slice, underlying)
    if chain is None:
        return None

    expiries = expirations(chain)
    if len(expiries) <= distance:
        logger.debug(
            "Only %d expiries for %s, cannot select distance %d",
            len(expiries),
            underlying,
            distance,
        )
        return None

    target_expiry = expiries[distance]
    selected = [c for c in chain if c.expiry == target_expiry]
    return sorted(selected, key=lambda c: c.expiry)


def filter_by_days_to_expiry(
    chain: OptionChain,
    as_of: date | datetime,
    min_days: int,
    max_days: int,
) -> list[OptionContract]:
    """Contracts expiring within ``[min_days, max_days]`` calendar days.

    The result is ordered by expiry; contracts sharing an expiry keep chain
    order.
    """
    if min_days > max_days:
        raise ValueError(
            f"min_days ({min_days}) must be <= max_days ({max_days})"
        )
    window = [
        c for c in chain if min_days <= c.days_to_expiry(as_of) <= max_days
    ]
    return sorted(window, key=lambda c: c.expiry)
