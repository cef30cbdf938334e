"""Net exposure across an underlying's derivative holdings and open orders.

Callers may pass either the underlying or any one of its contracts as the
target; both resolve to the same underlying ticker. Only derivative
instruments contribute: a holding or order in the underlying itself is
ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import TypeAlias

from .types import ZERO, InstrumentId, OpenOrder, PositionHolding

HoldingsInput: TypeAlias = (
    Mapping[InstrumentId, PositionHolding] | Iterable[PositionHolding] | None
)
OpenOrdersInput: TypeAlias = Iterable[OpenOrder] | None


def _iter_holdings(holdings: HoldingsInput) -> Iterable[PositionHolding]:
    if holdings is None:
        return ()
    if isinstance(holdings, Mapping):
        return holdings.values()
    return holdings


def _is_derivative_of(instrument: InstrumentId, target_symbol: str) -> bool:
    return (
        instrument.underlying is not None
        and instrument.underlying.value == target_symbol
    )


def holding_quantity(
    holdings: HoldingsInput,
    target: InstrumentId,
    *,
    include_long: bool,
    include_short: bool,
) -> Decimal:
    """Sum absolute held quantity of invested contracts on ``target``'s underlying."""
    target_symbol = target.target_symbol
    total = ZERO
    for holding in _iter_holdings(holdings):
        if not holding.is_invested:
            continue
        if not _is_derivative_of(holding.instrument, target_symbol):
            continue
        if include_long and holding.is_long:
            total += holding.absolute_quantity
        if include_short and holding.is_short:
            total += holding.absolute_quantity
    return total


def open_order_quantity(
    open_orders: OpenOrdersInput,
    target: InstrumentId,
    *,
    include_long: bool,
    include_short: bool,
) -> Decimal:
    """Sum absolute pending quantity of open orders on ``target``'s underlying.

    The sign of the order's remaining quantity decides buy (long) vs sell
    (short) intent, regardless of the current holding sign.
    """
    target_symbol = target.target_symbol
    total = ZERO
    for order in open_orders or ():
        if not _is_derivative_of(order.instrument, target_symbol):
            continue
        remaining = order.remaining_quantity
        if include_long and remaining > 0:
            total += order.absolute_quantity
        if include_short and remaining < 0:
            total += order.absolute_quantity
    return total


def net_exposure(
    holdings: HoldingsInput,
    open_orders: OpenOrdersInput,
    target: InstrumentId,
) -> Decimal:
    """Signed net contract exposure: positive is net long, negative net short.

    Each side is summed separately, so one-pass iterables are read into
    tuples first.
    """
    holdings = tuple(_iter_holdings(holdings))
    open_orders = tuple(open_orders or ())
    return (
        holding_quantity(holdings, target, include_long=True, include_short=False)
        - holding_quantity(holdings, target, include_long=False, include_short=True)
        + open_order_quantity(
            open_orders, target, include_long=True, include_short=False
        )
        - open_order_quantity(
            open_orders, target, include_long=False, include_short=True
        )
    )


def option_holdings(
    holdings: HoldingsInput,
    underlying: InstrumentId,
) -> list[PositionHolding]:
    """Invested derivative holdings written on ``underlying``, in ledger order."""
    target_symbol = underlying.target_symbol
    return [
        h
        for h in _iter_holdings(holdings)
        if h.is_invested and _is_derivative_of(h.instrument, target_symbol)
    ]


def pending_quantity(
    holdings: HoldingsInput,
    open_orders: OpenOrdersInput,
    instrument: InstrumentId,
) -> Decimal:
    """Held quantity of one instrument plus the remainder of its open orders.

    This is the quantity an execution layer already "owns" for the
    instrument before sizing a new order against a target.
    """
    held = ZERO
    for holding in _iter_holdings(holdings):
        if holding.instrument == instrument:
            held += holding.quantity
    pending = sum(
        (o.remaining_quantity for o in open_orders or () if o.instrument == instrument),
        ZERO,
    )
    return held + pending
