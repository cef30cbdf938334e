"""Accessor bundling one consistent host snapshot for repeated queries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from .chains import locate_chain, select_by_expiry_distance
from .exposure import (
    holding_quantity,
    net_exposure,
    open_order_quantity,
    option_holdings,
    pending_quantity,
)
from .types import (
    InstrumentId,
    MarketSlice,
    OpenOrder,
    OptionChain,
    OptionContract,
    PositionHolding,
)


@dataclass(frozen=True)
class HostSnapshot:
    """Market slice, portfolio ledger and open orders captured at one instant.

    The accessor holds no state of its own; every method delegates to the
    matching pure function in ``core.chains`` / ``core.exposure``.
    """

    market_slice: MarketSlice | None = None
    holdings: Mapping[InstrumentId, PositionHolding] = field(default_factory=dict)
    open_orders: tuple[OpenOrder, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.holdings, Mapping):
            ledger: dict[InstrumentId, PositionHolding] = {}
            for holding in self.holdings:
                if holding.instrument in ledger:
                    raise ValueError(
                        f"duplicate holding for instrument {holding.instrument.value!r}"
                    )
                ledger[holding.instrument] = holding
            object.__setattr__(self, "holdings", ledger)
        object.__setattr__(self, "open_orders", tuple(self.open_orders))

    def locate_chain(self, underlying: InstrumentId) -> OptionChain | None:
        return locate_chain(self.market_slice, underlying)

    def select_by_expiry_distance(
        self, underlying: InstrumentId, distance: int
    ) -> list[OptionContract] | None:
        return select_by_expiry_distance(self.market_slice, underlying, distance)

    def holding_quantity(
        self,
        target: InstrumentId,
        *,
        include_long: bool,
        include_short: bool,
    ) -> Decimal:
        return holding_quantity(
            self.holdings,
            target,
            include_long=include_long,
            include_short=include_short,
        )

    def open_order_quantity(
        self,
        target: InstrumentId,
        *,
        include_long: bool,
        include_short: bool,
    ) -> Decimal:
        return open_order_quantity(
            self.open_orders,
            target,
            include_long=include_long,
            include_short=include_short,
        )

    def net_exposure(self, target: InstrumentId) -> Decimal:
        return net_exposure(self.holdings, self.open_orders, target)

    def option_holdings(self, underlying: InstrumentId) -> list[PositionHolding]:
        return option_holdings(self.holdings, underlying)

    def pending_quantity(self, instrument: InstrumentId) -> Decimal:
        return pending_quantity(self.holdings, self.open_orders, instrument)
