"""Option position netting and expiry-based contract selection."""

from .core import (
    HostSnapshot,
    InstrumentId,
    MarketSlice,
    OpenOrder,
    OptionChain,
    OptionContract,
    OptionType,
    PositionHolding,
    expirations,
    filter_by_days_to_expiry,
    holding_quantity,
    locate_chain,
    net_exposure,
    open_order_quantity,
    option_holdings,
    pending_quantity,
    select_by_expiry_distance,
)

__all__ = [
    "InstrumentId",
    "OptionType",
    "OptionContract",
    "OptionChain",
    "MarketSlice",
    "PositionHolding",
    "OpenOrder",
    "HostSnapshot",
    "locate_chain",
    "expirations",
    "select_by_expiry_distance",
    "filter_by_days_to_expiry",
    "holding_quantity",
    "open_order_quantity",
    "net_exposure",
    "option_holdings",
    "pending_quantity",
]
