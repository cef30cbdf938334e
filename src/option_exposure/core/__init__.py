"""Chain lookup, expiry selection and exposure netting over host snapshots."""

from .chains import (
    expirations,
    filter_by_days_to_expiry,
    locate_chain,
    select_by_expiry_distance,
)
from .exposure import (
    holding_quantity,
    net_exposure,
    open_order_quantity,
    option_holdings,
    pending_quantity,
)
from .snapshot import HostSnapshot
from .types import (
    InstrumentId,
    MarketSlice,
    OpenOrder,
    OptionChain,
    OptionContract,
    OptionType,
    PositionHolding,
    to_quantity,
)

__all__ = [
    "InstrumentId",
    "OptionType",
    "OptionContract",
    "OptionChain",
    "MarketSlice",
    "PositionHolding",
    "OpenOrder",
    "to_quantity",
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
