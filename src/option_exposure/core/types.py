"""Value records for instruments, option chains, holdings and open orders.

The host runtime owns and mutates the real ledgers; these records are the
read-only views it hands to the query functions for one call. Instruments are
modelled as a flat record plus an optional ``underlying`` link instead of a
security class hierarchy: derivatives carry an underlying, underlyings do not.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import TypeAlias, cast

QuantityInput: TypeAlias = Decimal | int | float | str

ZERO = Decimal(0)


def to_quantity(value: QuantityInput) -> Decimal:
    """Coerce a host quantity to ``Decimal`` without float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("quantity must be numeric, got bool")
    return Decimal(str(value))


class OptionType(StrEnum):
    """Canonical option side labels."""

    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class InstrumentId:
    """Identifier of a tradable instrument.

    Attributes:
        value: Display/ticker string (``"SPY"``, ``"SPY 240119C00470000"``).
        underlying: Base instrument for derivative contracts, ``None`` for
            underlyings themselves.
    """

    value: str
    underlying: InstrumentId | None = None

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("value must be non-empty")
        if self.underlying is not None and self.underlying.has_underlying:
            raise ValueError("underlying must not itself be a derivative")

    @classmethod
    def equity(cls, ticker: str) -> InstrumentId:
        return cls(value=ticker)

    @classmethod
    def option(cls, value: str, underlying: InstrumentId | str) -> InstrumentId:
        if isinstance(underlying, str):
            underlying = cls.equity(underlying)
        return cls(value=value, underlying=underlying)

    @property
    def has_underlying(self) -> bool:
        return self.underlying is not None

    @property
    def target_symbol(self) -> str:
        """Ticker that exposure queries aggregate over for this instrument."""
        if self.underlying is not None:
            return self.underlying.value
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OptionContract:
    """One quoted option contract inside a chain snapshot."""

    instrument: InstrumentId
    expiry: date
    strike: float
    option_type: OptionType
    bid_price: float | None = None
    ask_price: float | None = None
    open_interest: int | None = None
    volume: int | None = None

    def __post_init__(self) -> None:
        if not self.instrument.has_underlying:
            raise ValueError(
                f"option contract {self.instrument.value!r} has no underlying"
            )
        if isinstance(self.expiry, datetime):
            object.__setattr__(self, "expiry", self.expiry.date())
        if not isinstance(self.option_type, OptionType):
            object.__setattr__(self, "option_type", OptionType(self.option_type))

    @property
    def underlying(self) -> InstrumentId:
        return cast(InstrumentId, self.instrument.underlying)

    @property
    def mid_price(self) -> float | None:
        if self.bid_price is None or self.ask_price is None:
            return None
        return 0.5 * (self.bid_price + self.ask_price)

    def days_to_expiry(self, as_of: date | datetime) -> int:
        """Calendar days from ``as_of`` to expiry (negative once expired)."""
        if isinstance(as_of, datetime):
            as_of = as_of.date()
        return (self.expiry - as_of).days


@dataclass(frozen=True)
class OptionChain:
    """All contracts quoted for one underlying at one instant.

    ``contracts`` keeps the order supplied by the host feed.
    """

    underlying: InstrumentId
    contracts: tuple[OptionContract, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "contracts", tuple(self.contracts))

    def __iter__(self) -> Iterator[OptionContract]:
        return iter(self.contracts)

    def __len__(self) -> int:
        return len(self.contracts)


@dataclass(frozen=True)
class MarketSlice:
    """Market data available at one evaluation tick.

    ``option_chains`` is keyed by the canonical option instrument of each
    chain (its ``underlying`` names the chain's underlying). ``None`` means the
    feed delivered no option data this tick.
    """

    time: datetime | None = None
    option_chains: Mapping[InstrumentId, OptionChain] | None = None

    @classmethod
    def from_chains(
        cls,
        chains: list[OptionChain] | tuple[OptionChain, ...],
        *,
        time: datetime | None = None,
    ) -> MarketSlice:
        """Key each chain by a canonical ``?<TICKER>`` option instrument.

        At most one chain per underlying is accepted.
        """
        keyed: dict[InstrumentId, OptionChain] = {}
        for chain in chains:
            key = InstrumentId.option(f"?{chain.underlying.value}", chain.underlying)
            if key in keyed:
                raise ValueError(
                    f"duplicate option chain for underlying {chain.underlying.value!r}"
                )
            keyed[key] = chain
        return cls(time=time, option_chains=keyed)


@dataclass(frozen=True)
class PositionHolding:
    """Current holding of one instrument; ``quantity`` is signed."""

    instrument: InstrumentId
    quantity: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_quantity(self.quantity))

    @property
    def is_long(self) -> bool:
        return self.quantity > 0

    @property
    def is_short(self) -> bool:
        return self.quantity < 0

    @property
    def is_invested(self) -> bool:
        return self.quantity != 0

    @property
    def absolute_quantity(self) -> Decimal:
        return abs(self.quantity)


@dataclass(frozen=True)
class OpenOrder:
    """Submitted order that is not yet completely filled.

    ``quantity`` is the signed order size (positive buys, negative sells).
    ``filled_quantity`` is the signed part already executed, which the host
    ledger reports as holdings; only the remainder is still pending.
    """

    instrument: InstrumentId
    quantity: Decimal
    filled_quantity: Decimal = ZERO
    order_id: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        quantity = to_quantity(self.quantity)
        filled = to_quantity(self.filled_quantity)
        if filled != 0 and (filled * quantity < 0 or abs(filled) > abs(quantity)):
            raise ValueError(
                f"filled_quantity {filled} inconsistent with order quantity {quantity}"
            )
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "filled_quantity", filled)

    @property
    def remaining_quantity(self) -> Decimal:
        return self.quantity - self.filled_quantity

    @property
    def absolute_quantity(self) -> Decimal:
        return abs(self.remaining_quantity)
