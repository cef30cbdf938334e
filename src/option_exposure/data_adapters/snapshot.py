"""Build a ``HostSnapshot`` from a plain (YAML-loaded) mapping.

Expected layout::

    time: 2024-01-10T15:30:00        # optional
    chains:                          # omit for "no option data this tick"
      - underlying: SPY
        contracts:                   # inline long-format rows, or
          - {expiry: 2024-01-19, type: call, strike: 470}
      - underlying: QQQ
        csv: chains/qqq.csv          # a long-format CSV export
    holdings:
      - {instrument: SPY 240119C00470000, underlying: SPY, quantity: 10}
    open_orders:
      - {instrument: SPY 240216P00450000, underlying: SPY, quantity: -3}

Holdings and orders without ``underlying`` are positions in the underlying
itself.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from option_exposure.cli.config import resolve_path
from option_exposure.core.snapshot import HostSnapshot
from option_exposure.core.types import (
    InstrumentId,
    MarketSlice,
    OpenOrder,
    OptionChain,
    PositionHolding,
)

from .options_chain import chain_from_frame

logger = logging.getLogger(__name__)


class SnapshotConfigError(ValueError):
    """Raised when a snapshot mapping has an unexpected shape."""


def _require(entry: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(entry, Mapping):
        raise SnapshotConfigError(f"{where}: expected a mapping, got {entry!r}")
    if entry.get(key) is None:
        raise SnapshotConfigError(f"{where}: missing required key '{key}'")
    return entry[key]


def _instrument(entry: Mapping[str, Any], where: str) -> InstrumentId:
    value = str(_require(entry, "instrument", where))
    underlying = entry.get("underlying")
    if underlying is None:
        return InstrumentId.equity(value)
    return InstrumentId.option(value, str(underlying))


def _load_chain(
    entry: Mapping[str, Any], index: int, base_dir: Path | None
) -> OptionChain:
    where = f"chains[{index}]"
    underlying = InstrumentId.equity(str(_require(entry, "underlying", where)))

    if entry.get("csv") is not None:
        csv_path = resolve_path(entry["csv"])
        if base_dir is not None and not csv_path.is_absolute():
            csv_path = base_dir / csv_path
        if not csv_path.exists():
            raise FileNotFoundError(f"{where}: chain CSV not found: {csv_path}")
        frame = pd.read_csv(csv_path)
        logger.info("Loaded %s chain from %s (%d rows)", underlying, csv_path, len(frame))
    elif entry.get("contracts") is not None:
        rows = entry["contracts"]
        if not isinstance(rows, list):
            raise SnapshotConfigError(f"{where}.contracts must be a list")
        frame = pd.DataFrame.from_records(rows)
    else:
        raise SnapshotConfigError(f"{where}: provide either 'contracts' or 'csv'")

    if frame.empty:
        return OptionChain(underlying=underlying)
    return chain_from_frame(frame, underlying)


def _parse_time(value: Any):
    if value is None:
        return None
    try:
        return pd.Timestamp(value).to_pydatetime()
    except (TypeError, ValueError) as e:
        raise SnapshotConfigError(f"time: cannot parse {value!r}") from e


def snapshot_from_config(
    config: Mapping[str, Any],
    *,
    base_dir: str | Path | None = None,
) -> HostSnapshot:
    """Build a ``HostSnapshot`` from ``config`` (see module docstring).

    ``base_dir`` anchors relative chain CSV paths, typically the directory of
    the YAML file the mapping came from.
    """
    base = Path(base_dir) if base_dir is not None else None

    raw_chains = config.get("chains")
    if raw_chains is None:
        option_chains = None
    elif not isinstance(raw_chains, list):
        raise SnapshotConfigError("chains must be a list")
    else:
        option_chains = [
            _load_chain(entry, i, base) for i, entry in enumerate(raw_chains)
        ]

    time = _parse_time(config.get("time"))
    if option_chains is None:
        market_slice = MarketSlice(time=time)
    else:
        try:
            market_slice = MarketSlice.from_chains(option_chains, time=time)
        except ValueError as e:
            raise SnapshotConfigError(f"chains: {e}") from e

    holdings: dict[InstrumentId, PositionHolding] = {}
    for i, entry in enumerate(config.get("holdings") or []):
        where = f"holdings[{i}]"
        instrument = _instrument(entry, where)
        if instrument in holdings:
            raise SnapshotConfigError(f"{where}: duplicate holding for {instrument}")
        holdings[instrument] = PositionHolding(
            instrument=instrument,
            quantity=_require(entry, "quantity", where),
        )

    open_orders: list[OpenOrder] = []
    for i, entry in enumerate(config.get("open_orders") or []):
        where = f"open_orders[{i}]"
        open_orders.append(
            OpenOrder(
                instrument=_instrument(entry, where),
                quantity=_require(entry, "quantity", where),
                filled_quantity=entry.get("filled_quantity", 0),
                order_id=entry.get("order_id"),
            )
        )

    logger.debug(
        "Snapshot: %s chains, %d holdings, %d open orders",
        "no" if option_chains is None else len(option_chains),
        len(holdings),
        len(open_orders),
    )
    return HostSnapshot(
        market_slice=market_slice,
        holdings=holdings,
        open_orders=tuple(open_orders),
    )
