#!/usr/bin/env python
"""Evaluate exposure and expiry-selection queries against a snapshot file."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from option_exposure.apps._cli import (
    add_print_config_arg,
    collect_logging_overrides,
    dumps,
    print_config,
)
from option_exposure.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    config_dir,
    setup_logging_from_config,
)
from option_exposure.core import HostSnapshot, InstrumentId
from option_exposure.data_adapters import snapshot_from_config

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "underlying": None,
    "distance": 0,
    "snapshot": {
        "time": None,
        "chains": None,
        "holdings": [],
        "open_orders": [],
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Query net option exposure and expiry selection for a snapshot."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)

    parser.add_argument("--underlying", type=str, default=None)
    parser.add_argument(
        "--distance",
        type=int,
        default=None,
        help="Zero-based expiry distance (0 = nearest expiry in the chain).",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.underlying is not None:
        overrides["underlying"] = args.underlying
    if args.distance is not None:
        overrides["distance"] = args.distance

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides
    return overrides


def run_query(
    snapshot: HostSnapshot,
    underlying: InstrumentId,
    distance: int,
) -> dict[str, Any]:
    """Answer the exposure and expiry questions for ``underlying``."""
    selected = snapshot.select_by_expiry_distance(underlying, distance)
    return {
        "underlying": underlying.value,
        "net_exposure": snapshot.net_exposure(underlying),
        "long_holdings": snapshot.holding_quantity(
            underlying, include_long=True, include_short=False
        ),
        "short_holdings": snapshot.holding_quantity(
            underlying, include_long=False, include_short=True
        ),
        "buy_orders": snapshot.open_order_quantity(
            underlying, include_long=True, include_short=False
        ),
        "sell_orders": snapshot.open_order_quantity(
            underlying, include_long=False, include_short=True
        ),
        "distance": distance,
        "expiry": selected[0].expiry if selected else None,
        "contracts": (
            None if selected is None else [c.instrument.value for c in selected]
        ),
    }


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    ticker = config.get("underlying")
    if not ticker:
        raise ValueError("underlying must be set (config key or --underlying).")
    distance = int(config.get("distance", 0))

    snapshot = snapshot_from_config(
        config.get("snapshot") or {},
        base_dir=config_dir(args.config),
    )
    result = run_query(snapshot, InstrumentId.equity(str(ticker)), distance)

    logger.info("Underlying:   %s", result["underlying"])
    logger.info("Net exposure: %s", result["net_exposure"])
    if result["contracts"] is None:
        logger.info("No contracts at expiry distance %d", distance)
    else:
        logger.info(
            "Expiry #%d:    %s (%d contracts)",
            distance,
            result["expiry"],
            len(result["contracts"]),
        )
    logger.debug("Query result:\n%s", dumps(result))


if __name__ == "__main__":
    main()
