"""Frame and config boundaries feeding the query core."""

from .options_chain import (
    OptionsChainAdapterError,
    chain_from_frame,
    chain_to_frame,
    normalize_chain_frame,
)
from .snapshot import SnapshotConfigError, snapshot_from_config

__all__ = [
    "OptionsChainAdapterError",
    "SnapshotConfigError",
    "chain_from_frame",
    "chain_to_frame",
    "normalize_chain_frame",
    "snapshot_from_config",
]
