"""Conversion between ``OptionChain`` records and long-format pandas frames.

Frames at this boundary come from CSV exports or vendor downloads with
arbitrary column names. ``chain_from_frame`` is responsible for:

1. renaming known vendor aliases to canonical column names,
2. coercing key fields to stable dtypes, and
3. validating required columns before building contract records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import pandas as pd

from option_exposure.contracts.options_chain import (
    ALIAS_OVERRIDES,
    ASK_PRICE,
    BID_PRICE,
    CANONICAL_COLUMNS,
    CANONICAL_REQUIRED_COLUMNS,
    CONTRACT,
    EXPIRY_DATE,
    NUMERIC_COLUMNS,
    OPEN_INTEREST,
    OPTION_TYPE,
    OPTION_TYPE_LABELS,
    STRIKE,
    VOLUME,
)
from option_exposure.core.types import (
    InstrumentId,
    OptionChain,
    OptionContract,
    OptionType,
)

logger = logging.getLogger(__name__)


class OptionsChainAdapterError(ValueError):
    """Raised when options-chain normalization/validation fails."""


def _coerce_numeric(series: pd.Series) -> pd.Series:
    return pd.to_numeric(
        series.astype(str).str.strip().str.replace(",", "", regex=False),
        errors="coerce",
    )


def _canonicalize_option_type(series: pd.Series) -> pd.Series:
    normalized = series.astype(str).str.strip().str.upper()
    return normalized.replace({"CALL": "C", "PUT": "P"})


def _resolve_alias_column(
    *,
    columns: Sequence[str],
    aliases: Sequence[str],
) -> str | None:
    for alias in aliases:
        if alias in columns:
            return alias
    return None


def normalize_chain_frame(
    raw: pd.DataFrame,
    *,
    aliases: Mapping[str, Sequence[str]] = ALIAS_OVERRIDES,
) -> pd.DataFrame:
    """Rename aliases, coerce dtypes and validate a long-format chain frame."""
    df = raw.copy()
    columns = list(df.columns)

    rename_map: dict[str, str] = {}
    for canonical_name, alias_list in aliases.items():
        if canonical_name in columns:
            continue
        source_col = _resolve_alias_column(columns=columns, aliases=alias_list)
        if source_col is not None:
            rename_map[source_col] = canonical_name
    if rename_map:
        df = df.rename(columns=rename_map)

    missing_required = [c for c in CANONICAL_REQUIRED_COLUMNS if c not in df.columns]
    if missing_required:
        raise OptionsChainAdapterError(
            f"missing required canonical columns: {missing_required}"
        )

    if df.empty:
        return df

    df[EXPIRY_DATE] = pd.to_datetime(
        df[EXPIRY_DATE].astype(str).str.strip(), errors="coerce"
    ).dt.date
    if df[EXPIRY_DATE].isna().any():
        raise OptionsChainAdapterError(
            "could not parse one or more expiry_date values"
        )

    df[OPTION_TYPE] = _canonicalize_option_type(df[OPTION_TYPE])
    bad_option_types = sorted(set(df[OPTION_TYPE]) - {"C", "P"})
    if bad_option_types:
        raise OptionsChainAdapterError(
            "option_type must be C/P (or call/put). "
            f"Found invalid labels: {bad_option_types}"
        )

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = _coerce_numeric(df[col])
    if df[STRIKE].isna().any():
        raise OptionsChainAdapterError("strike must be numeric for every row")

    return df


def _contract_symbol(
    underlying: InstrumentId, expiry, option_type: str, strike: float
) -> str:
    # OCC-style root: TICKER YYMMDD C/P strike*1000 padded to 8 digits
    return (
        f"{underlying.value} {expiry:%y%m%d}{option_type}"
        f"{int(round(strike * 1000)):08d}"
    )


def _optional(value, cast):
    if value is None or pd.isna(value):
        return None
    return cast(value)


def chain_from_frame(frame: pd.DataFrame, underlying: InstrumentId) -> OptionChain:
    """Build an ``OptionChain`` for ``underlying`` from a long-format frame.

    Row order is kept as contract order.
    """
    df = normalize_chain_frame(frame)
    has_contract = CONTRACT in df.columns

    contracts: list[OptionContract] = []
    for row in df.to_dict(orient="records"):
        side = row[OPTION_TYPE]
        strike = float(row[STRIKE])
        symbol = row.get(CONTRACT) if has_contract else None
        if symbol is None or pd.isna(symbol) or not str(symbol).strip():
            symbol = _contract_symbol(underlying, row[EXPIRY_DATE], side, strike)
        contracts.append(
            OptionContract(
                instrument=InstrumentId.option(str(symbol).strip(), underlying),
                expiry=row[EXPIRY_DATE],
                strike=strike,
                option_type=OptionType.CALL if side == "C" else OptionType.PUT,
                bid_price=_optional(row.get(BID_PRICE), float),
                ask_price=_optional(row.get(ASK_PRICE), float),
                open_interest=_optional(row.get(OPEN_INTEREST), int),
                volume=_optional(row.get(VOLUME), int),
            )
        )

    logger.debug("Built %s chain with %d contracts", underlying, len(contracts))
    return OptionChain(underlying=underlying, contracts=tuple(contracts))


def chain_to_frame(chain: OptionChain) -> pd.DataFrame:
    """Flatten ``chain`` to a canonical long-format frame (one row per contract)."""
    rows = [
        {
            CONTRACT: c.instrument.value,
            EXPIRY_DATE: c.expiry,
            OPTION_TYPE: OPTION_TYPE_LABELS[c.option_type.value],
            STRIKE: c.strike,
            BID_PRICE: c.bid_price,
            ASK_PRICE: c.ask_price,
            OPEN_INTEREST: c.open_interest,
            VOLUME: c.volume,
        }
        for c in chain
    ]
    return pd.DataFrame(rows, columns=list(CANONICAL_COLUMNS))
