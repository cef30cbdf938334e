"""Canonical long-format options-chain columns used at the frame boundary.

``OptionChain`` records convert to and from pandas frames carrying these
columns, one row per contract.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Canonical long-format options-chain fields
# ---------------------------------------------------------------------------

CONTRACT = "contract"
EXPIRY_DATE = "expiry_date"
OPTION_TYPE = "option_type"
STRIKE = "strike"
BID_PRICE = "bid_price"
ASK_PRICE = "ask_price"
OPEN_INTEREST = "open_interest"
VOLUME = "volume"

CANONICAL_REQUIRED_COLUMNS: tuple[str, ...] = (
    EXPIRY_DATE,
    OPTION_TYPE,
    STRIKE,
)

CANONICAL_OPTIONAL_COLUMNS: tuple[str, ...] = (
    CONTRACT,
    BID_PRICE,
    ASK_PRICE,
    OPEN_INTEREST,
    VOLUME,
)

CANONICAL_COLUMNS: tuple[str, ...] = (
    CONTRACT,
    EXPIRY_DATE,
    OPTION_TYPE,
    STRIKE,
    BID_PRICE,
    ASK_PRICE,
    OPEN_INTEREST,
    VOLUME,
)

NUMERIC_COLUMNS: tuple[str, ...] = (
    STRIKE,
    BID_PRICE,
    ASK_PRICE,
    OPEN_INTEREST,
    VOLUME,
)

# Chain frames label sides with single letters.
OPTION_TYPE_LABELS: dict[str, str] = {"call": "C", "put": "P"}


# ---------------------------------------------------------------------------
# Vendor aliases resolved to canonical fields (first match wins)
# ---------------------------------------------------------------------------

ALIAS_OVERRIDES: dict[str, tuple[str, ...]] = {
    CONTRACT: ("contract_symbol", "contractSymbol", "symbol"),
    EXPIRY_DATE: ("expiry", "expiration", "expire_date", "expiration_date"),
    OPTION_TYPE: ("type", "right", "option_type_label"),
    BID_PRICE: ("bid",),
    ASK_PRICE: ("ask",),
    OPEN_INTEREST: ("oi", "openInterest"),
}
