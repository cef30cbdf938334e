from datetime import date, datetime
from pathlib import Path

import pytest

from option_exposure.core import InstrumentId
from option_exposure.data_adapters import SnapshotConfigError, snapshot_from_config

SPY = InstrumentId.equity("SPY")
QQQ = InstrumentId.equity("QQQ")


def _config() -> dict:
    return {
        "time": "2024-01-10T15:30:00",
        "chains": [
            {
                "underlying": "SPY",
                "contracts": [
                    {"contract": "C0119", "expiry": "2024-01-19", "type": "call", "strike": 470},
                    {"contract": "P0119", "expiry": "2024-01-19", "type": "put", "strike": 460},
                    {"contract": "C0216", "expiry": date(2024, 2, 16), "type": "C", "strike": 480},
                ],
            }
        ],
        "holdings": [
            {"instrument": "C0119", "underlying": "SPY", "quantity": 10},
            {"instrument": "P0119", "underlying": "SPY", "quantity": -4},
            {"instrument": "SPY", "quantity": 100},
        ],
        "open_orders": [
            {"instrument": "C0216", "underlying": "SPY", "quantity": 5, "order_id": 1},
            {
                "instrument": "P0119",
                "underlying": "SPY",
                "quantity": -3,
                "filled_quantity": -1,
            },
        ],
    }


def test_snapshot_from_config_builds_queryable_snapshot():
    snapshot = snapshot_from_config(_config())
    assert snapshot.market_slice.time == datetime(2024, 1, 10, 15, 30)
    assert len(snapshot.holdings) == 3
    assert SPY in snapshot.holdings
    assert snapshot.open_orders[0].order_id == 1

    # 10 - 4 + 5 - 2
    assert snapshot.net_exposure(SPY) == 9
    nearest = snapshot.select_by_expiry_distance(SPY, 0)
    assert [c.instrument.value for c in nearest] == ["C0119", "P0119"]
    assert snapshot.select_by_expiry_distance(SPY, 2) is None


def test_snapshot_without_chains_means_no_option_data():
    config = _config()
    del config["chains"]
    snapshot = snapshot_from_config(config)
    assert snapshot.market_slice.option_chains is None
    assert snapshot.locate_chain(SPY) is None
    assert snapshot.net_exposure(SPY) == 9


def test_snapshot_with_empty_chain_list():
    snapshot = snapshot_from_config({"chains": []})
    assert snapshot.market_slice.option_chains == {}
    assert snapshot.market_slice.time is None
    assert snapshot.net_exposure(SPY) == 0


def test_chain_csv_resolved_against_base_dir(tmp_path: Path):
    (tmp_path / "chains").mkdir()
    (tmp_path / "chains" / "qqq.csv").write_text(
        "expiration,type,strike,bid,ask\n"
        "2024-03-15,C,400,5.0,5.2\n"
        "2024-01-19,P,390,1.0,1.1\n",
        encoding="utf-8",
    )
    config = {"chains": [{"underlying": "QQQ", "csv": "chains/qqq.csv"}]}
    snapshot = snapshot_from_config(config, base_dir=tmp_path)

    chain = snapshot.locate_chain(QQQ)
    assert len(chain) == 2
    later = snapshot.select_by_expiry_distance(QQQ, 1)
    assert [(c.strike, c.bid_price) for c in later] == [(400.0, 5.0)]


def test_missing_chain_csv_raises(tmp_path: Path):
    config = {"chains": [{"underlying": "QQQ", "csv": "missing.csv"}]}
    with pytest.raises(FileNotFoundError):
        snapshot_from_config(config, base_dir=tmp_path)


@pytest.mark.parametrize(
    ("config", "message"),
    [
        ({"chains": {"underlying": "SPY"}}, "chains must be a list"),
        ({"chains": [{"contracts": []}]}, "underlying"),
        ({"chains": [{"underlying": "SPY"}]}, "contracts' or 'csv'"),
        ({"chains": [{"underlying": "SPY", "contracts": "x"}]}, "must be a list"),
        ({"holdings": [{"quantity": 1}]}, "instrument"),
        ({"open_orders": [{"instrument": "X"}]}, "quantity"),
        ({"holdings": ["SPY"]}, "expected a mapping"),
        ({"time": "yesterday-ish"}, "time"),
        (
            {"holdings": [{"instrument": "SPY", "quantity": 1}, {"instrument": "SPY", "quantity": 2}]},
            "duplicate holding",
        ),
        (
            {"chains": [{"underlying": "SPY", "contracts": []}, {"underlying": "SPY", "contracts": []}]},
            "duplicate option chain",
        ),
    ],
)
def test_bad_snapshot_shapes_raise(config, message):
    with pytest.raises(SnapshotConfigError, match=message):
        snapshot_from_config(config)
