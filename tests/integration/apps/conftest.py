from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        assert expected in capsys.readouterr().out

    return _run


@pytest.fixture
def snapshot_config() -> dict[str, Any]:
    return {
        "underlying": "SPY",
        "distance": 0,
        "logging": {"color": False},
        "snapshot": {
            "time": "2024-01-10T15:30:00",
            "chains": [
                {"underlying": "SPY", "csv": "spy_chain.csv"},
            ],
            "holdings": [
                {"instrument": "SPY 240119C00470000", "underlying": "SPY", "quantity": 10},
                {"instrument": "SPY 240216P00450000", "underlying": "SPY", "quantity": -4},
                {"instrument": "SPY", "quantity": 200},
            ],
            "open_orders": [
                {"instrument": "SPY 240216P00450000", "underlying": "SPY", "quantity": 1},
            ],
        },
    }


@pytest.fixture
def write_snapshot(tmp_path: Path):
    def _write(config: Mapping[str, Any]) -> Path:
        (tmp_path / "spy_chain.csv").write_text(
            "contract,expiry_date,option_type,strike,bid_price,ask_price\n"
            "SPY 240216P00450000,2024-02-16,P,450,2.1,2.3\n"
            "SPY 240119C00470000,2024-01-19,C,470,1.2,1.3\n"
            "SPY 240119P00460000,2024-01-19,P,460,0.9,1.0\n",
            encoding="utf-8",
        )
        path = tmp_path / "snapshot.yml"
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dict(config), f)
        return path

    return _write
