from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import pytest


# Ensure imports resolve to the canonical src/ tree when running pytest from the repo root.
_repo_root = Path(__file__).resolve().parent
_src_path = _repo_root / "src"
if _src_path.exists():
    sys.path.insert(0, str(_src_path))


FIXED_NOW = datetime(2026, 3, 10, 15, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def clean_board_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "BOARD_RESULTS_TABLE",
        "BOARD_ORDER_COLUMN",
        "BOARD_FETCH_TIMEOUT_S",
        "BOARD_DISPLAY_TZ",
        "BOARD_LOG_LEVEL",
        "BOARD_PROFILE",
        "BOARD_SLOW_MS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Two strategies as the results view returns them, newest first."""

    return [
        {
            "strategy_id": "pcs_spy",
            "strategy_name": "Put Credit Spread",
            "trades_found": 2,
            "execution_time_ms": 61000,
            "updated_at": "2026-03-10T14:58:30+00:00",
            "trades": [
                {
                    "symbol": "SPY",
                    "expiryDate": "2026-03-20",
                    "dte": 10,
                    "netCredit": 1.25,
                    "maxLoss": -375.0,
                    "breakEvenPrice": 498.75,
                    "breakEvenPercent": 2.4,
                    "returnOnRisk": 33.3,
                    "legs": [
                        {"action": "SELL", "optionType": "PUT", "strike": 500, "delta": -0.3},
                        {"action": "buy", "optionType": "put", "strike": 495, "delta": -0.2},
                    ],
                    "tradeDetails": "Short 500P / Long 495P",
                },
                {
                    "symbol": "QQQ",
                    "expiryDate": "2026-03-27",
                    "dte": 17,
                    "netCredit": 0.9,
                    "maxLoss": 410,
                    "breakEvenPrice": 429.1,
                    "breakEvenPercent": 1.1,
                    "returnOnRisk": 22.0,
                    "legs": [],
                },
            ],
        },
        {
            "strategy_id": "ic_iwm",
            "strategy_name": "Iron Condor",
            "execution_time_ms": 45000,
            "updated_at": "2026-03-10T13:00:00+00:00",
            "trades": [
                {
                    "symbol": "IWM",
                    "expiryDate": "2026-04-17",
                    "dte": 38,
                    "netCredit": 2.1,
                    "maxLoss": 290,
                    "breakEvenPrice": 197.9,
                    "breakEvenPercent": 3.2,
                    "upperBreakEvenPrice": 222.1,
                    "upperBreakEvenPercent": 4.4,
                    "returnOnRisk": 72.4,
                    "tradeDetails": "Iron condor 200/195 - 220/225",
                },
            ],
        },
    ]
