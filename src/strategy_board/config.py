from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_RESULTS_TABLE = "latest_strategy_results"
DEFAULT_ORDER_COLUMN = "updated_at"
DEFAULT_DISPLAY_TZ_NAME = "America/New_York"


def _env_str(name: str, default: str = "") -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return str(raw).strip()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_credential(name: str) -> Optional[str]:
    # Deploy pipelines substitute "__NAME__" placeholders; an unreplaced one is unset.
    raw = _env_str(name)
    if not raw or raw.startswith("__"):
        return None
    return raw


@dataclass(frozen=True)
class BoardConfig:
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    results_table: str = DEFAULT_RESULTS_TABLE
    order_column: str = DEFAULT_ORDER_COLUMN
    fetch_timeout_s: Optional[float] = 10.0
    display_tz_name: str = DEFAULT_DISPLAY_TZ_NAME
    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def load_config() -> BoardConfig:
    """Read the board configuration from the environment.

    - SUPABASE_URL / SUPABASE_ANON_KEY: data-source credentials
    - BOARD_RESULTS_TABLE / BOARD_ORDER_COLUMN: which view to read, newest first
    - BOARD_FETCH_TIMEOUT_S: request timeout (0 disables it)
    - BOARD_DISPLAY_TZ: IANA zone for month-day and last-update labels
    - BOARD_LOG_LEVEL: root log level for the app entry point
    """

    timeout = _env_float("BOARD_FETCH_TIMEOUT_S", 10.0)
    return BoardConfig(
        supabase_url=_env_credential("SUPABASE_URL"),
        supabase_anon_key=_env_credential("SUPABASE_ANON_KEY"),
        results_table=_env_str("BOARD_RESULTS_TABLE") or DEFAULT_RESULTS_TABLE,
        order_column=_env_str("BOARD_ORDER_COLUMN") or DEFAULT_ORDER_COLUMN,
        fetch_timeout_s=timeout if timeout > 0 else None,
        display_tz_name=_env_str("BOARD_DISPLAY_TZ") or DEFAULT_DISPLAY_TZ_NAME,
        log_level=(_env_str("BOARD_LOG_LEVEL") or "INFO").upper(),
    )
