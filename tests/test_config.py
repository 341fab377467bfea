from __future__ import annotations

import pytest

from strategy_board.config import (
    DEFAULT_DISPLAY_TZ_NAME,
    DEFAULT_ORDER_COLUMN,
    DEFAULT_RESULTS_TABLE,
    load_config,
)


def test_defaults_without_environment() -> None:
    cfg = load_config()
    assert cfg.supabase_url is None
    assert cfg.supabase_anon_key is None
    assert not cfg.has_credentials
    assert cfg.results_table == DEFAULT_RESULTS_TABLE
    assert cfg.order_column == DEFAULT_ORDER_COLUMN
    assert cfg.fetch_timeout_s == 10.0
    assert cfg.display_tz_name == DEFAULT_DISPLAY_TZ_NAME
    assert cfg.log_level == "INFO"


def test_unreplaced_placeholders_count_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "__SUPABASE_URL__")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "  ")
    cfg = load_config()
    assert cfg.supabase_url is None
    assert cfg.supabase_anon_key is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", " https://demo.supabase.co ")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-123")
    monkeypatch.setenv("BOARD_DISPLAY_TZ", "Europe/London")
    monkeypatch.setenv("BOARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("BOARD_FETCH_TIMEOUT_S", "0")
    cfg = load_config()
    assert cfg.supabase_url == "https://demo.supabase.co"
    assert cfg.has_credentials
    assert cfg.display_tz_name == "Europe/London"
    assert cfg.log_level == "DEBUG"
    assert cfg.fetch_timeout_s is None


def test_bad_timeout_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOARD_FETCH_TIMEOUT_S", "soon")
    assert load_config().fetch_timeout_s == 10.0
