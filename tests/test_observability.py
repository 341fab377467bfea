from __future__ import annotations

import logging

import pytest

from strategy_board.observability import format_meta, profile_span, profiling_enabled, slow_threshold_ms


def test_span_measures_without_profiling(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="strategy_board.profile")
    with profile_span("build_views", slow_ms=0) as timing:
        sum(range(1000))
    assert timing.name == "build_views"
    assert timing.elapsed_ms >= 0.0
    assert not profiling_enabled()
    assert "SLOW" not in caplog.text


def test_slow_span_is_logged_when_enabled(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("BOARD_PROFILE", "1")
    caplog.set_level(logging.INFO, logger="strategy_board.profile")
    with profile_span("build_views", meta={"seq": 4, "records": 3}, slow_ms=0):
        pass
    assert "SLOW span=build_views" in caplog.text
    assert "seq=4 records=3" in caplog.text


def test_fast_span_is_not_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("BOARD_PROFILE", "true")
    caplog.set_level(logging.INFO, logger="strategy_board.profile")
    with profile_span("fetch", slow_ms=60_000):
        pass
    assert "SLOW" not in caplog.text


def test_span_time_is_recorded_when_block_raises() -> None:
    with pytest.raises(ValueError):
        with profile_span("boom") as timing:
            raise ValueError("x")
    assert timing.elapsed_ms >= 0.0


def test_slow_threshold_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert slow_threshold_ms() == 100.0
    monkeypatch.setenv("BOARD_SLOW_MS", "-5")
    assert slow_threshold_ms() == 0.0
    monkeypatch.setenv("BOARD_SLOW_MS", "abc")
    assert slow_threshold_ms() == 100.0


def test_format_meta() -> None:
    assert format_meta({"seq": 1}) == "seq=1"
    assert format_meta(None) == ""
