from __future__ import annotations

from datetime import datetime, timezone, tzinfo
import math
import re
from typing import Any, Optional

from strategy_board.config import DEFAULT_DISPLAY_TZ_NAME

try:
    from zoneinfo import ZoneInfo
except Exception:  # pragma: no cover
    ZoneInfo = None  # type: ignore


_SHORT_OFFSET_RE = re.compile(r"\d:\d{2}(:\d{2}(\.\d+)?)?[+-]\d{2}$")

def safe_zoneinfo(name: Optional[str]) -> tzinfo:
    if ZoneInfo is None:  # pragma: no cover
        return timezone.utc

    try:
        return ZoneInfo(str(name or DEFAULT_DISPLAY_TZ_NAME))
    except Exception:
        try:
            return ZoneInfo(DEFAULT_DISPLAY_TZ_NAME)
        except Exception:
            return timezone.utc


def parse_db_ts(value: Any) -> Optional[datetime]:
    """Parse a store timestamp into a tz-aware UTC datetime.

    Accepts:
    - datetime (naive treated as UTC)
    - ISO-8601 string, including Postgres `timestamptz` text and a trailing Z
    - numeric seconds/ms timestamps

    Returns None for anything unparseable.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, (int, float)):
        v = float(value)
        if not math.isfinite(v):
            return None
        # >1e12 is ms since epoch
        if v > 1e12:
            v = v / 1000.0
        try:
            return datetime.fromtimestamp(v, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        # Postgres emits "+00" offsets, which older fromisoformat rejects.
        if _SHORT_OFFSET_RE.search(s):
            s = s + ":00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fmt_month_day(dt: datetime, tz: tzinfo) -> str:
    local = dt.astimezone(tz)
    return f"{local.strftime('%b')} {local.day}"


def time_ago(value: Any, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Optional[str]:
    """Return a compact relative age like '3m ago'.

    Buckets use floor division of the elapsed time:
    - < 1 min -> "just now" (future timestamps land here too)
    - < 60 min -> "{n}m ago"
    - < 24 h -> "{n}h ago"
    - < 7 d -> "{n}d ago"
    - else -> "Oct 3" style month-day in the display zone

    Returns None when the value cannot be parsed.
    """

    dt = parse_db_ts(value)
    if dt is None:
        return None
    now_utc = parse_db_ts(now) if now is not None else utc_now()
    if now_utc is None:
        now_utc = utc_now()

    diff_s = (now_utc - dt).total_seconds()
    diff_min = math.floor(diff_s / 60)
    diff_hrs = math.floor(diff_s / 3600)
    diff_days = math.floor(diff_s / 86400)

    if diff_min < 1:
        return "just now"
    if diff_min < 60:
        return f"{diff_min}m ago"
    if diff_hrs < 24:
        return f"{diff_hrs}h ago"
    if diff_days < 7:
        return f"{diff_days}d ago"
    return fmt_month_day(dt, tz or safe_zoneinfo(DEFAULT_DISPLAY_TZ_NAME))


def fmt_dt(value: Any, tz: tzinfo, *, with_seconds: bool = False) -> str:
    dt = parse_db_ts(value)
    if dt is None:
        return "—"
    fmt = "%Y-%m-%d %H:%M:%S" if with_seconds else "%Y-%m-%d %H:%M"
    return dt.astimezone(tz).strftime(fmt)
