from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional


def coerce_number(value: Any) -> Optional[float]:
    """Return a finite float for numeric-looking input, else None.

    Booleans are not numbers here; numeric strings are accepted.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        v = float(value)
    elif isinstance(value, str):
        try:
            v = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(v):
        return None
    return v


def _quantize(value: float, places: int) -> Decimal:
    d = Decimal(repr(value))
    # Default 28-digit precision cannot hold large magnitudes at `places` decimals.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        return d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def fixed(value: float, places: int) -> str:
    """Fixed-point string with half-up rounding on the shortest decimal repr."""

    d = _quantize(float(value), places)
    if d.is_zero():
        d = abs(d)
    return f"{d:.{places}f}"


def format_currency(value: Any) -> str:
    """`$` or `-$` prefix plus two-decimal magnitude; missing -> "$0.00"."""

    v = coerce_number(value)
    if v is None:
        return "$0.00"
    prefix = "$" if v >= 0 else "-$"
    return prefix + fixed(abs(v), 2)


def format_number(value: Any) -> str:
    """en-US grouping, at most 2 fraction digits, trailing zeros trimmed."""

    v = coerce_number(value)
    if v is None:
        return "0"
    d = _quantize(v, 2)
    if d.is_zero():
        return "0"
    out = f"{d:,.2f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return out


def format_exec_time(ms: Any) -> str:
    """Format an execution time in milliseconds.

    - 0/None/invalid -> "0s"
    - < 60s -> "{s}s"
    - else -> "{m}m {s}s"
    """

    v = coerce_number(ms)
    if not v:
        return "0s"
    secs = int(math.floor(v / 1000.0 + 0.5))
    if secs < 60:
        return f"{secs}s"
    return f"{secs // 60}m {secs % 60}s"
