"""Turn loosely-typed strategy records into render-ready view nodes.

Every field follows an explicit rule for the three cases a record can present:
present-and-valid, present-and-invalid, absent. Invalid and absent values take
the same fallback; a present 0 is a real value for money and counts alike.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from strategy_board.domain import (
    NO_DETAILS_TEXT,
    UPDATED_MISSING,
    BreakevenLine,
    CreditClass,
    LegAction,
    LegView,
    RorClass,
    RorView,
    StrategyView,
    TradeView,
)
from strategy_board.time_utils import parse_db_ts, time_ago
from strategy_board.ui_formatters import (
    coerce_number,
    fixed,
    format_currency,
    format_exec_time,
    format_number,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _number_or_zero(value: Any) -> float:
    v = coerce_number(value)
    return 0.0 if v is None else v


def _count(value: Any) -> Optional[int]:
    v = coerce_number(value)
    if v is None or v < 0 or v != int(v):
        return None
    return int(v)


def _sequence(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def build_leg_view(leg: Mapping[str, Any]) -> LegView:
    leg = _mapping(leg)
    action = (_text(leg.get("action")) or "").strip().upper()
    option_type = (_text(leg.get("optionType")) or "").strip()[:1].upper()
    return LegView(
        action=action,
        action_class=LegAction.BUY if action == "BUY" else LegAction.SELL,
        strike=format_number(leg.get("strike")),
        option_type=option_type,
        delta=fixed(abs(_number_or_zero(leg.get("delta"))), 2),
    )


def build_breakevens(trade: Mapping[str, Any]) -> Tuple[BreakevenLine, ...]:
    # The stored percent is the required downside move, so its sign is shown inverted.
    price = _number_or_zero(trade.get("breakEvenPrice"))
    pct = _number_or_zero(trade.get("breakEvenPercent"))
    lines = [
        BreakevenLine(
            price="$" + format_number(price),
            percent=("-" if pct >= 0 else "+") + fixed(abs(pct), 1) + "%",
        )
    ]

    upper = coerce_number(trade.get("upperBreakEvenPrice"))
    if upper is not None and upper > 0:
        upper_pct = _number_or_zero(trade.get("upperBreakEvenPercent"))
        lines.append(
            BreakevenLine(
                price="$" + format_number(upper),
                percent="+" + fixed(abs(upper_pct), 1) + "%",
                upper=True,
            )
        )
    return tuple(lines)


def build_ror_view(value: Any) -> RorView:
    ror = _number_or_zero(value)
    return RorView(
        label=fixed(ror, 1) + "%",
        css_class=RorClass.POSITIVE if ror >= 0 else RorClass.NEGATIVE,
        bar_width_pct=min(abs(ror), 100.0),
    )


def build_trade_view(trade: Mapping[str, Any], strategy_index: int, trade_index: int) -> TradeView:
    trade = _mapping(trade)
    net_credit = _number_or_zero(trade.get("netCredit"))
    return TradeView(
        row_id=f"trade-{strategy_index}-{trade_index}",
        symbol=_text(trade.get("symbol")) or "",
        legs=tuple(build_leg_view(leg) for leg in _sequence(trade.get("legs"))),
        expiry_date=_text(trade.get("expiryDate")) or "",
        dte=int(_number_or_zero(trade.get("dte"))),
        net_credit=format_currency(net_credit),
        credit_class=CreditClass.CREDIT if net_credit >= 0 else CreditClass.DEBIT,
        max_loss="$" + format_number(abs(_number_or_zero(trade.get("maxLoss")))),
        breakevens=build_breakevens(trade),
        ror=build_ror_view(trade.get("returnOnRisk")),
        details=_text(trade.get("tradeDetails")) or NO_DETAILS_TEXT,
    )


def build_strategy_view(
    record: Mapping[str, Any],
    index: int,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> StrategyView:
    """Build the view node for one strategy record.

    `index` is the record's position in the load and seeds the card and trade row ids.
    Missing or malformed fields never raise; they fall back per field.
    """

    if not isinstance(record, Mapping):
        logger.warning("strategy record %d is %s, not a mapping; rendering it empty", index, type(record).__name__)
        record = {}

    strategy_id = _text(record.get("strategy_id")) or ""
    raw_trades = _sequence(record.get("trades"))
    trades_found = _count(record.get("trades_found"))
    if trades_found is None:
        trades_found = len(raw_trades)

    updated_at = parse_db_ts(record.get("updated_at"))
    updated = time_ago(updated_at, now=now, tz=tz) if updated_at is not None else None

    return StrategyView(
        card_id=f"card-{index}",
        strategy_id=strategy_id,
        display_name=_text(record.get("strategy_name")) or strategy_id,
        trades_found=trades_found,
        exec_time=format_exec_time(_number_or_zero(record.get("execution_time_ms"))),
        updated=updated or UPDATED_MISSING,
        trades=tuple(build_trade_view(t, index, i) for i, t in enumerate(raw_trades)),
        updated_at=updated_at,
    )


def build_strategy_views(
    records: Iterable[Any],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Tuple[StrategyView, ...]:
    """Build views in source order; no client-side re-sorting."""

    return tuple(build_strategy_view(r, i, now=now, tz=tz) for i, r in enumerate(records))
