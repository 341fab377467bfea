from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


NO_DETAILS_TEXT = "No details available"
NO_TRADES_TEXT = "No trades found for this strategy."
UPDATED_MISSING = "N/A"


class LegAction(str, Enum):
    BUY = "buy"
    SELL = "sell"


class CreditClass(str, Enum):
    CREDIT = "cell-credit"
    DEBIT = "cell-debit"


class RorClass(str, Enum):
    POSITIVE = "ror-positive"
    NEGATIVE = "ror-negative"


@dataclass(frozen=True)
class LegView:
    action: str  # uppercased raw action, may be ""
    action_class: LegAction
    strike: str
    option_type: str  # "P", "C" or ""
    delta: str


@dataclass(frozen=True)
class BreakevenLine:
    price: str
    percent: str  # signed, e.g. "-2.5%"
    upper: bool = False


@dataclass(frozen=True)
class RorView:
    label: str
    css_class: RorClass
    bar_width_pct: float


@dataclass(frozen=True)
class TradeView:
    row_id: str
    symbol: str
    legs: Tuple[LegView, ...]
    expiry_date: str
    dte: int
    net_credit: str
    credit_class: CreditClass
    max_loss: str
    breakevens: Tuple[BreakevenLine, ...]
    ror: RorView
    details: str


@dataclass(frozen=True)
class StrategyView:
    card_id: str  # "card-{index}", unique within one load
    strategy_id: str
    display_name: str
    trades_found: int
    exec_time: str
    updated: str
    trades: Tuple[TradeView, ...] = field(default_factory=tuple)
    updated_at: Optional[datetime] = None

    @property
    def has_trades(self) -> bool:
        """A table is shown only when both the count and the trade list are non-empty."""
        return self.trades_found > 0 and len(self.trades) > 0

    @property
    def row_ids(self) -> Tuple[str, ...]:
        if not self.has_trades:
            return ()
        return tuple(t.row_id for t in self.trades)
