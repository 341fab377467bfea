"""
Strategy Board core package.

This package contains:
- Display formatters for money, counts, durations and relative ages
- The view-model builder (raw strategy records -> StrategyView nodes)
- The collapsible tree state machine (cards and mutually exclusive detail rows)
- The load controller (loading / error / results view states)
- A read-only Supabase source for the latest strategy results
"""

from .domain import StrategyView, TradeView, LegView  # noqa: F401
from .load_controller import BoardView, LoadController, ViewStatus  # noqa: F401
from .tree_state import CardToggled, CollapsibleTree, RefreshRequested, RowToggled  # noqa: F401
from .view_models import build_strategy_view, build_strategy_views  # noqa: F401
