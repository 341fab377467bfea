from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Sequence, Set, Tuple, Union

from strategy_board.domain import StrategyView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardToggled:
    card_id: str


@dataclass(frozen=True)
class RowToggled:
    row_id: str


@dataclass(frozen=True)
class RefreshRequested:
    pass


BoardEvent = Union[CardToggled, RowToggled, RefreshRequested]


@dataclass
class ViewState:
    """Expand/collapse state for one rendered load.

    Cards toggle independently. Trade-detail rows are mutually exclusive across
    the whole tree: `open_row_id` holds the single open row, if any.
    """

    expanded_card_ids: Set[str] = field(default_factory=set)
    open_row_id: Optional[str] = None

    def is_card_expanded(self, card_id: str) -> bool:
        return card_id in self.expanded_card_ids

    def is_row_open(self, row_id: str) -> bool:
        return self.open_row_id is not None and self.open_row_id == row_id

    def toggle_card(self, card_id: str) -> bool:
        if card_id in self.expanded_card_ids:
            self.expanded_card_ids.discard(card_id)
            return False
        self.expanded_card_ids.add(card_id)
        return True

    def toggle_row(self, row_id: str) -> Optional[str]:
        """Close the open row if it is `row_id`, otherwise open `row_id` in its place.

        Returns the row left open, or None.
        """

        self.open_row_id = None if self.open_row_id == row_id else row_id
        return self.open_row_id


class CollapsibleTree:
    """Two-level collapsible structure over one load's strategy views.

    Cards render in source order and rows in trade-list order. A tree is built
    fresh for every load, so every card starts collapsed and every row closed.
    """

    def __init__(self, views: Sequence[StrategyView]) -> None:
        self.views: Tuple[StrategyView, ...] = tuple(views)
        self.state = ViewState()
        self._card_ids: FrozenSet[str] = frozenset(v.card_id for v in self.views)
        self._row_ids: FrozenSet[str] = frozenset(rid for v in self.views for rid in v.row_ids)

    def __len__(self) -> int:
        return len(self.views)

    def __iter__(self) -> Iterator[StrategyView]:
        return iter(self.views)

    @property
    def open_row_id(self) -> Optional[str]:
        return self.state.open_row_id

    def is_card_expanded(self, card_id: str) -> bool:
        return self.state.is_card_expanded(card_id)

    def is_row_open(self, row_id: str) -> bool:
        return self.state.is_row_open(row_id)

    def dispatch(self, event: BoardEvent) -> bool:
        """Apply a card or row activation. Returns False when the event was ignored."""

        if isinstance(event, CardToggled):
            if event.card_id not in self._card_ids:
                logger.debug("ignoring toggle for unknown card %r", event.card_id)
                return False
            self.state.toggle_card(event.card_id)
            return True
        if isinstance(event, RowToggled):
            if event.row_id not in self._row_ids:
                logger.debug("ignoring toggle for unknown row %r", event.row_id)
                return False
            self.state.toggle_row(event.row_id)
            return True
        logger.debug("tree does not handle %s", type(event).__name__)
        return False
