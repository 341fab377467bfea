"""Fetch, build and status transitions for one strategy board.

The controller exposes exactly one of three view states at a time:

- loading: a fetch is outstanding
- error: the last load ended in a BoardError (or an unexpected fetch exception)
- results: a fresh CollapsibleTree built from the last successful load

Each load is numbered. A completion carrying a number older than the latest
load is discarded, so overlapping refreshes resolve to the most recently
started one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from strategy_board.data_source import BoardError, ConfigurationMissing, EmptyResult, ResultsSource
from strategy_board.observability import profile_span
from strategy_board.time_utils import fmt_dt, safe_zoneinfo, utc_now
from strategy_board.tree_state import BoardEvent, CollapsibleTree, RefreshRequested
from strategy_board.view_models import build_strategy_views

logger = logging.getLogger(__name__)


class ViewStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    RESULTS = "results"


@dataclass(frozen=True)
class BoardView:
    status: ViewStatus
    message: str = ""
    tree: Optional[CollapsibleTree] = None
    item_count_label: str = ""
    last_updated_label: str = ""


def failure_message(exc: BaseException) -> str:
    if isinstance(exc, (ConfigurationMissing, EmptyResult)):
        return str(exc)
    cause = str(exc) or type(exc).__name__
    return f"Failed to load data: {cause}"


class LoadController:
    def __init__(
        self,
        source_factory: Callable[[], ResultsSource],
        *,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._source_factory = source_factory
        self._source: Optional[ResultsSource] = None
        self._tz = tz or safe_zoneinfo(None)
        self._clock = clock or utc_now
        self._seq = 0
        self._pending_seq: Optional[int] = None
        self._item_count_label = ""
        self._last_updated_label = ""
        self._view = BoardView(status=ViewStatus.LOADING)

    @property
    def view(self) -> BoardView:
        return self._view

    @property
    def pending_seq(self) -> Optional[int]:
        return self._pending_seq

    @property
    def latest_seq(self) -> int:
        return self._seq

    def _set_view(self, status: ViewStatus, *, message: str = "", tree: Optional[CollapsibleTree] = None) -> None:
        self._view = BoardView(
            status=status,
            message=message,
            tree=tree,
            item_count_label=self._item_count_label,
            last_updated_label=self._last_updated_label,
        )

    def _is_current(self, seq: int) -> bool:
        if seq != self._seq:
            logger.debug("discarding stale completion seq=%d latest=%d", seq, self._seq)
            return False
        return True

    def begin_load(self) -> Optional[int]:
        """Enter the loading state and return the new load's sequence number.

        Missing credentials fail fast: the controller goes straight to the error
        state without entering loading, and None is returned.
        """

        if self._source is None:
            try:
                self._source = self._source_factory()
            except ConfigurationMissing as exc:
                logger.error("data source not configured: missing %s", ", ".join(exc.missing))
                self._pending_seq = None
                self._set_view(ViewStatus.ERROR, message=failure_message(exc))
                return None

        self._seq += 1
        self._pending_seq = self._seq
        self._set_view(ViewStatus.LOADING)
        return self._seq

    def run_load(self, seq: int) -> BoardView:
        if self._source is None:
            raise RuntimeError("run_load called before begin_load")
        try:
            with profile_span("fetch_strategy_results", meta={"seq": seq}) as timing:
                records = self._source.fetch_strategy_results()
        except Exception as exc:
            self.fail_load(seq, exc)
        else:
            logger.debug("load seq=%d fetched in %.1fms", seq, timing.elapsed_ms)
            self.complete_load(seq, records)
        return self._view

    def load(self) -> BoardView:
        seq = self.begin_load()
        if seq is None:
            return self._view
        return self.run_load(seq)

    def complete_load(self, seq: int, records: Optional[Iterable[Any]]) -> bool:
        """Apply a successful fetch. Returns False if the completion was stale."""

        if not self._is_current(seq):
            return False

        rows = list(records or [])
        if not rows:
            return self.fail_load(seq, EmptyResult())

        try:
            with profile_span("build_strategy_views", meta={"seq": seq, "records": len(rows)}):
                views = build_strategy_views(rows, now=self._clock(), tz=self._tz)
        except Exception as exc:
            return self.fail_load(seq, exc)

        self._item_count_label = f"{len(rows)} strategies"
        newest = views[0].updated_at
        if newest is not None:
            self._last_updated_label = "Last update: " + fmt_dt(newest, self._tz, with_seconds=True)

        self._pending_seq = None
        self._set_view(ViewStatus.RESULTS, tree=CollapsibleTree(views))
        logger.info("load seq=%d rendered %d strategies", seq, len(views))
        return True

    def fail_load(self, seq: int, exc: BaseException) -> bool:
        """Move to the error state. Returns False if the completion was stale."""

        if not self._is_current(seq):
            return False

        message = failure_message(exc)
        if isinstance(exc, BoardError):
            logger.warning("load seq=%d failed: %s", seq, message)
        else:
            logger.warning("load seq=%d failed with %s: %s", seq, type(exc).__name__, message, exc_info=True)
        self._pending_seq = None
        self._set_view(ViewStatus.ERROR, message=message)
        return True

    def dispatch(self, event: BoardEvent) -> bool:
        """Route an activation event.

        RefreshRequested starts a new load (the caller runs it via `run_load`);
        card and row toggles go to the current results tree.
        """

        if isinstance(event, RefreshRequested):
            return self.begin_load() is not None
        tree = self._view.tree
        if self._view.status != ViewStatus.RESULTS or tree is None:
            logger.debug("ignoring %s outside the results view", type(event).__name__)
            return False
        return tree.dispatch(event)
