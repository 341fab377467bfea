from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import requests

from strategy_board.config import BoardConfig

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Base for errors that end a load cycle in the error view."""


class ConfigurationMissing(BoardError):
    def __init__(self, missing: List[str]) -> None:
        super().__init__(
            "Supabase credentials not configured. Please set SUPABASE_URL and SUPABASE_ANON_KEY."
        )
        self.missing = list(missing)


class EmptyResult(BoardError):
    def __init__(self) -> None:
        super().__init__("No strategy results found in database.")


class FetchFailure(BoardError):
    def __init__(self, message: str, payload: Optional[Any] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.payload = payload
        self.status_code = status_code


class ResultsSource(Protocol):
    def fetch_strategy_results(self) -> List[Dict[str, Any]]:
        ...


def _error_message(payload: Any, status_code: int) -> str:
    # PostgREST error bodies look like {"code": ..., "message": ..., "details": ..., "hint": ...}
    if isinstance(payload, dict):
        msg = payload.get("message") or payload.get("error_description") or payload.get("error")
        if msg:
            return str(msg)
    return f"HTTP {status_code}"


@dataclass
class SupabaseResultsSource:
    """Read-only PostgREST client for the latest strategy results view."""

    url: str
    anon_key: str
    table: str = "latest_strategy_results"
    order_column: str = "updated_at"
    timeout: Optional[float] = 10.0
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/{self.table}"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Accept": "application/json",
        }

    def fetch_strategy_results(self) -> List[Dict[str, Any]]:
        """Return every row of the results view, newest first."""

        params = {"select": "*", "order": f"{self.order_column}.desc"}
        try:
            resp = self.session.get(self.endpoint, params=params, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchFailure(str(exc)) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            if resp.status_code >= 400:
                raise FetchFailure(f"HTTP {resp.status_code}", status_code=resp.status_code) from exc
            raise FetchFailure("Invalid JSON response", status_code=resp.status_code) from exc

        if resp.status_code >= 400:
            raise FetchFailure(_error_message(payload, resp.status_code), payload=payload, status_code=resp.status_code)

        if not isinstance(payload, list):
            raise FetchFailure(
                f"Unexpected response shape: {type(payload).__name__}",
                payload=payload,
                status_code=resp.status_code,
            )

        logger.info("fetched %d strategy results from %s", len(payload), self.table)
        return payload


def source_from_config(cfg: BoardConfig, *, session: Optional[requests.Session] = None) -> SupabaseResultsSource:
    """Build the Supabase source, failing fast when credentials are unset."""

    missing = []
    if not cfg.supabase_url:
        missing.append("SUPABASE_URL")
    if not cfg.supabase_anon_key:
        missing.append("SUPABASE_ANON_KEY")
    if missing:
        raise ConfigurationMissing(missing)

    return SupabaseResultsSource(
        url=str(cfg.supabase_url),
        anon_key=str(cfg.supabase_anon_key),
        table=cfg.results_table,
        order_column=cfg.order_column,
        timeout=cfg.fetch_timeout_s,
        session=session,
    )
