from __future__ import annotations

import html
from typing import Any, Iterable

from strategy_board.domain import NO_TRADES_TEXT, LegView, RorView, StrategyView, TradeView

TRADE_COLUMNS = ("Ticker", "Type", "Expiry", "Credit/Debit", "Max Loss", "Breakeven", "ROR")

# Shared by the header and every row table so the columns line up.
_COLGROUP = (
    "<colgroup>"
    '<col style="width:10%"><col style="width:22%"><col style="width:15%">'
    '<col style="width:12%"><col style="width:11%"><col style="width:16%"><col style="width:14%">'
    "</colgroup>"
)


def esc(value: Any) -> str:
    """Escape untrusted text for literal display; None renders as empty.

    Streamlit passes these fragments through markdown, so besides HTML escaping,
    newlines become character references (a blank line would end the raw HTML
    block) and `$` is encoded so prices are never read as math delimiters.
    """

    if value is None:
        return ""
    s = html.escape(str(value), quote=True)
    s = s.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "&#10;")
    return s.replace("$", "&#36;")


def _join(parts: Iterable[str]) -> str:
    # Markdown treats 4+ leading spaces as a code block, so fragments stay on one line.
    return "".join(parts)


def leg_html(leg: LegView) -> str:
    return (
        f'<span class="leg-line"><span class="leg-action-{leg.action_class.value}">{esc(leg.action)}</span> '
        f"{esc(leg.strike)}{esc(leg.option_type)} "
        f'<span class="sb-muted">Δ{esc(leg.delta)}</span></span>'
    )


def legs_html(trade: TradeView) -> str:
    if not trade.legs:
        return '<span class="sb-muted">—</span>'
    return _join(leg_html(leg) for leg in trade.legs)


def breakeven_html(trade: TradeView) -> str:
    return _join(
        f'<span class="be-line{" be-upper" if line.upper else ""}">{esc(line.price)} '
        f'<span class="sb-muted">({esc(line.percent)})</span></span>'
        for line in trade.breakevens
    )


def ror_html(ror: RorView) -> str:
    return (
        f'<div class="cell-ror {ror.css_class.value}">'
        f'<span class="ror-value">{esc(ror.label)}</span>'
        f'<div class="ror-bar-bg"><div class="ror-bar-fill" style="width:{ror.bar_width_pct:g}%"></div></div>'
        f"</div>"
    )


def trade_grid_header_html() -> str:
    cells = _join(f"<th>{esc(c)}</th>" for c in TRADE_COLUMNS)
    return f'<table class="trade-grid">{_COLGROUP}<thead><tr>{cells}</tr></thead></table>'


def trade_row_html(trade: TradeView, *, is_open: bool = False) -> str:
    cells = (
        f'<td class="cell-ticker">{esc(trade.symbol)}</td>',
        f"<td>{legs_html(trade)}</td>",
        f'<td class="cell-mono">{esc(trade.expiry_date)} <span class="sb-muted">({trade.dte}d)</span></td>',
        f'<td class="{trade.credit_class.value}">{esc(trade.net_credit)}</td>',
        f'<td class="cell-mono cell-loss">{esc(trade.max_loss)}</td>',
        f"<td>{breakeven_html(trade)}</td>",
        f"<td>{ror_html(trade.ror)}</td>",
    )
    row_class = "trade-row open" if is_open else "trade-row"
    return (
        f'<table class="trade-grid" id="{esc(trade.row_id)}">{_COLGROUP}'
        f'<tbody><tr class="{row_class}">{_join(cells)}</tr></tbody></table>'
    )


def detail_panel_html(trade: TradeView) -> str:
    return (
        f'<div class="trade-details-cell" id="{esc(trade.row_id)}-details">'
        f'<div class="trade-details-header">▶ {esc(trade.symbol)} — Trade Details</div>'
        f'<div class="trade-details-text">{esc(trade.details)}</div>'
        f"</div>"
    )


def no_trades_html() -> str:
    return f'<div class="no-trades">{esc(NO_TRADES_TEXT)}</div>'


def _stat(label: str, value: str, extra_class: str = "") -> str:
    cls = f"stat-value {extra_class}".strip()
    return (
        f'<div class="stat-item"><div class="stat-label">{esc(label)}</div>'
        f'<div class="{cls}">{esc(value)}</div></div>'
    )


def card_stats_html(view: StrategyView) -> str:
    count_class = "trades-count zero" if view.trades_found == 0 else "trades-count"
    divider = '<div class="stat-divider"></div>'
    return (
        '<div class="stat-group">'
        f"{_stat('Trades', str(view.trades_found), count_class)}{divider}"
        f"{_stat('Time', view.exec_time)}{divider}"
        f"{_stat('Updated', view.updated)}"
        "</div>"
    )


def card_title_html(view: StrategyView, *, expanded: bool) -> str:
    arrow_class = "collapse-arrow" if expanded else "collapse-arrow collapsed"
    return (
        '<div class="card-header-left">'
        f'<span class="{arrow_class}">▾</span>'
        f'<span class="strategy-name">{esc(view.display_name)}</span>'
        f'<span class="strategy-badge">{esc(view.strategy_id)}</span>'
        "</div>"
    )
