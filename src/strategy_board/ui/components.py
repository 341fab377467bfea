from __future__ import annotations

from typing import Callable

import streamlit as st

from strategy_board.domain import StrategyView
from strategy_board.html_render import (
    card_stats_html,
    card_title_html,
    detail_panel_html,
    esc,
    no_trades_html,
    trade_grid_header_html,
    trade_row_html,
)
from strategy_board.load_controller import BoardView
from strategy_board.tree_state import BoardEvent, CardToggled, CollapsibleTree, RefreshRequested, RowToggled

Dispatch = Callable[[BoardEvent], bool]


def inject_board_css(max_width_px: int = 1600) -> None:
    """Dark theme for the board: cards, trade grid, legs, breakevens and ROR bars.

    Important: do NOT override Streamlit focus rings globally.
    """

    # Palette (presentation-only)
    app_bg = "#0f1115"
    card_bg = "#171a21"
    border = "#2a2f3a"
    text = "rgba(236, 239, 244, 0.96)"
    text_muted = "rgba(236, 239, 244, 0.55)"
    accent = "#5b8def"
    green = "#3fb950"
    red = "#f85149"

    max_width_px = int(max(1000, min(2400, max_width_px)))
    st.markdown(
        f"""
        <style>
                    div[data-testid="stAppViewContainer"] {{
                        background-color: {app_bg};
                        color: {text};
                    }}
                    header[data-testid="stHeader"] {{
                        background-color: {app_bg};
                    }}
                    div[data-testid="stAppViewContainer"] .block-container {{
                        max-width: {max_width_px}px;
                        padding-top: 3.0rem;
                    }}

                    /* Strategy cards */
                    div[data-testid="stVerticalBlockBorderWrapper"] > div {{
                        background-color: {card_bg};
                        border: 1px solid {border};
                        border-radius: 0.75rem;
                    }}
                    div[data-testid="stVerticalBlockBorderWrapper"] .stMarkdown p {{
                        margin: 0 !important;
                    }}
                    .card-header-left {{
                        display: flex;
                        align-items: center;
                        gap: 0.6rem;
                    }}
                    .collapse-arrow {{
                        display: inline-block;
                        color: {text_muted};
                        transition: transform 0.15s ease;
                    }}
                    .collapse-arrow.collapsed {{
                        transform: rotate(-90deg);
                    }}
                    .strategy-name {{
                        font-size: 1.0rem;
                        font-weight: 800;
                    }}
                    .strategy-badge {{
                        font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
                        font-size: 0.72rem;
                        padding: 0.1rem 0.45rem;
                        border-radius: 999px;
                        border: 1px solid {border};
                        color: {text_muted};
                    }}
                    .stat-group {{
                        display: flex;
                        justify-content: flex-end;
                        align-items: center;
                        gap: 0.9rem;
                    }}
                    .stat-label {{
                        font-size: 0.7rem;
                        text-transform: uppercase;
                        color: {text_muted};
                    }}
                    .stat-value {{
                        font-size: 0.92rem;
                        font-weight: 700;
                    }}
                    .stat-value.trades-count {{
                        color: {green};
                    }}
                    .stat-value.trades-count.zero {{
                        color: {text_muted};
                    }}
                    .stat-divider {{
                        width: 1px;
                        height: 1.8rem;
                        background: {border};
                    }}

                    /* Trade grid */
                    .trade-grid {{
                        width: 100%;
                        table-layout: fixed;
                        border-collapse: collapse;
                        font-size: 0.84rem;
                    }}
                    .trade-grid th {{
                        text-align: left;
                        font-size: 0.72rem;
                        text-transform: uppercase;
                        color: {text_muted};
                        border-bottom: 1px solid {border};
                        padding: 0.3rem 0.4rem;
                    }}
                    .trade-grid td {{
                        padding: 0.3rem 0.4rem;
                        vertical-align: middle;
                        border: none;
                    }}
                    .trade-row.open {{
                        background: rgba(91, 141, 239, 0.08);
                    }}
                    .cell-ticker {{
                        font-weight: 800;
                    }}
                    .cell-mono {{
                        font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
                    }}
                    .cell-credit {{
                        color: {green};
                        font-weight: 700;
                    }}
                    .cell-debit, .cell-loss {{
                        color: {red};
                        font-weight: 700;
                    }}
                    .leg-line, .be-line {{
                        display: block;
                        white-space: nowrap;
                    }}
                    .be-upper {{
                        margin-top: 0.1rem;
                    }}
                    .leg-action-buy {{
                        color: {green};
                        font-weight: 700;
                    }}
                    .leg-action-sell {{
                        color: {red};
                        font-weight: 700;
                    }}
                    .sb-muted {{
                        color: {text_muted};
                    }}
                    .cell-ror .ror-value {{
                        font-weight: 700;
                    }}
                    .ror-positive .ror-value {{
                        color: {green};
                    }}
                    .ror-negative .ror-value {{
                        color: {red};
                    }}
                    .ror-bar-bg {{
                        height: 4px;
                        border-radius: 2px;
                        background: rgba(236, 239, 244, 0.08);
                        margin-top: 0.2rem;
                    }}
                    .ror-bar-fill {{
                        height: 100%;
                        border-radius: 2px;
                        background: {accent};
                    }}
                    .ror-negative .ror-bar-fill {{
                        background: {red};
                    }}

                    /* Detail panels */
                    .trade-details-cell {{
                        border-left: 3px solid {accent};
                        padding: 0.5rem 0.75rem;
                        margin: 0.1rem 0 0.4rem 0;
                        background: rgba(91, 141, 239, 0.05);
                    }}
                    .trade-details-header {{
                        font-weight: 800;
                        margin-bottom: 0.3rem;
                    }}
                    .trade-details-text {{
                        white-space: pre-wrap;
                        font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
                        font-size: 0.8rem;
                        color: {text_muted};
                    }}
                    .no-trades {{
                        color: {text_muted};
                        font-style: italic;
                        padding: 0.5rem 0;
                    }}
                    .sb-error {{
                        border: 1px solid {red};
                        border-radius: 0.5rem;
                        padding: 0.75rem 1rem;
                        color: {red};
                    }}
                    .sb-loading {{
                        color: {text_muted};
                        padding: 2rem 0;
                        text-align: center;
                    }}
                    .sb-status {{
                        color: {text_muted};
                        font-size: 0.82rem;
                        text-align: right;
                    }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_header(view: BoardView, dispatch: Dispatch) -> None:
    title_col, status_col, action_col = st.columns([6, 4, 1], vertical_alignment="center")
    title_col.markdown("## Strategy Results")
    labels = [label for label in (view.item_count_label, view.last_updated_label) if label]
    status_col.markdown(
        f"<div class='sb-status'>{' · '.join(esc(label) for label in labels)}</div>",
        unsafe_allow_html=True,
    )
    action_col.button(
        "Refresh",
        key="board_refresh",
        on_click=dispatch,
        args=(RefreshRequested(),),
    )


def render_loading() -> None:
    st.markdown("<div class='sb-loading'>Loading strategy results…</div>", unsafe_allow_html=True)


def render_error(message: str) -> None:
    st.markdown(f"<div class='sb-error'>{esc(message)}</div>", unsafe_allow_html=True)


def render_trade_grid(view: StrategyView, tree: CollapsibleTree, dispatch: Dispatch) -> None:
    st.markdown(trade_grid_header_html(), unsafe_allow_html=True)
    for trade in view.trades:
        is_open = tree.is_row_open(trade.row_id)
        row_col, btn_col = st.columns([16, 1], vertical_alignment="center")
        row_col.markdown(trade_row_html(trade, is_open=is_open), unsafe_allow_html=True)
        btn_col.button(
            "▴" if is_open else "▾",
            key=f"row_toggle_{trade.row_id}",
            help="Trade details",
            on_click=dispatch,
            args=(RowToggled(trade.row_id),),
        )
        if is_open:
            st.markdown(detail_panel_html(trade), unsafe_allow_html=True)


def render_strategy_card(view: StrategyView, tree: CollapsibleTree, dispatch: Dispatch) -> None:
    expanded = tree.is_card_expanded(view.card_id)
    with st.container(border=True):
        title_col, stats_col, toggle_col = st.columns([5, 6, 1], vertical_alignment="center")
        title_col.markdown(card_title_html(view, expanded=expanded), unsafe_allow_html=True)
        stats_col.markdown(card_stats_html(view), unsafe_allow_html=True)
        toggle_col.button(
            "Hide" if expanded else "Show",
            key=f"toggle_{view.card_id}",
            on_click=dispatch,
            args=(CardToggled(view.card_id),),
        )
        if not expanded:
            return
        if view.has_trades:
            render_trade_grid(view, tree, dispatch)
        else:
            st.markdown(no_trades_html(), unsafe_allow_html=True)


def render_results(tree: CollapsibleTree, dispatch: Dispatch) -> None:
    for view in tree:
        render_strategy_card(view, tree, dispatch)
