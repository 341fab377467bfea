from __future__ import annotations

import logging

import streamlit as st

from strategy_board.config import BoardConfig, load_config
from strategy_board.data_source import source_from_config
from strategy_board.load_controller import LoadController, ViewStatus
from strategy_board.time_utils import safe_zoneinfo
from strategy_board.ui.components import (
    inject_board_css,
    render_error,
    render_header,
    render_loading,
    render_results,
)

logger = logging.getLogger(__name__)

_CONTROLLER_KEY = "board_controller"


def configure_logging(cfg: BoardConfig) -> None:
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_controller(cfg: BoardConfig) -> LoadController:
    return LoadController(lambda: source_from_config(cfg), tz=safe_zoneinfo(cfg.display_tz_name))


def get_controller(cfg: BoardConfig) -> LoadController:
    """Return the session's controller, creating it (and queueing the first load) once."""

    controller = st.session_state.get(_CONTROLLER_KEY)
    if controller is None:
        controller = build_controller(cfg)
        logger.info("new board session table=%s tz=%s", cfg.results_table, cfg.display_tz_name)
        st.session_state[_CONTROLLER_KEY] = controller
        controller.begin_load()
    return controller


def main() -> None:
    cfg = load_config()
    configure_logging(cfg)
    st.set_page_config(page_title="Strategy Results", layout="wide", page_icon="📈")
    inject_board_css()

    controller = get_controller(cfg)
    render_header(controller.view, controller.dispatch)

    seq = controller.pending_seq
    if seq is not None:
        body = st.empty()
        with body.container():
            render_loading()
        controller.run_load(seq)
        # Header labels were drawn before the fetch finished.
        st.rerun()

    view = controller.view
    if view.status == ViewStatus.ERROR:
        render_error(view.message)
    elif view.status == ViewStatus.RESULTS and view.tree is not None:
        render_results(view.tree, controller.dispatch)
    else:
        render_loading()


if __name__ == "__main__":
    main()
