"""Entry point for `streamlit run streamlit_app.py` from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

_src_path = Path(__file__).resolve().parent / "src"
if _src_path.exists():
    sys.path.insert(0, str(_src_path))

from strategy_board.streamlit_app import main  # noqa: E402

main()
