"""Print the board's view of strategy results without starting Streamlit.

Reads records from a JSON file (a list of strategy result rows, as exported
from the results view) or, with --live, from the configured Supabase source,
then runs the same load cycle the page uses and prints each card.

Usage:
  PYTHONPATH=src python examples/dump_strategy_views.py --file results.json
  PYTHONPATH=src python examples/dump_strategy_views.py --live --expand-all
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from strategy_board.config import load_config
from strategy_board.data_source import FetchFailure, source_from_config
from strategy_board.load_controller import LoadController, ViewStatus
from strategy_board.time_utils import safe_zoneinfo


class FileSource:
    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch_strategy_results(self) -> List[Dict[str, Any]]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise FetchFailure(f"{self.path}: {exc}") from exc
        if not isinstance(payload, list):
            raise FetchFailure(f"{self.path}: expected a JSON list of strategy results")
        return payload


def main() -> int:
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", type=Path, help="JSON file holding a list of strategy result rows")
    src.add_argument("--live", action="store_true", help="Fetch from SUPABASE_URL / SUPABASE_ANON_KEY")
    p.add_argument("--expand-all", action="store_true", help="Also print every trade row and its details")
    args = p.parse_args()

    cfg = load_config()
    if args.live:
        factory = lambda: source_from_config(cfg)  # noqa: E731
    else:
        factory = lambda: FileSource(args.file)  # noqa: E731

    controller = LoadController(factory, tz=safe_zoneinfo(cfg.display_tz_name))
    view = controller.load()

    if view.status != ViewStatus.RESULTS or view.tree is None:
        print(f"[{view.status.value}] {view.message}", file=sys.stderr)
        return 1

    print(view.item_count_label, view.last_updated_label, sep="  |  ")
    for card in view.tree:
        print(f"\n{card.display_name} [{card.strategy_id}]  trades={card.trades_found} time={card.exec_time} updated={card.updated}")
        if not args.expand_all:
            continue
        if not card.has_trades:
            print("  (no trades)")
            continue
        for trade in card.trades:
            legs = ", ".join(f"{leg.action} {leg.strike}{leg.option_type} Δ{leg.delta}" for leg in trade.legs) or "—"
            be = " / ".join(f"{line.price} ({line.percent})" for line in trade.breakevens)
            print(
                f"  {trade.row_id}  {trade.symbol:<6} {trade.expiry_date} ({trade.dte}d)  {legs}  "
                f"{trade.net_credit}  max loss {trade.max_loss}  BE {be}  ROR {trade.ror.label}"
            )
            print(f"    {trade.details}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
