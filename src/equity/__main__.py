# src/equity/__main__.py
from __future__ import annotations

import json
import sys
from pathlib import Path

from src.bootstrap.env import env_debug
from src.equity.config import load_equity_config
from src.data.coin_stats_client import CoinStatsClient
from src.equity.cycle import EquityCurveController

USAGE = "Usage: python3 -m src.equity [curve|summary|svg|png]"


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 0

    cmd = args[0].lower()
    if cmd not in ("curve", "summary", "svg", "png"):
        print("unknown command")
        print(USAGE)
        return 2

    cfg = load_equity_config()
    print(
        f"[INFO] symbols={cfg['symbols']} exchange={cfg['exchange']} "
        f"starting_balance={cfg['starting_balance']}",
        file=sys.stderr,
    )
    env = {k: v for k, v in env_debug().items() if v is not None}
    print(f"[INFO] env={env}", file=sys.stderr)

    ctl = EquityCurveController(
        CoinStatsClient.from_env(),
        cfg["symbols"],
        exchange=cfg["exchange"],
        starting_balance=cfg["starting_balance"],
        db=cfg["db"],
    )
    try:
        ctl.run_cycle()
    finally:
        ctl.close()

    state = ctl.state
    if state.error:
        print(f"[ERROR] {state.error}", file=sys.stderr)
        return 1

    if cmd == "curve":
        print(json.dumps(state.points, indent=2))
    elif cmd == "summary":
        print(json.dumps(state.summary, indent=2))
    elif cmd == "svg":
        from src.reports.equity_svg import render_equity_svg

        svg = render_equity_svg(
            state.points,
            state.starting_balance,
            width=cfg["width"],
            height=cfg["height"],
            palette=cfg["palette"],
        )
        out = Path("data") / "reports" / "equity_daily.svg"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(svg, encoding="utf-8")
        print(f"saved: {out}")
    else:
        from src.reports.plot_equity import plot_equity_png

        out = plot_equity_png(state.points, state.starting_balance, palette=cfg["palette"])
        if out is not None:
            print(f"saved: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
