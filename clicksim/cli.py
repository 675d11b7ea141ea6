from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from clicksim.api import ActionAPI
from clicksim.config import EngineConfig, configure_logging
from clicksim.controller import SimulationController
from clicksim.driver import AsyncioTickDriver, TickDriver
from clicksim.formatting import format_state_view, format_text_report
from clicksim.persistence import PersistenceManager
from clicksim.simulation import Simulation
from clicksim.storage import FileStore
from clicksim.strategy import GreedyCheapest, SaveForBest, Strategy, TapProfile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clicksim",
        description="clicksim: Clicker Simf idle engine",
    )
    parser.add_argument("--save-dir", default=None, help="Directory for the save file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $CLICKSIM_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a headless simulation")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "save_for_best"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--tps", type=float, default=0.0, help="Taps per second")
    sim.add_argument(
        "--duration", type=float, default=3600, help="Simulated seconds to run"
    )
    sim.add_argument("--seed", type=int, default=None, help="Random seed")
    sim.add_argument(
        "--until-complete",
        action="store_true",
        help="Stop once every milestone is achieved",
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    sub.add_parser("show", help="Show the saved game")

    tap = sub.add_parser("tap", help="Tap on the saved game")
    tap.add_argument("count", type=int, nargs="?", default=1)

    buy = sub.add_parser("buy", help="Buy an upgrade on the saved game")
    buy.add_argument("upgrade_id")

    idle = sub.add_parser("idle", help="Let automation run in real time")
    idle.add_argument("seconds", type=float)

    sub.add_parser("reset", help="Erase the saved game")

    return parser


def build_strategy(name: str, tps: float) -> Strategy:
    tap_profile = TapProfile(taps_per_second=tps) if tps > 0 else None
    if name == "save_for_best":
        return SaveForBest(tap_profile=tap_profile)
    return GreedyCheapest(tap_profile=tap_profile)


def open_session(
    config: EngineConfig, driver: TickDriver | None = None
) -> SimulationController:
    """Controller over the on-disk save described by *config*."""
    persistence = PersistenceManager(FileStore(config.save_dir), key=config.storage_key)
    return SimulationController(persistence, driver=driver)


async def _idle(config: EngineConfig, seconds: float) -> SimulationController:
    controller = open_session(config, driver=AsyncioTickDriver())
    controller.start()
    try:
        await asyncio.sleep(seconds)
    finally:
        controller.stop()
    return controller


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EngineConfig.from_env()
    if args.save_dir:
        config.save_dir = Path(args.save_dir)
    if args.log_level:
        config.log_level = args.log_level
    configure_logging(config.log_level)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        _run_simulation(args)
        return

    if args.command == "idle":
        if args.seconds <= 0:
            print("Error: seconds must be positive", file=sys.stderr)
            sys.exit(2)
        controller = asyncio.run(_idle(config, args.seconds))
        print(format_state_view(ActionAPI(controller).view()))
        return

    api = ActionAPI(open_session(config))

    if args.command == "show":
        view = api.view()
    elif args.command == "tap":
        if args.count < 1:
            print("Error: count must be at least 1", file=sys.stderr)
            sys.exit(2)
        for _ in range(args.count):
            view = api.tap()
    elif args.command == "buy":
        before = api.view().upgrade(args.upgrade_id)
        if before is None:
            print(f"Error: unknown upgrade {args.upgrade_id!r}", file=sys.stderr)
            sys.exit(2)
        view = api.buy(args.upgrade_id)
        if view.upgrade(args.upgrade_id).level == before.level:
            print(f"Cannot afford {before.name} yet.")
    else:  # reset
        view = api.reset()
        print("Progress reset.")

    print(format_state_view(view))


def _run_simulation(args) -> None:
    strategy = build_strategy(args.strategy, args.tps)
    sim = Simulation(
        strategy=strategy,
        duration=args.duration,
        seed=args.seed,
        stop_when_complete=args.until_complete,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.export_csv:
        from clicksim.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}_*.csv")

    if args.export_json:
        from clicksim.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from clicksim.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")
