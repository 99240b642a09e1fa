"""Command-line front end for the allocation sandbox.

Usage:
    python -m src.ui.cli optimize 10000 5 --days 60 --seed 7
    python -m src.ui.cli protocols --risk-max 3
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console

from config.settings import get_settings
from src.core.exceptions import SandboxError
from src.sandbox.random_source import create_random_source
from src.sandbox.service import PortfolioService
from src.ui.report import allocation_table, protocols_table, simulation_panel, summary_panel

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yield-sandbox",
        description="Allocate an amount across yield protocols and simulate the result.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    optimize = subparsers.add_parser("optimize", help="Optimize an allocation and simulate it")
    optimize.add_argument("amount", type=float, help="Amount to invest")
    optimize.add_argument("risk_tolerance", type=int, help="Risk tolerance, 1-10")
    optimize.add_argument("--days", type=int, default=None, help="Simulation horizon in days")
    optimize.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    optimize.add_argument("--no-simulation", action="store_true", help="Skip the value simulation")

    protocols = subparsers.add_parser("protocols", help="List catalog protocols")
    protocols.add_argument("--risk-max", type=int, default=None)
    protocols.add_argument("--apy-min", type=float, default=None)
    protocols.add_argument("--liquidity", default=None)

    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    console = console or Console()

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    seed = getattr(args, "seed", None)
    random_source = create_random_source(seed if seed is not None else settings.random_seed)
    service = PortfolioService(settings=settings, random_source=random_source)

    try:
        if args.command == "protocols":
            protocols = service.list_protocols(
                risk_max=args.risk_max,
                apy_min=args.apy_min,
                liquidity=args.liquidity,
            )
            console.print(protocols_table(protocols))
            console.print(f"[dim]{len(protocols)} protocols[/]")
            return 0

        result = service.optimize(args.amount, args.risk_tolerance)
        console.print(summary_panel(result))
        console.print(allocation_table(result))

        if not args.no_simulation and not result.is_empty:
            report = service.simulate(result, days=args.days)
            console.print(simulation_panel(report, initial_value=result.total_allocated))

        return 0

    except SandboxError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
