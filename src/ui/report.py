"""Rich renderables for optimization and simulation output."""

import math
from typing import List, Mapping

import asciichartpy as acp
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.core.models import Protocol
from src.sandbox.models import OptimizationResult, SimulationReport

LIQUIDITY_STYLES = {
    "very_high": "green bold",
    "high": "green",
    "medium": "yellow",
    "low": "red",
}


def _risk_style(risk: float) -> str:
    if risk <= 3:
        return "green"
    if risk <= 6:
        return "yellow"
    return "red"


def allocation_table(result: OptimizationResult) -> Table:
    """Table of allocated positions, largest first."""
    table = Table(
        show_header=True,
        header_style="bold orange1",
        border_style="dim",
        expand=True,
        padding=(0, 1),
    )
    table.add_column("Protocol", style="cyan")
    table.add_column("Share", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("APY", justify="right", style="green")
    table.add_column("Risk", justify="right")
    table.add_column("Liquidity", justify="center")

    entries = sorted(result.allocation.values(), key=lambda e: e.amount, reverse=True)
    for entry in entries:
        tier = entry.liquidity.value
        table.add_row(
            entry.protocol,
            f"{entry.percentage:.2f}%",
            f"${entry.amount:,.2f}",
            f"{entry.apy:.2f}%",
            Text(str(entry.risk), style=_risk_style(entry.risk)),
            Text(tier, style=LIQUIDITY_STYLES.get(tier, "dim")),
        )

    if not entries:
        table.add_row(Text("No protocol qualified", style="dim italic"), "", "", "", "", "")

    return table


def summary_panel(result: OptimizationResult) -> Panel:
    """Headline metrics of an optimization."""
    content = Text()

    content.append("Profile: ", style="dim")
    content.append(f"{result.profile}\n", style="bold cyan")

    content.append("Expected APY: ", style="dim")
    content.append(f"{result.expected_apy:.2f}%", style="green bold")
    content.append("  Risk: ", style="dim")
    content.append(f"{result.risk_score:.2f}", style=_risk_style(result.risk_score))
    content.append("  Diversification: ", style="dim")
    content.append(f"{result.diversification_score:.1f}/10", style="white")
    content.append("  Confidence: ", style="dim")
    content.append(f"{result.confidence}%\n", style="yellow")

    projected = result.projected_yield
    content.append("Yield: ", style="dim")
    content.append(
        f"${projected.daily:,.2f}/day  ${projected.weekly:,.2f}/wk  "
        f"${projected.monthly:,.2f}/mo  ${projected.yearly:,.2f}/yr\n",
        style="white",
    )

    content.append("Rebalance by: ", style="dim")
    content.append(result.rebalance_date.strftime("%Y-%m-%d"), style="white")

    return Panel(content, title="[bold orange1]Optimization[/]", border_style="orange1")


CHART_WIDTH = 72


def value_chart(values: List[float], initial_value: float, height: int = 10) -> Text:
    """Line chart of portfolio value, green when it ends above the starting value."""
    if not values:
        return Text("Nothing to chart", style="dim")

    # Long horizons are thinned to one point per stride, always keeping the last day
    stride = math.ceil(len(values) / CHART_WIDTH)
    points = values[::stride]
    if (len(values) - 1) % stride:
        points.append(values[-1])

    color = acp.green if values[-1] >= initial_value else acp.red
    chart = acp.plot(points, {"height": height, "colors": [color], "format": "{:>12,.2f}"})
    return Text.from_ansi(chart)


def simulation_panel(report: SimulationReport, initial_value: float) -> Panel:
    """Simulated value path with start/end summary."""
    series = report.value_series

    content = Text()
    if report.days:
        first = report.days[0]
        last = report.days[-1]
        change = last.total_value - initial_value
        change_pct = change / initial_value * 100 if initial_value else 0.0

        content.append("Period: ", style="dim")
        content.append(f"{first.date.isoformat()} → {last.date.isoformat()}\n", style="white")
        content.append("Final value: ", style="dim")
        content.append(f"${last.total_value:,.2f}", style="bold")
        content.append(
            f"  ({'+' if change >= 0 else ''}{change:,.2f}, {change_pct:+.2f}%)\n\n",
            style="green" if change >= 0 else "red",
        )

    content.append_text(value_chart(series, initial_value))

    return Panel(
        content,
        title=f"[bold orange1]Simulation ({len(report.days)} days)[/]",
        border_style="dim",
    )


def protocols_table(protocols: Mapping[str, Protocol]) -> Table:
    """Catalog listing."""
    table = Table(
        show_header=True,
        header_style="bold orange1",
        border_style="dim",
        padding=(0, 1),
    )
    table.add_column("Protocol", style="cyan")
    table.add_column("APY", justify="right", style="green")
    table.add_column("Risk", justify="right")
    table.add_column("TVL", justify="right")
    table.add_column("Liquidity", justify="center")

    for protocol in protocols.values():
        tier = protocol.liquidity.value
        table.add_row(
            protocol.name,
            f"{protocol.apy:.2f}%",
            Text(str(protocol.risk_score), style=_risk_style(protocol.risk_score)),
            f"${protocol.tvl / 1e6:,.1f}M",
            Text(tier, style=LIQUIDITY_STYLES.get(tier, "dim")),
        )

    return table
