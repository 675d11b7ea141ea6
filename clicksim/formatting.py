from __future__ import annotations

import math

from clicksim.catalog import UpgradeCategory
from clicksim.report import SimulationReport
from clicksim.view import StateView

_SUFFIXES = (
    (1_000_000_000, "b"),
    (1_000_000, "m"),
    (1_000, "k"),
)


def format_number(value: float) -> str:
    """Abbreviate *value* for display: 1.50k, 2.00m, 3.25b; small values truncated."""
    for threshold, suffix in _SUFFIXES:
        if value >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    if value == 0:
        return "0"
    return str(math.trunc(value))


def format_state_view(view: StateView) -> str:
    """Render a StateView as a plain-text panel."""
    lines: list[str] = []
    lines.append(f"Simf Credits:    {format_number(view.resources)}")
    lines.append(f"Manual Strength: {format_number(view.manual_power)}")
    lines.append(f"Automation Rate: {format_number(view.automation_rate)}")
    lines.append(f"Total Taps:      {format_number(view.total_actions)}")
    lines.append(f"Simf per Second: {format_number(view.per_second)}")
    lines.append(f"Tick interval:   {view.tick_interval_ms} ms")
    lines.append("")

    lines.append("UPGRADES:")
    for u in view.upgrades:
        marker = "  *" if u.affordable else "   "
        per = "per tap" if u.category is UpgradeCategory.MANUAL else "/ sec"
        lines.append(
            f"{marker} {u.name:.<24s} Lv {u.level:<4d} "
            f"cost {format_number(u.next_cost):>8s}  +{format_number(u.base_power)} {per}"
        )
    lines.append("")

    lines.append("MILESTONES:")
    for m in view.milestones:
        marker = "  [x]" if m.achieved else "  [ ]"
        lines.append(f"{marker} {m.title:.<24s} {m.progress * 100:5.1f}%  ({m.reward})")

    return "\n".join(lines)


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " clicksim Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append("")

    if report.milestones:
        lines.append("MILESTONES:")
        for m in report.milestones:
            lines.append(f"  * {m.milestone_id:.<30s} {m.time:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")
    lines.append("")

    final = report.final_state
    lines.append("FINAL STATE:")
    lines.append(f"  Resources: {format_number(final.resources)}")
    lines.append(f"  Total actions: {format_number(final.total_actions)}")
    lines.append(f"  Manual power: {format_number(final.manual_power)}")
    lines.append(f"  Automation rate: {format_number(final.automation_rate)}")
    lines.append(f"  Tick interval: {final.tick_interval_ms} ms")

    return "\n".join(lines)
