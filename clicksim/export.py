from __future__ import annotations

import csv
import json
from pathlib import Path

from clicksim.persistence import Snapshot
from clicksim.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export simulation data as CSV files.

    Creates three files:
      - {path}_snapshots.csv
      - {path}_purchases.csv
      - {path}_milestones.csv
    """
    base = str(path)

    with open(f"{base}_snapshots.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "time", "resources", "total_actions",
            "manual_power", "automation_rate", "tick_interval_ms",
        ])
        for s in report.snapshots:
            writer.writerow([
                s.time, s.resources, s.total_actions,
                s.manual_power, s.automation_rate, s.tick_interval_ms,
            ])

    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "upgrade_id", "level", "cost_paid", "resources_after"])
        for p in report.purchases:
            writer.writerow([p.time, p.upgrade_id, p.level, p.cost_paid, p.resources_after])

    with open(f"{base}_milestones.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "milestone_id"])
        for m in report.milestones:
            writer.writerow([m.time, m.milestone_id])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the report summary, events and final save snapshot as JSON."""
    data = {
        "strategy": report.strategy_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "milestone_times": report.milestone_times,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "final_state": Snapshot.from_state(report.final_state).model_dump(by_alias=True),
        "milestones": [
            {"time": m.time, "milestone_id": m.milestone_id}
            for m in report.milestones
        ],
        "purchases": [
            {
                "time": p.time,
                "upgrade_id": p.upgrade_id,
                "level": p.level,
                "cost_paid": p.cost_paid,
            }
            for p in report.purchases
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
