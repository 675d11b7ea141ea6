from __future__ import annotations

from dataclasses import dataclass, field

from clicksim.metrics import (
    MetricsCollector,
    MilestoneEvent,
    PurchaseEvent,
    StateSnapshot,
)
from clicksim.state import SimulationState


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    outcome: str = ""
    total_time: float = 0.0
    final_state: SimulationState = field(default_factory=SimulationState.fresh)

    # Raw metrics
    snapshots: list[StateSnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    milestones: list[MilestoneEvent] = field(default_factory=list)

    # Derived metrics
    milestone_times: dict[str, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def milestone_time(self, milestone_id: str) -> float | None:
        return self.milestone_times.get(milestone_id)

    def series(self, attr: str) -> list[tuple[float, float]]:
        """Return (time, value) pairs for a StateSnapshot attribute."""
        return [(s.time, getattr(s, attr)) for s in self.snapshots]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    outcome: str,
    total_time: float,
    final_state: SimulationState,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    milestone_times = {m.milestone_id: m.time for m in collector.milestones}

    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])  # gap from t=0 to first purchase
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        outcome=outcome,
        total_time=total_time,
        final_state=final_state,
        snapshots=collector.snapshots,
        purchases=collector.purchases,
        milestones=collector.milestones,
        milestone_times=milestone_times,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
    )
