from __future__ import annotations

from dataclasses import dataclass

from clicksim.state import SimulationState


@dataclass
class StateSnapshot:
    time: float
    resources: float
    total_actions: float
    manual_power: float
    automation_rate: float
    tick_interval_ms: int


@dataclass
class PurchaseEvent:
    time: float
    upgrade_id: str
    cost_paid: float
    level: int
    resources_after: float


@dataclass
class MilestoneEvent:
    time: float
    milestone_id: str


class MetricsCollector:
    """Collects simulation metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = -1.0

        self.snapshots: list[StateSnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.milestones: list[MilestoneEvent] = []

    def record_tick(self, state: SimulationState, time: float) -> None:
        """Record a snapshot if enough time has passed."""
        if time - self._last_snapshot_time >= self.snapshot_interval:
            self.snapshots.append(
                StateSnapshot(
                    time=time,
                    resources=state.resources,
                    total_actions=state.total_actions,
                    manual_power=state.manual_power,
                    automation_rate=state.automation_rate,
                    tick_interval_ms=state.tick_interval_ms,
                )
            )
            self._last_snapshot_time = time

    def record_purchase(
        self,
        state: SimulationState,
        time: float,
        upgrade_id: str,
        cost_paid: float,
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=time,
                upgrade_id=upgrade_id,
                cost_paid=cost_paid,
                level=state.level_of(upgrade_id),
                resources_after=state.resources,
            )
        )

    def record_milestone(self, time: float, milestone_id: str) -> None:
        self.milestones.append(MilestoneEvent(time=time, milestone_id=milestone_id))
