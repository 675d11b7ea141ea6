from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from clicksim.config import BASELINE_TICK_MS, SCHEMA_VERSION


@dataclass(frozen=True)
class UpgradeProgress:
    """Owned level of one upgrade and the price of the next level."""

    level: int = 0
    next_cost: float = 0.0


@dataclass(frozen=True)
class StateDelta:
    """Absolute replacement values for the parts of the state that changed.

    Scalar fields left as ``None`` are unchanged. ``upgrades`` replaces the
    progress entries it names, and ``achieved`` adds milestone ids.
    """

    resources: float | None = None
    total_actions: float | None = None
    manual_power: float | None = None
    automation_rate: float | None = None
    tick_interval_ms: int | None = None
    upgrades: dict[str, UpgradeProgress] = field(default_factory=dict)
    achieved: frozenset[str] = frozenset()

    @property
    def empty(self) -> bool:
        return self == StateDelta()

    def merge(self, other: StateDelta) -> StateDelta:
        """Compose two deltas; values set on *other* win."""
        return StateDelta(
            resources=_pick(other.resources, self.resources),
            total_actions=_pick(other.total_actions, self.total_actions),
            manual_power=_pick(other.manual_power, self.manual_power),
            automation_rate=_pick(other.automation_rate, self.automation_rate),
            tick_interval_ms=_pick(other.tick_interval_ms, self.tick_interval_ms),
            upgrades={**self.upgrades, **other.upgrades},
            achieved=self.achieved | other.achieved,
        )


def _pick(new, old):
    return old if new is None else new


@dataclass
class SimulationState:
    """The single aggregate of player progress."""

    resources: float = 0.0
    total_actions: float = 0.0
    manual_power: float = 1.0
    automation_rate: float = 0.0
    upgrades: dict[str, UpgradeProgress] = field(default_factory=dict)
    achieved_milestones: set[str] = field(default_factory=set)
    tick_interval_ms: int = BASELINE_TICK_MS
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def fresh(cls) -> SimulationState:
        return cls()

    def copy(self) -> SimulationState:
        return dataclasses.replace(
            self,
            upgrades=dict(self.upgrades),
            achieved_milestones=set(self.achieved_milestones),
        )

    def apply(self, delta: StateDelta) -> SimulationState:
        """Return a new state with *delta* applied; ``self`` is untouched."""
        upgrades = dict(self.upgrades)
        upgrades.update(delta.upgrades)
        return SimulationState(
            resources=_pick(delta.resources, self.resources),
            total_actions=_pick(delta.total_actions, self.total_actions),
            manual_power=_pick(delta.manual_power, self.manual_power),
            automation_rate=_pick(delta.automation_rate, self.automation_rate),
            upgrades=upgrades,
            achieved_milestones=self.achieved_milestones | delta.achieved,
            tick_interval_ms=_pick(delta.tick_interval_ms, self.tick_interval_ms),
            schema_version=self.schema_version,
        )

    def level_of(self, upgrade_id: str) -> int:
        progress = self.upgrades.get(upgrade_id)
        return progress.level if progress else 0

    def has_milestone(self, milestone_id: str) -> bool:
        return milestone_id in self.achieved_milestones
