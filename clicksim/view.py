from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from clicksim.catalog import UPGRADES, UpgradeCategory, UpgradeDefinition
from clicksim.economy import current_progress, tier
from clicksim.milestone import MILESTONES, Milestone
from clicksim.state import SimulationState


@dataclass(frozen=True)
class UpgradeView:
    """Catalog entry merged with the player's progress on it."""

    id: str
    name: str
    description: str
    icon: str
    category: UpgradeCategory
    base_power: float
    level: int
    next_cost: float
    affordable: bool
    progress: float
    tier: int


@dataclass(frozen=True)
class MilestoneView:
    id: str
    title: str
    description: str
    reward: str
    threshold: float
    achieved: bool
    progress: float


@dataclass(frozen=True)
class StateView:
    """Read-only snapshot handed to presentation code."""

    resources: float
    total_actions: float
    manual_power: float
    automation_rate: float
    per_second: float
    tick_interval_ms: int
    upgrades: tuple[UpgradeView, ...]
    milestones: tuple[MilestoneView, ...]

    def upgrade(self, upgrade_id: str) -> UpgradeView | None:
        for u in self.upgrades:
            if u.id == upgrade_id:
                return u
        return None


def project_upgrades(
    state: SimulationState, catalog: Sequence[UpgradeDefinition] = UPGRADES
) -> list[UpgradeView]:
    result: list[UpgradeView] = []
    for udef in catalog:
        progress = current_progress(udef, state)
        result.append(
            UpgradeView(
                id=udef.id,
                name=udef.name,
                description=udef.description,
                icon=udef.icon,
                category=udef.category,
                base_power=udef.base_power,
                level=progress.level,
                next_cost=progress.next_cost,
                affordable=state.resources >= progress.next_cost,
                progress=min(1.0, state.resources / progress.next_cost),
                tier=(
                    tier(progress.level)
                    if udef.category is UpgradeCategory.AUTOMATION
                    else 0
                ),
            )
        )
    return result


def project_milestones(
    state: SimulationState, milestones: Sequence[Milestone] = MILESTONES
) -> list[MilestoneView]:
    return [
        MilestoneView(
            id=m.id,
            title=m.title,
            description=m.description,
            reward=m.reward,
            threshold=m.threshold,
            achieved=state.has_milestone(m.id),
            progress=m.progress(state),
        )
        for m in milestones
    ]


def build_view(
    state: SimulationState,
    catalog: Sequence[UpgradeDefinition] = UPGRADES,
    milestones: Sequence[Milestone] = MILESTONES,
) -> StateView:
    return StateView(
        resources=state.resources,
        total_actions=state.total_actions,
        manual_power=state.manual_power,
        automation_rate=state.automation_rate,
        per_second=state.automation_rate + state.manual_power,
        tick_interval_ms=state.tick_interval_ms,
        upgrades=tuple(project_upgrades(state, catalog)),
        milestones=tuple(project_milestones(state, milestones)),
    )
