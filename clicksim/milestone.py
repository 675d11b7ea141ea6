from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from clicksim.economy import reduce_tick_interval
from clicksim.state import SimulationState, StateDelta

_LOGGER = logging.getLogger(__name__)


class Metric(Enum):
    TOTAL_ACTIONS = auto()
    RESOURCES = auto()

    def read(self, state: SimulationState) -> float:
        if self is Metric.RESOURCES:
            return state.resources
        return state.total_actions


@dataclass(frozen=True)
class Milestone:
    """A one-time reward that fires when its metric reaches a threshold."""

    id: str
    title: str
    threshold: float
    effect: Callable[[SimulationState], StateDelta]
    metric: Metric = Metric.TOTAL_ACTIONS
    description: str = ""
    reward: str = ""

    def is_reached(self, state: SimulationState) -> bool:
        return self.metric.read(state) >= self.threshold

    def progress(self, state: SimulationState) -> float:
        return min(1.0, self.metric.read(state) / self.threshold)


MILESTONES: tuple[Milestone, ...] = (
    Milestone(
        id="first-click",
        title="First Tap",
        threshold=1,
        effect=lambda s: StateDelta(manual_power=s.manual_power + 1),
        description="Make your first simulated tap.",
        reward="+1 manual strength",
    ),
    Milestone(
        id="hundred-clicks",
        title="Fast Fingers",
        threshold=100,
        # Milestones also drive pacing, alongside automation tiers.
        effect=lambda s: StateDelta(
            tick_interval_ms=reduce_tick_interval(s.tick_interval_ms, 150)
        ),
        description="Accumulate 100 total taps.",
        reward="Faster automation interval",
    ),
    Milestone(
        id="thousand-clicks",
        title="Click Maestro",
        threshold=1_000,
        effect=lambda s: StateDelta(automation_rate=s.automation_rate + 30),
        description="Reach 1,000 total taps.",
        reward="+30 automation rate",
    ),
    Milestone(
        id="millionaire",
        title="Pocket Millionaire",
        threshold=1_000_000,
        effect=lambda s: StateDelta(manual_power=s.manual_power * 1.2),
        metric=Metric.RESOURCES,
        description="Bank one million Simf Credits.",
        reward="+20% manual strength",
    ),
)


def evaluate(
    state: SimulationState, milestones: Sequence[Milestone] = MILESTONES
) -> StateDelta:
    """Fire every unachieved milestone whose threshold has been met.

    Milestones are visited in declaration order. Each effect sees the state
    as left by the effects fired before it in the same pass.
    """
    delta = StateDelta()
    projected = state
    for milestone in milestones:
        if projected.has_milestone(milestone.id):
            continue
        if not milestone.is_reached(projected):
            continue
        fired = milestone.effect(projected).merge(
            StateDelta(achieved=frozenset({milestone.id}))
        )
        projected = projected.apply(fired)
        delta = delta.merge(fired)
        _LOGGER.info("Milestone achieved: %s", milestone.id)
    return delta
