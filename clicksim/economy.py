from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from clicksim.catalog import UPGRADES, UpgradeCategory, UpgradeDefinition, get_upgrade
from clicksim.config import MIN_TICK_MS
from clicksim.state import SimulationState, StateDelta, UpgradeProgress

_LOGGER = logging.getLogger(__name__)

# Pacing coupling: each fifth level of an automation upgrade shortens the
# global tick interval.
AUTOMATION_TIER_LEVELS = 5
AUTOMATION_TIER_TICK_REDUCTION_MS = 30


@dataclass(frozen=True)
class Rejected:
    """A purchase the player cannot make right now."""

    upgrade_id: str
    reason: str


def compute_next_cost(definition: UpgradeDefinition, level: int) -> int:
    """Cost of buying level ``level + 1``: ceil(base * growth^level)."""
    return math.ceil(definition.base_cost * definition.cost_growth ** level)


def tier(level: int) -> int:
    return level // AUTOMATION_TIER_LEVELS


def reduce_tick_interval(interval_ms: int, amount_ms: int) -> int:
    return max(MIN_TICK_MS, interval_ms - amount_ms)


def current_progress(
    definition: UpgradeDefinition, state: SimulationState
) -> UpgradeProgress:
    progress = state.upgrades.get(definition.id)
    if progress is None:
        return UpgradeProgress(level=0, next_cost=compute_next_cost(definition, 0))
    return progress


def purchase(
    state: SimulationState,
    upgrade_id: str,
    catalog: Sequence[UpgradeDefinition] = UPGRADES,
) -> StateDelta | Rejected:
    """Price and describe buying one level of *upgrade_id*."""
    udef = get_upgrade(upgrade_id, catalog)
    if udef is None:
        return Rejected(upgrade_id, "Unknown upgrade")

    progress = current_progress(udef, state)
    if state.resources < progress.next_cost:
        return Rejected(upgrade_id, "Cannot afford")

    level = progress.level + 1
    new_progress = UpgradeProgress(level=level, next_cost=compute_next_cost(udef, level))

    if udef.category is UpgradeCategory.MANUAL:
        delta = StateDelta(
            resources=state.resources - progress.next_cost,
            manual_power=state.manual_power + udef.base_power,
            upgrades={udef.id: new_progress},
        )
    else:
        tick_interval_ms = state.tick_interval_ms
        if level % AUTOMATION_TIER_LEVELS == 0:
            tick_interval_ms = reduce_tick_interval(
                tick_interval_ms, AUTOMATION_TIER_TICK_REDUCTION_MS
            )
        delta = StateDelta(
            resources=state.resources - progress.next_cost,
            automation_rate=state.automation_rate + udef.base_power,
            tick_interval_ms=tick_interval_ms,
            upgrades={udef.id: new_progress},
        )

    _LOGGER.debug(
        "Purchased %s level %d for %s", udef.id, level, progress.next_cost
    )
    return delta
