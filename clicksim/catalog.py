from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto


class UpgradeCategory(Enum):
    MANUAL = auto()
    AUTOMATION = auto()


@dataclass(frozen=True)
class UpgradeDefinition:
    """Static definition of a purchasable upgrade."""

    id: str
    name: str
    description: str
    base_cost: float
    cost_growth: float
    base_power: float
    category: UpgradeCategory
    icon: str = ""

    def __post_init__(self) -> None:
        if self.base_cost <= 0:
            raise ValueError(f"Upgrade {self.id!r}: base_cost must be positive")
        if self.cost_growth <= 1:
            raise ValueError(f"Upgrade {self.id!r}: cost_growth must exceed 1")
        if self.base_power <= 0:
            raise ValueError(f"Upgrade {self.id!r}: base_power must be positive")


UPGRADES: tuple[UpgradeDefinition, ...] = (
    UpgradeDefinition(
        id="finger-training",
        name="Finger Training",
        description="Precision drills boost manual clicking power.",
        base_cost=15,
        cost_growth=1.15,
        base_power=1,
        category=UpgradeCategory.MANUAL,
        icon="🖐️",
    ),
    UpgradeDefinition(
        id="titanium-pointer",
        name="Titanium Pointer",
        description="A high-tech stylus engineered for clicks.",
        base_cost=120,
        cost_growth=1.22,
        base_power=8,
        category=UpgradeCategory.MANUAL,
        icon="🖱️",
    ),
    UpgradeDefinition(
        id="quantum-glove",
        name="Quantum Glove",
        description="Phase-shifted taps register multiple hits.",
        base_cost=850,
        cost_growth=1.3,
        base_power=32,
        category=UpgradeCategory.MANUAL,
        icon="🧤",
    ),
    UpgradeDefinition(
        id="nanobot-squad",
        name="Nanobot Squad",
        description="Swarm of nanobots assisting each click.",
        base_cost=4200,
        cost_growth=1.38,
        base_power=120,
        category=UpgradeCategory.MANUAL,
        icon="🤖",
    ),
    UpgradeDefinition(
        id="macro-rig",
        name="Macro Rig",
        description="Automated macros perform relentless clicking.",
        base_cost=75,
        cost_growth=1.2,
        base_power=0.5,
        category=UpgradeCategory.AUTOMATION,
        icon="⚙️",
    ),
    UpgradeDefinition(
        id="drone-fleet",
        name="Drone Fleet",
        description="Personal drone squad executing per-second taps.",
        base_cost=650,
        cost_growth=1.25,
        base_power=8,
        category=UpgradeCategory.AUTOMATION,
        icon="🛸",
    ),
    UpgradeDefinition(
        id="fusion-reactor",
        name="Fusion Reactor",
        description="Bends time, delivering streams of simulated clicks.",
        base_cost=5800,
        cost_growth=1.3,
        base_power=44,
        category=UpgradeCategory.AUTOMATION,
        icon="⚛️",
    ),
    UpgradeDefinition(
        id="chroniton-loop",
        name="Chroniton Loop",
        description="Cycles future energy into present automation.",
        base_cost=24000,
        cost_growth=1.35,
        base_power=165,
        category=UpgradeCategory.AUTOMATION,
        icon="🌀",
    ),
)

_UPGRADES_BY_ID = {u.id: u for u in UPGRADES}


def get_upgrade(
    upgrade_id: str, catalog: Sequence[UpgradeDefinition] = UPGRADES
) -> UpgradeDefinition | None:
    if catalog is UPGRADES:
        return _UPGRADES_BY_ID.get(upgrade_id)
    for udef in catalog:
        if udef.id == upgrade_id:
            return udef
    return None
