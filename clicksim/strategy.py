from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from clicksim.catalog import UpgradeCategory
from clicksim.state import SimulationState
from clicksim.view import UpgradeView


@dataclass
class TapProfile:
    """How often a simulated player taps."""

    taps_per_second: float = 0.0
    stop_after_milestone: str | None = None

    def get_taps(
        self,
        state: SimulationState,
        duration: float,
        rng: random.Random | None = None,
    ) -> int:
        """Whole taps for *duration*; the fractional part is rolled with *rng*."""
        if self.stop_after_milestone and state.has_milestone(self.stop_after_milestone):
            return 0
        expected = max(0.0, self.taps_per_second * duration)
        taps = int(expected)
        if rng is not None and rng.random() < expected - taps:
            taps += 1
        return taps


class Strategy(ABC):
    """Base class for simulated players."""

    def __init__(self, tap_profile: TapProfile | None = None) -> None:
        self.tap_profile = tap_profile

    @abstractmethod
    def decide_purchases(
        self, state: SimulationState, upgrades: list[UpgradeView]
    ) -> list[str]:
        """Return ordered list of upgrade IDs to buy now."""
        ...

    def get_taps(
        self,
        state: SimulationState,
        duration: float,
        rng: random.Random | None = None,
    ) -> int:
        if self.tap_profile:
            return self.tap_profile.get_taps(state, duration, rng)
        return 0

    @abstractmethod
    def describe(self) -> str: ...

    def _describe_taps(self, name: str) -> str:
        if self.tap_profile and self.tap_profile.taps_per_second:
            return f"{name} ({self.tap_profile.taps_per_second:g} taps/s)"
        return name


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable upgrade first."""

    def decide_purchases(
        self, state: SimulationState, upgrades: list[UpgradeView]
    ) -> list[str]:
        affordable = [u for u in upgrades if u.affordable]
        return [u.id for u in sorted(affordable, key=lambda u: u.next_cost)]

    def describe(self) -> str:
        return self._describe_taps("GreedyCheapest")


class SaveForBest(Strategy):
    """Save up for the upgrade with the best yield per credit spent.

    Manual power is valued at the tap rate, automation at face value, so a
    player who never taps only ever saves for automation.
    """

    def _value(self, upgrade: UpgradeView) -> float:
        if upgrade.category is UpgradeCategory.AUTOMATION:
            return upgrade.base_power
        taps = self.tap_profile.taps_per_second if self.tap_profile else 0.0
        return upgrade.base_power * taps

    def decide_purchases(
        self, state: SimulationState, upgrades: list[UpgradeView]
    ) -> list[str]:
        if not upgrades:
            return []
        candidates = [u for u in upgrades if self._value(u) > 0]
        if candidates:
            best = max(candidates, key=lambda u: self._value(u) / u.next_cost)
        else:
            best = min(upgrades, key=lambda u: u.next_cost)
        return [best.id] if best.affordable else []

    def describe(self) -> str:
        return self._describe_taps("SaveForBest")
