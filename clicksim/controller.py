from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Callable

from clicksim import accrual, economy
from clicksim.catalog import UPGRADES, UpgradeDefinition
from clicksim.economy import Rejected
from clicksim.milestone import MILESTONES, Milestone, evaluate
from clicksim.persistence import PersistenceManager
from clicksim.state import SimulationState, StateDelta
from clicksim.driver import TickDriver

_LOGGER = logging.getLogger(__name__)


class SimulationController:
    """Sole owner and mutator of the simulation state.

    Every entry point applies its component's delta, runs the milestone
    evaluator and then saves. Entry points are not reentrant.
    """

    def __init__(
        self,
        persistence: PersistenceManager,
        driver: TickDriver | None = None,
        catalog: Sequence[UpgradeDefinition] = UPGRADES,
        milestones: Sequence[Milestone] = MILESTONES,
    ) -> None:
        self.persistence = persistence
        self.driver = driver
        self.catalog = catalog
        self.milestones = milestones
        self._busy = False
        self._defer_saves = False
        self._listeners: list[Callable[[SimulationState], None]] = []

        restored = persistence.restore()
        if restored is None:
            self._state = SimulationState.fresh()
        else:
            self._state = restored
            _LOGGER.info("Restored saved game")

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def state(self) -> SimulationState:
        """A copy of the current state; mutate it freely."""
        return self._state.copy()

    def subscribe(self, listener: Callable[[SimulationState], None]) -> None:
        """Call *listener* with a state copy after each committed change."""
        self._listeners.append(listener)

    # ── Tick driver ──────────────────────────────────────────────────

    def start(self) -> None:
        if self.driver is not None:
            self.driver.start(self._state.tick_interval_ms, self.tick)

    def stop(self) -> None:
        if self.driver is not None:
            self.driver.cancel()

    @contextmanager
    def batched_saves(self) -> Iterator[None]:
        """Hold back per-change saves inside the block and save once on exit.

        For fast-forwarding a simulated clock, where every tick would
        otherwise rewrite the save.
        """
        self._defer_saves = True
        try:
            yield
        finally:
            self._defer_saves = False
            self.persistence.persist(self._state)

    # ── Entry points ─────────────────────────────────────────────────

    def perform_manual_action(self) -> None:
        self._run(lambda s: accrual.manual_action(s))

    def purchase_upgrade(self, upgrade_id: str) -> bool:
        """Buy one level. Returns False when the purchase was refused."""
        result = self._run(lambda s: economy.purchase(s, upgrade_id, self.catalog))
        return not isinstance(result, Rejected)

    def tick(self) -> None:
        self._run(lambda s: accrual.advance(s))

    def reset(self) -> None:
        self._enter()
        try:
            self._state = SimulationState.fresh()
            self.persistence.clear()
            if self.driver is not None and self.driver.running:
                self.driver.reschedule(self._state.tick_interval_ms)
            _LOGGER.info("Progress reset")
            self._notify()
        finally:
            self._busy = False

    # ── Private helpers ──────────────────────────────────────────────

    def _run(
        self, step: Callable[[SimulationState], StateDelta | Rejected]
    ) -> StateDelta | Rejected:
        self._enter()
        try:
            before = self._state
            result = step(before)
            state = before
            if isinstance(result, StateDelta):
                state = state.apply(result)
            state = state.apply(evaluate(state, self.milestones))
            self._state = state
            if not self._defer_saves:
                self.persistence.persist(state)
            if state.tick_interval_ms != before.tick_interval_ms:
                self._rearm()
            self._notify()
            return result
        finally:
            self._busy = False

    def _enter(self) -> None:
        if self._busy:
            raise RuntimeError("SimulationController entry points are not reentrant")
        self._busy = True

    def _rearm(self) -> None:
        if self.driver is not None and self.driver.running:
            self.driver.reschedule(self._state.tick_interval_ms)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._state.copy())
