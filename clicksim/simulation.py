from __future__ import annotations

import logging
import math
import random

from clicksim.controller import SimulationController
from clicksim.driver import ManualTickDriver
from clicksim.metrics import MetricsCollector
from clicksim.persistence import PersistenceManager
from clicksim.report import SimulationReport, build_report
from clicksim.storage import MemoryStore
from clicksim.strategy import Strategy
from clicksim.view import project_upgrades

_LOGGER = logging.getLogger(__name__)

STEP_SECONDS = 1.0
# Guards a strategy that keeps asking for purchases it can no longer afford.
MAX_PURCHASES_PER_STEP = 1_000


class Simulation:
    """Headless play-through driven by a strategy on a simulated clock."""

    def __init__(
        self,
        strategy: Strategy,
        duration: float = 3600.0,
        seed: int | None = None,
        stop_when_complete: bool = False,
        controller: SimulationController | None = None,
    ) -> None:
        self.strategy = strategy
        self.duration = duration
        self.stop_when_complete = stop_when_complete
        self.rng = random.Random(seed)

        self.driver = ManualTickDriver()
        self.controller = controller or SimulationController(
            PersistenceManager(MemoryStore()), driver=self.driver
        )
        if self.controller.driver is None:
            self.controller.driver = self.driver
        elif isinstance(self.controller.driver, ManualTickDriver):
            self.driver = self.controller.driver
        else:
            raise ValueError("Simulation needs a controller with a ManualTickDriver")

        self.collector = MetricsCollector(snapshot_interval=STEP_SECONDS)
        self._milestones_seen: set[str] = set()

    @property
    def time_elapsed(self) -> float:
        return self.driver.now_ms / 1000

    def run(self) -> SimulationReport:
        self.controller.start()
        self._milestones_seen = set(self.controller.state.achieved_milestones)
        self.collector.record_tick(self.controller.state, self.time_elapsed)

        outcome = "Duration reached"
        try:
            while self.time_elapsed < self.duration:
                self._step()
                state = self.controller.state
                if math.isnan(state.resources) or math.isinf(state.resources):
                    outcome = "Aborted: NaN/Inf detected"
                    break
                if self.stop_when_complete and self._all_milestones_reached():
                    outcome = "All milestones reached"
                    break
        finally:
            self.controller.stop()

        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=self.time_elapsed,
            final_state=self.controller.state,
        )

    def _step(self) -> None:
        # 1. Taps
        taps = self.strategy.get_taps(self.controller.state, STEP_SECONDS, self.rng)
        for _ in range(taps):
            self.controller.perform_manual_action()
        self._record_milestones()

        # 2. Purchases
        self._buy()

        # 3. Passive time
        self.driver.advance(STEP_SECONDS * 1000)
        self._record_milestones()
        self.collector.record_tick(self.controller.state, self.time_elapsed)

    def _buy(self) -> None:
        for _ in range(MAX_PURCHASES_PER_STEP):
            state = self.controller.state
            views = project_upgrades(state, self.controller.catalog)
            to_buy = self.strategy.decide_purchases(state, views)
            bought = False
            for upgrade_id in to_buy:
                view = next((v for v in views if v.id == upgrade_id), None)
                if view is None:
                    continue
                if self.controller.purchase_upgrade(upgrade_id):
                    self.collector.record_purchase(
                        self.controller.state, self.time_elapsed, upgrade_id, view.next_cost
                    )
                    self._record_milestones()
                    bought = True
                    # Costs changed; ask the strategy again.
                    break
            if not bought:
                return
        _LOGGER.warning("Purchase limit reached at t=%.1fs", self.time_elapsed)

    def _record_milestones(self) -> None:
        achieved = self.controller.state.achieved_milestones
        for m in self.controller.milestones:
            if m.id in achieved and m.id not in self._milestones_seen:
                self._milestones_seen.add(m.id)
                self.collector.record_milestone(self.time_elapsed, m.id)

    def _all_milestones_reached(self) -> bool:
        return all(m.id in self._milestones_seen for m in self.controller.milestones)
