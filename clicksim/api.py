from __future__ import annotations

from clicksim.controller import SimulationController
from clicksim.view import StateView, build_view


class ActionAPI:
    """Player-facing actions; each returns the refreshed view."""

    def __init__(self, controller: SimulationController) -> None:
        self.controller = controller

    def tap(self) -> StateView:
        self.controller.perform_manual_action()
        return self.view()

    def buy(self, upgrade_id: str) -> StateView:
        self.controller.purchase_upgrade(upgrade_id)
        return self.view()

    def reset(self) -> StateView:
        self.controller.reset()
        return self.view()

    def view(self) -> StateView:
        c = self.controller
        return build_view(c.state, c.catalog, c.milestones)
