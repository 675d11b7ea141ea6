"""MCP server wrapping a SimulationController for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from clicksim.api import ActionAPI
from clicksim.config import STORAGE_KEY, EngineConfig
from clicksim.controller import SimulationController
from clicksim.driver import ManualTickDriver
from clicksim.persistence import PersistenceManager
from clicksim.storage import BlobStore, FileStore
from clicksim.view import StateView

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum taps per tap() call
_MAX_TAPS = 1000


@dataclass
class _GameHolder:
    """Holds the session's controller, its simulated clock and action API."""

    controller: SimulationController
    driver: ManualTickDriver
    api: ActionAPI


def _make_holder(store: BlobStore | None, key: str | None = None) -> _GameHolder:
    driver = ManualTickDriver()
    controller = SimulationController(
        PersistenceManager(store, key=key or STORAGE_KEY), driver=driver
    )
    controller.start()
    return _GameHolder(controller=controller, driver=driver, api=ActionAPI(controller))


def _view_summary(view: StateView) -> dict[str, Any]:
    return {
        "resources": round(view.resources, 2),
        "total_actions": round(view.total_actions, 2),
        "manual_power": round(view.manual_power, 4),
        "automation_rate": round(view.automation_rate, 4),
        "tick_interval_ms": view.tick_interval_ms,
    }


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    c = holder.controller
    return {
        "upgrades": [
            {
                "id": u.id,
                "name": u.name,
                "category": u.category.name,
                "base_cost": u.base_cost,
                "cost_growth": u.cost_growth,
                "base_power": u.base_power,
            }
            for u in c.catalog
        ],
        "milestones": [
            {
                "id": m.id,
                "title": m.title,
                "metric": m.metric.name,
                "threshold": m.threshold,
                "reward": m.reward,
            }
            for m in c.milestones
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    view = holder.api.view()
    result = _view_summary(view)
    result["time_elapsed"] = round(holder.driver.now_ms / 1000, 2)
    result["milestones_achieved"] = [m.id for m in view.milestones if m.achieved]
    return result


def _tool_get_upgrades(holder: _GameHolder) -> dict[str, Any]:
    view = holder.api.view()
    return {
        "upgrades": [
            {
                "id": u.id,
                "name": u.name,
                "category": u.category.name,
                "level": u.level,
                "next_cost": u.next_cost,
                "affordable": u.affordable,
                "tier": u.tier,
            }
            for u in view.upgrades
        ]
    }


def _tool_tap(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_TAPS:
        return {"error": f"Count cannot exceed {_MAX_TAPS}"}

    before = holder.controller.state.resources
    for _ in range(count):
        view = holder.api.tap()
    return {
        "taps": count,
        "total_earned": round(view.resources - before, 2),
        "new_balance": round(view.resources, 2),
    }


def _tool_buy(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    before = holder.api.view().upgrade(upgrade_id)
    if before is None:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}

    view = holder.api.buy(upgrade_id)
    after = view.upgrade(upgrade_id)
    if after.level == before.level:
        return {"success": False, "reason": "Cannot afford"}
    return {
        "success": True,
        "upgrade_id": upgrade_id,
        "new_level": after.level,
        "next_cost": after.next_cost,
        "state": _view_summary(view),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    milestones_before = holder.controller.state.achieved_milestones
    with holder.controller.batched_saves():
        ticks = holder.driver.advance(seconds * 1000)
    state = holder.controller.state
    new_milestones = [
        m.id
        for m in holder.controller.milestones
        if m.id in state.achieved_milestones and m.id not in milestones_before
    ]

    result: dict[str, Any] = {
        "waited": seconds,
        "ticks": ticks,
        "time_elapsed": round(holder.driver.now_ms / 1000, 2),
        "state": _view_summary(holder.api.view()),
    }
    if new_milestones:
        result["new_milestones"] = new_milestones
    return result


def _tool_reset(holder: _GameHolder) -> dict[str, Any]:
    holder.api.reset()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(
    config: EngineConfig | None = None, store: BlobStore | None = None
) -> FastMCP:
    """Create an MCP server around a saved game (file-backed by default)."""
    config = config or EngineConfig.from_env()
    if store is None:
        store = FileStore(config.save_dir)
    holder = _make_holder(store, config.storage_key)

    mcp = FastMCP(name=f"clicksim: {config.name}")

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get the static upgrade catalog and milestone list."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current balance, rates, tick interval and achieved milestones."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_upgrades() -> dict[str, Any]:
        """Get every upgrade with its level, next cost and affordability."""
        return _tool_get_upgrades(holder)

    @mcp.tool()
    def tap(count: int = 1) -> dict[str, Any]:
        """Tap N times (max 1000). Returns credits earned."""
        return _tool_tap(holder, count)

    @mcp.tool()
    def buy(upgrade_id: str) -> dict[str, Any]:
        """Buy one level of an upgrade. Returns success/failure with reason."""
        return _tool_buy(holder, upgrade_id)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance simulated time (max 86400 s); automation ticks at the current interval.

        The save is written once when the wait ends, not on every tick.
        """
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def reset() -> dict[str, Any]:
        """Erase progress and start over."""
        return _tool_reset(holder)

    return mcp
