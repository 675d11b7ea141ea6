from __future__ import annotations

from clicksim.state import SimulationState, StateDelta


def advance(state: SimulationState, elapsed_ms: float | None = None) -> StateDelta:
    """Credit automation for one tick.

    The credit is ``automation_rate * elapsed_ms / 1000``; *elapsed_ms*
    defaults to the state's current tick interval, so an interval change
    between ticks takes effect on the very next one.
    """
    if elapsed_ms is None:
        elapsed_ms = state.tick_interval_ms
    if elapsed_ms < 0:
        raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")
    if state.automation_rate == 0:
        return StateDelta()

    credit = state.automation_rate * (elapsed_ms / 1000)
    return StateDelta(
        resources=state.resources + credit,
        total_actions=state.total_actions + credit,
    )


def manual_action(state: SimulationState) -> StateDelta:
    """One tap: ``manual_power`` resources, one action."""
    return StateDelta(
        resources=state.resources + state.manual_power,
        total_actions=state.total_actions + 1,
    )
