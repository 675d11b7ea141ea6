"""Tests for formatting module."""
import pytest

from clicksim.formatting import format_number, format_state_view, format_text_report
from clicksim.simulation import Simulation
from clicksim.state import SimulationState
from clicksim.strategy import GreedyCheapest, TapProfile
from clicksim.view import build_view


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (0.4, "0"),
        (7.9, "7"),
        (999.99, "999"),
        (1_000, "1.00k"),
        (1_500, "1.50k"),
        (999_999, "1000.00k"),
        (1_000_000, "1.00m"),
        (2_345_678, "2.35m"),
        (3_250_000_000, "3.25b"),
        (1_250_000_000_000, "1250.00b"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_state_view():
    state = SimulationState(
        resources=1500, total_actions=120, manual_power=2,
        achieved_milestones={"first-click", "hundred-clicks"},
        tick_interval_ms=850,
    )
    text = format_state_view(build_view(state))
    assert "Simf Credits:    1.50k" in text
    assert "Total Taps:      120" in text
    assert "Tick interval:   850 ms" in text
    assert "UPGRADES:" in text
    assert "Finger Training" in text
    assert "MILESTONES:" in text
    assert "[x] First Tap" in text
    assert "[ ] Click Maestro" in text


def test_format_text_report():
    sim = Simulation(GreedyCheapest(TapProfile(taps_per_second=3)), duration=60)
    text = format_text_report(sim.run())
    assert "clicksim Simulation Report" in text
    assert "GreedyCheapest (3 taps/s)" in text
    assert "Duration reached" in text
    assert "first-click" in text
    assert "PURCHASES:" in text
    assert "FINAL STATE:" in text
