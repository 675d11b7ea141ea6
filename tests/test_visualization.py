"""Tests for visualization module (skipped without matplotlib)."""
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from clicksim.simulation import Simulation  # noqa: E402
from clicksim.strategy import GreedyCheapest, TapProfile  # noqa: E402
from clicksim.visualization import plot_simulation  # noqa: E402


def test_plot_written(tmp_path):
    report = Simulation(GreedyCheapest(TapProfile(taps_per_second=4)), duration=60).run()
    out = tmp_path / "run.png"
    plot_simulation(report, str(out))
    assert out.stat().st_size > 0
