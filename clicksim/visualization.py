from __future__ import annotations

from clicksim.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install clicksim[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"clicksim Simulation: {report.strategy_description}", fontsize=14)

    # 1. Resources and total actions (log scale)
    ax1 = axes[0][0]
    for attr, label in (("resources", "Resources"), ("total_actions", "Total actions")):
        series = report.series(attr)
        if series:
            times, values = zip(*series)
            ax1.plot(times, [max(v, 1e-10) for v in values], label=label)
    for m in report.milestones:
        ax1.axvline(m.time, color="gray", linestyle=":", alpha=0.5)
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Value")
    ax1.set_title("Balance")
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.3)

    # 2. Manual power and automation rate
    ax2 = axes[0][1]
    for attr, label in (("manual_power", "Manual power"), ("automation_rate", "Automation /s")):
        series = report.series(attr)
        if series:
            times, values = zip(*series)
            ax2.plot(times, values, label=label)
    ax2.set_xlabel("Time (s)")
    ax2.set_title("Production")
    ax2.legend(fontsize=8)
    ax2.grid(True, alpha=0.3)

    # 3. Purchase timeline
    ax3 = axes[1][0]
    if report.purchases:
        times = [p.time for p in report.purchases]
        upgrades = [p.upgrade_id for p in report.purchases]
        upgrade_ids = sorted(set(upgrades))
        y_map = {u: i for i, u in enumerate(upgrade_ids)}
        ax3.scatter(times, [y_map[u] for u in upgrades], s=10, alpha=0.6)
        ax3.set_yticks(range(len(upgrade_ids)))
        ax3.set_yticklabels(upgrade_ids, fontsize=7)
        ax3.set_xlabel("Time (s)")
        ax3.set_title("Purchase Timeline")
        ax3.grid(True, alpha=0.3)

    # 4. Tick interval
    ax4 = axes[1][1]
    series = report.series("tick_interval_ms")
    if series:
        times, values = zip(*series)
        ax4.step(times, values, where="post")
    ax4.set_xlabel("Time (s)")
    ax4.set_ylabel("Interval (ms)")
    ax4.set_title("Tick Interval")
    ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
