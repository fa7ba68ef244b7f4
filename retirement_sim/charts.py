"""Chart generation for retirement projections."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from retirement_sim.formatting import format_money
from retirement_sim.simulation import SimulationResult
from retirement_sim.summary import SummaryStatistics

# Scenario color mapping
SCENARIO_COLORS = {
    "Low growth": "#d62728",    # red
    "Standard": "#1f77b4",      # blue
    "High growth": "#2ca02c",   # green
    "Stagflation": "#ff7f0e",   # orange
}

DEFAULT_COLOR = "#7f7f7f"
COLOR_HAVE = "#1f77b4"
COLOR_NEED = "#ff7f0e"


def _format_money_axis(ax: plt.Axes, currency: str):
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: format_money(x, currency))
    )


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_trajectory(
    results: list[tuple[str, SimulationResult]],
    output_path: Path,
    name: str = "",
    currency: str = "USD",
) -> Path:
    """Line chart of capital by age.

    Args:
        results: (label, result) pairs; one line each. A single result also
            gets its capital-excluding-interest line.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "40" → "trajectory-40.png").
        currency: currency code for the Y axis labels.

    Returns:
        Path to the generated PNG file.
    """
    fig, ax = plt.subplots(figsize=(14, 8))

    for label, result in results:
        ages = [s.age for s in result.snapshots]
        color = SCENARIO_COLORS.get(label, DEFAULT_COLOR)
        ax.plot(ages, [s.capital for s in result.snapshots], label=label, color=color, linewidth=2)
        if len(results) == 1:
            ax.plot(
                ages, [s.capital_excluding_interest for s in result.snapshots],
                label=f"{label} (excluding interest)", color=color, linewidth=1, linestyle="--",
            )

        depleted = next((s for s in result.snapshots if s.is_depleted), None)
        if depleted is not None:
            ax.scatter([depleted.age], [0], color=color, marker="x", s=80, zorder=5)
            ax.annotate(
                f"depleted {depleted.age}",
                xy=(depleted.age, 0), xytext=(0, 12), textcoords="offset points",
                fontsize=10, color=color, ha="center",
            )

    # Every result in one chart shares the same calendar
    retirement_age = results[0][1].timeline.retirement_age if results else None
    if retirement_age is not None:
        ax.axvline(retirement_age, color="#888888", linewidth=1, linestyle=":", alpha=0.7)
        ax.annotate(
            f"retirement {retirement_age}",
            xy=(retirement_age, ax.get_ylim()[1]), xytext=(4, -14), textcoords="offset points",
            fontsize=10, color="#555555",
        )

    ax.set_xlabel("Age")
    ax.set_ylabel(f"Capital ({currency})")
    ax.set_title("Capital evolution")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_money_axis(ax, currency)

    return _save(fig, output_path, "trajectory", name)


def plot_have_vs_need(
    summary: SummaryStatistics,
    output_path: Path,
    name: str = "",
    currency: str = "USD",
) -> Path:
    """Two bars, scaled 0-100: capital at retirement vs capital needed."""
    fig, ax = plt.subplots(figsize=(6, 6))

    heights = [summary.have_bar_height, summary.need_bar_height]
    amounts = [summary.capital_at_retirement, summary.estimated_capital_needed]
    bars = ax.bar(["Have", "Need"], heights, color=[COLOR_HAVE, COLOR_NEED], width=0.6)
    for bar, amount in zip(bars, amounts):
        ax.annotate(
            format_money(amount, currency),
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            xytext=(0, 4), textcoords="offset points",
            ha="center", va="bottom", fontsize=11,
        )

    ax.set_ylim(0, 110)
    ax.set_ylabel("% of the larger amount")
    ax.set_title(f"Capital at retirement (age {summary.retirement_age})")
    ax.grid(True, axis="y", alpha=0.3)

    return _save(fig, output_path, "have-vs-need", name)
