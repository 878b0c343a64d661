"""Matplotlib charts for stack-up and hole-fit results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from tolstack.holefit import FitAnalysis
from tolstack.models import Dimension, DimensionType, Misalignment
from tolstack.stackup import PROCESS_SIGMA, StackupResult
from tolstack.statistics import bell_curve

INCREASING_COLOR = "#2196F3"
DECREASING_COLOR = "#F44336"
GAP_COLOR = "#4CAF50"


@dataclass
class ChainBar:
    """One bar of the loop diagram, in dimension units."""
    name: str
    nominal: float
    start: float
    direction: DimensionType

    @property
    def end(self) -> float:
        return self.start + self.nominal


@dataclass
class ChainLayout:
    """Loop diagram geometry.

    Increasing bars run left to right on the top row starting at 0.
    Decreasing bars run right to left on the bottom row starting where the
    top row ends, so the gap is whatever is left between 0 and the end of
    the bottom row.
    """
    top: list[ChainBar] = field(default_factory=list)
    bottom: list[ChainBar] = field(default_factory=list)
    gap_start: float = 0.0
    gap_end: float = 0.0

    @property
    def gap(self) -> float:
        return self.gap_end - self.gap_start

    @property
    def is_interference(self) -> bool:
        return self.gap < 0

    @property
    def extent(self) -> float:
        """Longest row, used to scale the drawing."""
        top = sum(b.nominal for b in self.top)
        bottom = sum(b.nominal for b in self.bottom)
        return max(top, bottom)


def stack_chain_layout(dimensions: Sequence[Dimension]) -> ChainLayout:
    """Lay out the dimension loop as two rows of proportional bars."""
    layout = ChainLayout()
    cursor = 0.0
    for d in dimensions:
        if d.direction is DimensionType.INCREASING:
            layout.top.append(ChainBar(d.name, d.nominal, cursor, d.direction))
            cursor += d.nominal

    back = cursor
    for d in dimensions:
        if d.direction is DimensionType.DECREASING:
            back -= d.nominal
            layout.bottom.append(ChainBar(d.name, d.nominal, back, d.direction))

    layout.gap_end = back
    return layout


def plot_stack_chain(
    dimensions: Sequence[Dimension],
    title: Optional[str] = None,
    save_path: Optional[str] = None,
) -> None:
    """Draw the 1D loop diagram of a dimension chain."""
    import matplotlib.pyplot as plt

    layout = stack_chain_layout(dimensions)
    fig, ax = plt.subplots(figsize=(10, 3.5))

    for row_y, bars, color in ((1.0, layout.top, INCREASING_COLOR),
                               (0.0, layout.bottom, DECREASING_COLOR)):
        for b in bars:
            ax.barh(row_y, b.nominal, left=b.start, height=0.6, color=color,
                    alpha=0.85, edgecolor="white", linewidth=2)
            ax.text(b.start + b.nominal / 2, row_y, b.name, ha="center",
                    va="center", color="white", fontsize=8)
            ax.text(b.start + b.nominal / 2, row_y + 0.4, f"{b.nominal:g}",
                    ha="center", va="bottom", color="#64748b", fontsize=7)

    gap_color = DECREASING_COLOR if layout.is_interference else GAP_COLOR
    label = "Interference" if layout.is_interference else "Gap"
    ax.axvline(layout.gap_start, color="#94a3b8", linestyle="--", linewidth=0.8)
    ax.axvline(layout.gap_end, color="#94a3b8", linestyle="--", linewidth=0.8)
    ax.annotate("", xy=(layout.gap_end, -0.6), xytext=(layout.gap_start, -0.6),
                arrowprops=dict(arrowstyle="<->", color=gap_color, linewidth=1.5))
    ax.text((layout.gap_start + layout.gap_end) / 2, -0.85,
            f"{label}: {abs(layout.gap):.3f}", ha="center", va="top",
            color=gap_color, fontweight="bold", fontsize=9)

    ax.set_yticks([1.0, 0.0])
    ax.set_yticklabels(["Increasing (+ Gap)", "Decreasing (- Gap)"])
    ax.set_ylim(-1.3, 1.7)
    ax.set_xlabel("Dimension")
    ax.set_title(title or "1D Loop Diagram")
    fig.tight_layout()

    _finish(fig, save_path, "loop diagram")


def gap_sigma(result: StackupResult) -> float:
    """Standard deviation backed out of the RSS band."""
    return (result.nominal_gap - result.rss_min) / PROCESS_SIGMA


def plot_gap_distribution(
    result: StackupResult,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    steps: int = 50,
) -> None:
    """Plot the RSS gap distribution, shading the interference side red."""
    import matplotlib.pyplot as plt

    points = bell_curve(result.nominal_gap, gap_sigma(result), steps=steps)
    x = np.array([p[0] for p in points])
    density = np.array([p[1] for p in points])

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(x, density, color="black", linewidth=1)
    ax.fill_between(x, density, where=x < 0, color=DECREASING_COLOR, alpha=0.5,
                    label="Interference", interpolate=True)
    ax.fill_between(x, density, where=x >= 0, color=GAP_COLOR, alpha=0.5,
                    label="Clearance", interpolate=True)
    ax.axvline(0.0, color="#64748b", linestyle="--", linewidth=1)
    ax.axvline(result.rss_min, color="orange", linestyle=":", linewidth=1,
               label=f"RSS min = {result.rss_min:.4f}")
    ax.axvline(result.rss_max, color="orange", linestyle=":", linewidth=1,
               label=f"RSS max = {result.rss_max:.4f}")

    ax.set_xlabel("Gap")
    ax.set_yticks([])
    ax.set_title(title or f"RSS Statistical Distribution "
                          f"(P(interference) = {result.interference_probability_percent:.2f}%)")
    ax.legend(loc="best", fontsize=8)
    fig.tight_layout()

    _finish(fig, save_path, "distribution chart")


def plot_misalignment(
    analysis: FitAnalysis,
    deviation: Misalignment,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
) -> None:
    """Top view of the fastener sitting off-centre in hole 1 at MMC."""
    import matplotlib.pyplot as plt
    from matplotlib.patches import Circle

    fig, ax = plt.subplots(figsize=(5, 5))
    hole_r = analysis.hole1_mmc / 2
    pin_r = analysis.pin_mmc / 2
    hit = analysis.is_simulated_interference
    pin_color = DECREASING_COLOR if hit else GAP_COLOR

    ax.add_patch(Circle((0, 0), abs(hole_r), fill=False, edgecolor=INCREASING_COLOR,
                        linewidth=2, label=f"Hole 1 MMC = {analysis.hole1_mmc:.3f}"))
    ax.add_patch(Circle((deviation.x, deviation.y), abs(pin_r), facecolor=pin_color,
                        edgecolor=pin_color, alpha=0.5, linewidth=2,
                        label=f"Fastener MMC = {analysis.pin_mmc:.3f}"))
    ax.plot([0], [0], "+", color=INCREASING_COLOR, markersize=10)
    ax.plot([deviation.x], [deviation.y], ".", color=pin_color, markersize=8)

    lim = max(abs(hole_r), abs(pin_r) + analysis.actual_radial_offset) * 1.2 or 1.0
    ax.set_xlim(-lim, lim)
    ax.set_ylim(-lim, lim)
    ax.set_aspect("equal")
    status = "INTERFERENCE" if hit else "CLEAR"
    ax.set_title(title or f"Misalignment: offset {analysis.actual_radial_offset:.3f} "
                          f"vs clearance {analysis.radial_clearance:.3f} ({status})")
    ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()

    _finish(fig, save_path, "misalignment view")


def _finish(fig, save_path: Optional[str], what: str) -> None:
    import matplotlib.pyplot as plt

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Saved {what} to {save_path}")
    else:
        plt.show()
    plt.close(fig)
