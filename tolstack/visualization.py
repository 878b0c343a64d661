"""Interactive Plotly figures for the Streamlit GUI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from tolstack.holefit import FitAnalysis
from tolstack.models import Dimension, Misalignment
from tolstack.stackup import StackupResult
from tolstack.statistics import bell_curve
from tolstack.visualize import (
    DECREASING_COLOR, GAP_COLOR, INCREASING_COLOR, gap_sigma, stack_chain_layout,
)


# ---------------------------------------------------------------------------
# Plotly (soft dependency)
# ---------------------------------------------------------------------------

def _check_plotly():
    """Check if plotly is available."""
    try:
        import plotly.graph_objects as go  # noqa: F401
        return True
    except ImportError:
        return False


PLOTLY_AVAILABLE = _check_plotly()


@dataclass
class VisualizationConfig:
    """Configuration for interactive figures.

    Attributes:
        width: Plot width in pixels.
        height: Plot height in pixels.
        curve_steps: Number of intervals in the bell curve.
        circle_points: Vertices used to draw a circle.
    """
    width: int = 800
    height: int = 320
    curve_steps: int = 50
    circle_points: int = 120


def stack_chain_figure(dimensions: Sequence[Dimension],
                       config: Optional[VisualizationConfig] = None):
    """Loop diagram as horizontal bars.

    Returns:
        plotly.graph_objects.Figure if plotly is available, else None.
    """
    if not PLOTLY_AVAILABLE:
        return None
    import plotly.graph_objects as go

    config = config or VisualizationConfig()
    layout = stack_chain_layout(dimensions)
    fig = go.Figure()

    for row, bars, color in (("Increasing (+ Gap)", layout.top, INCREASING_COLOR),
                             ("Decreasing (- Gap)", layout.bottom, DECREASING_COLOR)):
        for b in bars:
            fig.add_trace(go.Bar(
                y=[row], x=[b.nominal], base=[b.start], orientation="h",
                marker=dict(color=color, line=dict(color="white", width=2)),
                text=[b.name], textposition="inside", insidetextanchor="middle",
                hovertemplate=f"{b.name}: {b.nominal:g}<extra></extra>",
                showlegend=False,
            ))

    gap_color = DECREASING_COLOR if layout.is_interference else GAP_COLOR
    label = "Interference" if layout.is_interference else "Gap"
    fig.add_trace(go.Bar(
        y=[label], x=[layout.gap], base=[layout.gap_start], orientation="h",
        marker=dict(color=gap_color), text=[f"{abs(layout.gap):.3f}"],
        textposition="outside", showlegend=False,
        hovertemplate=f"{label}: {abs(layout.gap):.3f}<extra></extra>",
    ))

    fig.update_layout(
        barmode="overlay",
        width=config.width, height=config.height,
        title="1D Loop Diagram",
        xaxis_title="Dimension",
        yaxis=dict(categoryorder="array",
                   categoryarray=[label, "Decreasing (- Gap)", "Increasing (+ Gap)"]),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig


def gap_distribution_figure(result: StackupResult,
                            config: Optional[VisualizationConfig] = None):
    """RSS bell curve with the interference side shaded red.

    Returns:
        plotly.graph_objects.Figure if plotly is available, else None.
    """
    if not PLOTLY_AVAILABLE:
        return None
    import plotly.graph_objects as go

    config = config or VisualizationConfig()
    points = bell_curve(result.nominal_gap, gap_sigma(result), steps=config.curve_steps)
    x = np.array([p[0] for p in points])
    density = np.array([p[1] for p in points])

    fig = go.Figure()
    below = x <= 0
    above = x >= 0
    if below.any():
        fig.add_trace(go.Scatter(x=x[below], y=density[below], fill="tozeroy",
                                 mode="lines", line=dict(color=DECREASING_COLOR),
                                 name="Interference"))
    if above.any():
        fig.add_trace(go.Scatter(x=x[above], y=density[above], fill="tozeroy",
                                 mode="lines", line=dict(color=GAP_COLOR),
                                 name="Clearance"))
    fig.add_vline(x=0, line_dash="dash", line_color="#64748b")

    fig.update_layout(
        width=config.width, height=config.height,
        title="RSS Statistical Distribution",
        xaxis_title="Gap",
        yaxis=dict(visible=False),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig


def _circle(cx: float, cy: float, r: float, n: int) -> tuple[np.ndarray, np.ndarray]:
    theta = np.linspace(0, 2 * np.pi, n)
    return cx + r * np.cos(theta), cy + r * np.sin(theta)


def misalignment_figure(analysis: FitAnalysis, deviation: Misalignment,
                        config: Optional[VisualizationConfig] = None):
    """Top view of the offset fastener inside hole 1.

    Returns:
        plotly.graph_objects.Figure if plotly is available, else None.
    """
    if not PLOTLY_AVAILABLE:
        return None
    import plotly.graph_objects as go

    config = config or VisualizationConfig()
    pin_color = DECREASING_COLOR if analysis.is_simulated_interference else GAP_COLOR

    hx, hy = _circle(0.0, 0.0, abs(analysis.hole1_mmc) / 2, config.circle_points)
    px, py = _circle(deviation.x, deviation.y, abs(analysis.pin_mmc) / 2,
                     config.circle_points)

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=hx, y=hy, mode="lines",
                             line=dict(color=INCREASING_COLOR, width=2),
                             name=f"Hole 1 MMC ({analysis.hole1_mmc:.3f})"))
    fig.add_trace(go.Scatter(x=px, y=py, mode="lines", fill="toself",
                             line=dict(color=pin_color, width=2), opacity=0.6,
                             name=f"Fastener MMC ({analysis.pin_mmc:.3f})"))
    fig.add_trace(go.Scatter(x=[0, deviation.x], y=[0, deviation.y], mode="markers",
                             marker=dict(color=[INCREASING_COLOR, pin_color], size=6),
                             showlegend=False))

    fig.update_layout(
        width=config.height + 80, height=config.height + 80,
        title="Misalignment Simulation",
        xaxis=dict(scaleanchor="y", zeroline=False),
        yaxis=dict(zeroline=False),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig
