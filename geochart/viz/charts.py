"""Plotly legend helpers."""
from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from .overlays import LegendOverlay

LEGEND_SAMPLES = 64


def legend_bar(legend: LegendOverlay, samples: int = LEGEND_SAMPLES) -> go.Figure:
    """Horizontal gradient bar with min/max ticks and the highlight indicator."""
    fig = go.Figure()
    if not legend.visible:
        fig.update_layout(xaxis_visible=False, yaxis_visible=False, height=80)
        return fig

    colors = legend.colors()
    colorscale = [[float(t), color] for t, color in zip(np.linspace(0.0, 1.0, len(colors)), colors)]
    fig.add_trace(
        go.Heatmap(
            z=[np.linspace(0.0, 1.0, samples)],
            x=np.linspace(0.0, 1.0, samples),
            colorscale=colorscale,
            zmin=0.0,
            zmax=1.0,
            showscale=False,
            hoverinfo="skip",
        )
    )
    if legend.indicator is not None:
        fig.add_trace(
            go.Scatter(
                x=[legend.indicator],
                y=[0.75],
                mode="markers",
                marker=dict(symbol="triangle-down", size=14, color="#333333"),
                hoverinfo="skip",
                showlegend=False,
            )
        )
    fig.update_layout(
        title=legend.label,
        height=120,
        margin=dict(l=20, r=20, t=40 if legend.label else 10, b=30),
        xaxis=dict(
            tickvals=[0.0, 1.0],
            ticktext=[f"{legend.min_value:g}", f"{legend.max_value:g}"],
            range=[-0.02, 1.02],
        ),
        yaxis=dict(visible=False),
    )
    return fig


__all__ = ["legend_bar"]
