"""
Plotly figure builder for the blood pressure chart.

This module encapsulates all Plotly-specific figure construction logic,
allowing DashboardService to focus on page assembly.
"""

import logging
from typing import Any, Dict

import plotly.graph_objects as go

from services.dashboard.data_preparation_service import (
    BloodPressurePanel,
    BloodPressureSeries,
)

logger = logging.getLogger(__name__)

CHART_DIV_ID = "blood-pressure-chart"


class PlotlyBuilder:
    """
    Builder for the blood pressure line chart.

    Usage:
        builder = PlotlyBuilder()
        fig = builder.build_blood_pressure_figure(panel)
    """

    def create_figure(self) -> go.Figure:
        """Create a new empty Plotly figure."""
        return go.Figure()

    def build_blood_pressure_figure(self, panel: BloodPressurePanel) -> go.Figure:
        """Build the systolic/diastolic chart, or a placeholder when the window is empty."""
        fig = self.create_figure()
        if panel.is_empty():
            self.apply_empty_layout(fig)
            return fig

        fig.add_trace(self.create_series_trace(panel.labels, panel.systolic))
        fig.add_trace(self.create_series_trace(panel.labels, panel.diastolic))
        self.apply_layout(fig)
        return fig

    def create_series_trace(self, labels, series: BloodPressureSeries) -> go.Scatter:
        """Create a smoothed line trace for one blood pressure series."""
        return go.Scatter(
            x=labels,
            y=series.values,
            name=series.name,
            mode="lines+markers",
            line=dict(color=series.color, width=2.5, shape="spline", smoothing=0.3),
            marker=dict(size=8, color=series.color, line=dict(width=1.5, color="white")),
            hovertemplate=(
                f"<b>{series.name}</b><br>"
                "%{x}<br>"
                "<b>%{y} mmHg</b>"
                "<extra></extra>"
            ),
        )

    def apply_layout(self, fig: go.Figure) -> None:
        """Apply axis titles, top legend and a responsive height."""
        fig.update_layout(
            title=dict(text="<b>Blood Pressure</b>", font=dict(size=16), x=0, xanchor="left"),
            xaxis=dict(
                type="category",
                title=dict(text="Months"),
                showgrid=False,
            ),
            yaxis=dict(
                title=dict(text="Blood Pressure (mmHg)"),
                showgrid=True,
                gridcolor="rgba(0,0,0,0.06)",
            ),
            legend=dict(orientation="h", x=0.5, xanchor="center", y=1.02, yanchor="bottom"),
            hovermode="x unified",
            height=360,
            margin=dict(l=60, r=20, t=70, b=60),
            template="plotly_white",
            paper_bgcolor="#FFFFFF",
            plot_bgcolor="#FFFFFF",
        )

    def apply_empty_layout(self, fig: go.Figure) -> None:
        """Apply layout for a patient without blood pressure readings."""
        fig.update_layout(
            title=dict(text="<b>Blood Pressure</b>", font=dict(size=16), x=0, xanchor="left"),
            xaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            yaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            height=360,
            template="plotly_white",
            annotations=[
                dict(text="<b>No blood pressure readings</b>", xref="paper", yref="paper",
                     x=0.5, y=0.5, showarrow=False, font=dict(size=16, color="#757575")),
            ],
        )

    def get_config(self) -> Dict[str, Any]:
        """Plotly config for the embedded chart."""
        return {
            "displayModeBar": False,
            "displaylogo": False,
            "responsive": True,
        }
