"""
Dashboard package for patient record presentation.

This package contains:
- DashboardService: Public orchestration layer for the dashboard page and JSON summary
- DataPreparationService: Visualization-agnostic aggregation and formatting
- PlotlyBuilder: Plotly-specific blood pressure chart construction

Usage:
    from services.dashboard import DashboardService

    service = DashboardService()
    html = service.render_html(record, window_size=6)
"""

from services.dashboard.dashboard_service import DashboardService
from services.dashboard.data_preparation_service import DataPreparationService, PreparedDashboard
from services.dashboard.plotly_builder import PlotlyBuilder

__all__ = [
    'DashboardService',
    'DataPreparationService',
    'PreparedDashboard',
    'PlotlyBuilder',
]
