"""
Service layer for rendering the patient dashboard.

Features:
- Blood pressure chart over the trailing window with averages and status
- Summary cards for respiratory rate, temperature and heart rate
- Diagnostic list table
- Profile panel and lab results
- Distinct Loading and Failed pages
- JSON summary of the same data

This module orchestrates data preparation and Plotly figure construction.
Data preparation is delegated to DataPreparationService.
Figure construction is delegated to PlotlyBuilder.
"""

import logging
from html import escape
from typing import List, Optional

import plotly.io as pio

from core.exceptions import DashboardError
from core.vital_registry import VitalDefinition, list_vitals
from schemas.dashboard import (
    BloodPressureChartResponse,
    DashboardSummaryResponse,
    DiagnosisResponse,
    PatientProfileResponse,
    VitalSummaryResponse,
)
from schemas.patient_record import PatientRecord
from services.dashboard.data_preparation_service import (
    BloodPressurePanel,
    BloodPressureSeries,
    DataPreparationService,
    PreparedDashboard,
    ProfilePanel,
    VitalCard,
)
from services.dashboard.plotly_builder import CHART_DIV_ID, PlotlyBuilder
from services.metric_aggregator import DEFAULT_WINDOW_SIZE, VitalSummary
from services.record_loader import LoadState

logger = logging.getLogger(__name__)

DIAGNOSTIC_HEADERS = ("Problem/Diagnosis", "Description", "Status")

PAGE_CSS = """
    * { box-sizing: border-box; }
    body {
        margin: 0;
        background: #F3F4F6;
        color: #1F2937;
        font-family: -apple-system, system-ui, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        -webkit-font-smoothing: antialiased;
    }
    .dashboard { display: grid; grid-template-columns: 3fr 1fr; gap: 16px; padding: 24px; min-height: 100vh; }
    .main, .side { display: flex; flex-direction: column; gap: 24px; }
    .panel { background: #FFFFFF; border-radius: 6px; box-shadow: 0 1px 4px rgba(0,0,0,0.08); padding: 24px; }
    .bp { display: grid; grid-template-columns: 2fr 1fr; gap: 24px; align-items: center; }
    .bp h2 { font-size: 18px; margin: 0; }
    .bp .average { font-size: 24px; font-weight: 600; margin: 4px 0; }
    .bp .status { font-size: 18px; font-weight: 600; margin: 8px 0 16px; }
    .cards { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; }
    .card { border-radius: 6px; box-shadow: 0 1px 4px rgba(0,0,0,0.08); padding: 24px; }
    .card h2 { font-size: 18px; margin: 0; }
    .card .value { font-size: 24px; font-weight: 600; margin: 4px 0; }
    .card .status { margin-top: 20px; }
    table { width: 100%; border-collapse: collapse; }
    th { background: #E5E7EB; text-align: left; }
    th, td { border: 1px solid #D1D5DB; padding: 8px; text-align: left; }
    tbody tr:nth-child(even) { background: #F9FAFB; }
    .profile { text-align: center; }
    .profile img { width: 128px; height: 128px; border-radius: 50%; object-fit: cover; }
    .profile dl { text-align: left; }
    .profile dt { font-weight: 700; margin-top: 12px; }
    .profile dd { margin: 0; }
    .labs ul { padding-left: 18px; text-align: left; }
    .message { display: flex; align-items: center; justify-content: center; height: 100vh; font-size: 20px; }
    .message.error { color: #B91C1C; flex-direction: column; }
    @media (max-width: 900px) {
        .dashboard, .bp, .cards { grid-template-columns: 1fr; }
    }
"""


# =============================================================================
# DASHBOARD SERVICE
# =============================================================================

class DashboardService:
    """
    Public orchestration layer for the patient dashboard.

    Combines:
    - Data preparation via DataPreparationService
    - Figure construction via PlotlyBuilder
    """

    def __init__(
        self,
        data_preparation_service: Optional[DataPreparationService] = None,
        plotly_builder: Optional[PlotlyBuilder] = None,
    ):
        """
        Initialize DashboardService.

        Args:
            data_preparation_service: Optional service for data preparation.
                                     If not provided, a default instance is created.
            plotly_builder: Optional builder for Plotly figure construction.
                           If not provided, a default instance is created.
        """
        self._data_prep = data_preparation_service or DataPreparationService()
        self._builder = plotly_builder or PlotlyBuilder()

    # -------------------------------------------------------------------------
    # JSON
    # -------------------------------------------------------------------------

    def build_summary(
        self, record: PatientRecord, window_size: int = DEFAULT_WINDOW_SIZE
    ) -> DashboardSummaryResponse:
        """Build the JSON view of the dashboard."""
        dashboard = self._data_prep.prepare(record, window_size)
        vitals = list_vitals()

        return DashboardSummaryResponse(
            patient=PatientProfileResponse(
                name=dashboard.profile.name,
                date_of_birth=dashboard.profile.date_of_birth,
                gender=dashboard.profile.gender,
                phone_number=dashboard.profile.phone_number,
                emergency_contact=dashboard.profile.emergency_contact,
                insurance_type=dashboard.profile.insurance_type,
                profile_picture=dashboard.profile.picture_url,
            ),
            window_size=window_size,
            vitals=[
                self._vital_response(vital, dashboard.overview[key])
                for key, vital in vitals.items()
            ],
            blood_pressure=BloodPressureChartResponse(
                labels=dashboard.blood_pressure.labels,
                systolic=dashboard.blood_pressure.systolic.values,
                diastolic=dashboard.blood_pressure.diastolic.values,
            ),
            diagnostic_list=[
                DiagnosisResponse(name=row.name, description=row.description, status=row.status)
                for row in dashboard.diagnostics
            ],
            lab_results=dashboard.lab_results,
        )

    def _vital_response(self, vital: VitalDefinition, summary: VitalSummary) -> VitalSummaryResponse:
        return VitalSummaryResponse(
            key=vital.key,
            title=vital.display_name,
            unit=vital.unit,
            average=summary.average,
            status=summary.status.value if summary.status else None,
            sample_size=summary.sample_size,
        )

    # -------------------------------------------------------------------------
    # HTML
    # -------------------------------------------------------------------------

    def render_html(self, record: PatientRecord, window_size: int = DEFAULT_WINDOW_SIZE) -> str:
        """Render the complete dashboard page for one patient."""
        dashboard = self._data_prep.prepare(record, window_size)
        logger.info(
            "Rendering dashboard",
            extra={"patient": record.name, "history_size": len(record.diagnosis_history)},
        )

        body = (
            '<div class="dashboard">'
            '<div class="main">'
            f"{self._render_blood_pressure(dashboard.blood_pressure)}"
            f"{self._render_cards(dashboard.cards)}"
            f"{self._render_diagnostics(dashboard)}"
            "</div>"
            '<div class="side">'
            f"{self._render_profile(dashboard.profile)}"
            f"{self._render_lab_results(dashboard.lab_results)}"
            "</div>"
            "</div>"
        )
        return self._page(f"{dashboard.profile.name} - Patient Dashboard", body)

    def render_loading_html(self) -> str:
        """Page shown while patient records are being fetched."""
        return self._page("Patient Dashboard", '<div class="message">Loading...</div>')

    def render_state_html(self, state: LoadState, error: Optional[DashboardError] = None) -> str:
        """Page for a load that has not produced a patient record."""
        if state is LoadState.FAILED and error is not None:
            return self.render_error_html(error)
        return self.render_loading_html()

    def render_error_html(self, error: DashboardError) -> str:
        """Page shown when loading or selecting the patient failed."""
        return self._page(
            "Patient Dashboard",
            '<div class="message error">'
            "<p><strong>Unable to load the dashboard</strong></p>"
            f"<p>{escape(error.detail)}</p>"
            "</div>",
        )

    def _page(self, title: str, body: str) -> str:
        return (
            "<!DOCTYPE html>"
            '<html lang="en"><head><meta charset="utf-8">'
            '<meta name="viewport" content="width=device-width, initial-scale=1">'
            f"<title>{escape(title)}</title>"
            f"<style>{PAGE_CSS}</style>"
            f"</head><body>{body}</body></html>"
        )

    def _render_chart(self, panel: BloodPressurePanel) -> str:
        fig = self._builder.build_blood_pressure_figure(panel)
        return pio.to_html(
            fig,
            full_html=False,
            include_plotlyjs="cdn",
            config=self._builder.get_config(),
            div_id=CHART_DIV_ID,
        )

    def _render_series_summary(self, series: BloodPressureSeries) -> str:
        return (
            "<div>"
            f'<h2 style="color:{escape(series.color)}">Average {escape(series.name)}</h2>'
            f'<p class="average">{escape(series.average_text)}</p>'
            f'<p class="status">{escape(series.status_text)}</p>'
            "</div>"
        )

    def _render_blood_pressure(self, panel: BloodPressurePanel) -> str:
        return (
            '<section class="panel bp">'
            f"<div>{self._render_chart(panel)}</div>"
            "<div>"
            f"{self._render_series_summary(panel.systolic)}"
            f"{self._render_series_summary(panel.diastolic)}"
            "</div>"
            "</section>"
        )

    def _render_cards(self, cards: List[VitalCard]) -> str:
        items = "".join(
            f'<div class="card" style="background-color:{escape(card.color)}">'
            f"<h2>{escape(card.title)}</h2>"
            f'<p class="value">{escape(card.value_text)}</p>'
            f'<p class="status">{escape(card.status_text)}</p>'
            "</div>"
            for card in cards
        )
        return f'<section class="cards">{items}</section>'

    def _render_diagnostics(self, dashboard: PreparedDashboard) -> str:
        headers = "".join(f"<th>{escape(header)}</th>" for header in DIAGNOSTIC_HEADERS)
        rows = "".join(
            "<tr>"
            f"<td>{escape(row.name)}</td>"
            f"<td>{escape(row.description)}</td>"
            f"<td>{escape(row.status)}</td>"
            "</tr>"
            for row in dashboard.diagnostics
        )
        return (
            '<section class="panel diagnostics">'
            "<h2>Diagnostic List</h2>"
            f"<table><thead><tr>{headers}</tr></thead><tbody>{rows}</tbody></table>"
            "</section>"
        )

    def _render_profile(self, profile: ProfilePanel) -> str:
        picture = (
            f'<img src="{escape(profile.picture_url)}" alt="Profile">'
            if profile.picture_url else ""
        )
        details = (
            ("Date of Birth", profile.date_of_birth),
            ("Gender", profile.gender),
            ("Contact Info", profile.phone_number),
            ("Emergency Contacts", profile.emergency_contact),
            ("Insurance Provider", profile.insurance_type),
        )
        items = "".join(f"<dt>{escape(label)}</dt><dd>{escape(value)}</dd>" for label, value in details)
        return (
            '<section class="panel profile">'
            f"{picture}"
            f"<h1>{escape(profile.name)}</h1>"
            f"<dl>{items}</dl>"
            "</section>"
        )

    def _render_lab_results(self, lab_results: List[str]) -> str:
        items = "".join(f"<li>{escape(result)}</li>" for result in lab_results)
        return (
            '<section class="panel labs">'
            "<h2>Lab Results</h2>"
            f"<ul>{items}</ul>"
            "</section>"
        )
