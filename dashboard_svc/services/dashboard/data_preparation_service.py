"""
Data preparation service for the patient dashboard.

Responsible for:
- Aggregating vitals via the metric aggregator
- Formatting card values, averages and statuses using the vital registry
- Shaping profile, diagnostic list and lab results for display

This service is visualization-agnostic: the prepared structures can be
rendered to HTML, serialized to JSON, or plotted by any backend.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from core.datetime_utils import format_long_date
from core.vital_registry import VitalDefinition, card_vitals, get_vital
from schemas.patient_record import PatientRecord
from services.metric_aggregator import (
    DEFAULT_WINDOW_SIZE,
    VitalsOverview,
    VitalSummary,
    summarize_record,
)

logger = logging.getLogger(__name__)

NO_DATA_TEXT = "No data"
NO_VALUE_TEXT = "N/A"


# =============================================================================
# NORMALIZED DATA STRUCTURES
# =============================================================================

@dataclass
class ProfilePanel:
    """Patient identity and contact details."""
    name: str
    picture_url: str
    date_of_birth: str
    gender: str
    phone_number: str
    emergency_contact: str
    insurance_type: str


@dataclass
class VitalCard:
    """A summary card: average value and categorical status of one vital."""
    key: str
    title: str
    value_text: str
    status_text: str
    color: str
    summary: VitalSummary


@dataclass
class BloodPressureSeries:
    """One line of the blood pressure chart with its average and status."""
    key: str
    name: str
    color: str
    values: List[float]
    average_text: str
    status_text: str
    summary: VitalSummary


@dataclass
class BloodPressurePanel:
    """Blood pressure chart data over the trailing window, oldest first."""
    labels: List[str]
    systolic: BloodPressureSeries
    diastolic: BloodPressureSeries

    def is_empty(self) -> bool:
        return len(self.labels) == 0


@dataclass
class DiagnosticRow:
    """A row of the diagnostic list table."""
    name: str
    description: str
    status: str


@dataclass
class PreparedDashboard:
    """Everything the dashboard shows for one patient."""
    profile: ProfilePanel
    cards: List[VitalCard]
    blood_pressure: BloodPressurePanel
    diagnostics: List[DiagnosticRow] = field(default_factory=list)
    lab_results: List[str] = field(default_factory=list)
    overview: Optional[VitalsOverview] = None


# =============================================================================
# FORMATTING HELPERS
# =============================================================================

def format_status(summary: VitalSummary) -> str:
    """Status text for a summary, "No data" when nothing was averaged."""
    if summary.status is None:
        return NO_DATA_TEXT
    return summary.status.value


def format_card_value(vital: VitalDefinition, summary: VitalSummary) -> str:
    """Card value with unit, e.g. "78.3 bpm"."""
    if summary.average is None:
        return NO_VALUE_TEXT
    return vital.format_value(summary.average)


def format_average(vital: VitalDefinition, summary: VitalSummary) -> str:
    """Bare average with the vital's precision, e.g. "121.5"."""
    if summary.average is None:
        return NO_VALUE_TEXT
    return vital.format_number(summary.average)


# =============================================================================
# DATA PREPARATION SERVICE
# =============================================================================

class DataPreparationService:
    """Prepares a patient record for display."""

    def prepare(
        self,
        record: PatientRecord,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ) -> PreparedDashboard:
        """
        Prepare the complete dashboard for one patient.

        Args:
            record: The selected patient record
            window_size: Number of most recent entries in the blood pressure chart

        Raises:
            UnknownLevelError: If a reading carries an unrecognized level
        """
        overview = summarize_record(record.diagnosis_history, window_size)

        if not record.diagnosis_history:
            logger.warning("Patient has no diagnosis history", extra={"patient": record.name})

        return PreparedDashboard(
            profile=self._prepare_profile(record),
            cards=self._prepare_cards(overview),
            blood_pressure=self._prepare_blood_pressure(overview),
            diagnostics=[
                DiagnosticRow(name=d.name, description=d.description, status=d.status)
                for d in record.diagnostic_list
            ],
            lab_results=list(record.lab_results),
            overview=overview,
        )

    def _prepare_profile(self, record: PatientRecord) -> ProfilePanel:
        return ProfilePanel(
            name=record.name,
            picture_url=record.profile_picture,
            date_of_birth=format_long_date(record.date_of_birth),
            gender=record.gender,
            phone_number=record.phone_number,
            emergency_contact=record.emergency_contact,
            insurance_type=record.insurance_type,
        )

    def _prepare_cards(self, overview: VitalsOverview) -> List[VitalCard]:
        cards = []
        for vital in card_vitals():
            summary = overview[vital.key]
            cards.append(VitalCard(
                key=vital.key,
                title=vital.display_name,
                value_text=format_card_value(vital, summary),
                status_text=format_status(summary),
                color=vital.color,
                summary=summary,
            ))
        return cards

    def _prepare_series(self, overview: VitalsOverview, key: str) -> BloodPressureSeries:
        vital = get_vital(key)
        summary = overview[key]
        return BloodPressureSeries(
            key=key,
            name=vital.display_name,
            color=vital.color,
            values=overview.window_values(key),
            average_text=format_average(vital, summary),
            status_text=format_status(summary),
            summary=summary,
        )

    def _prepare_blood_pressure(self, overview: VitalsOverview) -> BloodPressurePanel:
        return BloodPressurePanel(
            labels=overview.labels,
            systolic=self._prepare_series(overview, "systolic"),
            diastolic=self._prepare_series(overview, "diastolic"),
        )
