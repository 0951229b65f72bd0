"""
Pydantic schemas for record service payloads and API responses.
"""
from schemas.patient_record import (
    VitalLevel,
    VitalReading,
    BloodPressure,
    HistoryEntry,
    DiagnosisEntry,
    PatientRecord,
)
from schemas.dashboard import (
    VitalSummaryResponse,
    BloodPressureChartResponse,
    DiagnosisResponse,
    PatientProfileResponse,
    DashboardSummaryResponse,
    VitalDefinitionResponse,
)

__all__ = [
    # Record service payload
    "VitalLevel",
    "VitalReading",
    "BloodPressure",
    "HistoryEntry",
    "DiagnosisEntry",
    "PatientRecord",
    # API responses
    "VitalSummaryResponse",
    "BloodPressureChartResponse",
    "DiagnosisResponse",
    "PatientProfileResponse",
    "DashboardSummaryResponse",
    "VitalDefinitionResponse",
]
