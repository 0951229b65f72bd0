"""
Pydantic schemas for dashboard API responses.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class VitalSummaryResponse(BaseModel):
    """Average and categorical status of one vital."""
    key: str = Field(..., description="Vital key", examples=["heart_rate"])
    title: str = Field(..., description="Display title", examples=["Heart Rate"])
    unit: str = Field(..., description="Measurement unit", examples=["bpm"])
    average: Optional[float] = Field(None, description="Mean value, null when there is no data", examples=[78.5])
    status: Optional[str] = Field(None, description="Averaged level, null when there is no data", examples=["Normal"])
    sample_size: int = Field(..., description="Number of readings averaged", examples=[6])


class BloodPressureChartResponse(BaseModel):
    """Blood pressure chart series over the trailing window, oldest first."""
    labels: List[str] = Field(..., examples=[["October 2023", "November 2023"]])
    systolic: List[float] = Field(..., examples=[[120, 118]])
    diastolic: List[float] = Field(..., examples=[[80, 78]])


class DiagnosisResponse(BaseModel):
    """A row of the diagnostic list."""
    name: str
    description: str
    status: str


class PatientProfileResponse(BaseModel):
    """Patient identity and contact details."""
    name: str
    date_of_birth: str = Field(..., description="Formatted as 'Month D, YYYY'", examples=["August 23, 1996"])
    gender: str
    phone_number: str
    emergency_contact: str
    insurance_type: str
    profile_picture: str


class DashboardSummaryResponse(BaseModel):
    """Everything the dashboard shows, as JSON."""
    patient: PatientProfileResponse
    window_size: int = Field(..., description="Configured trailing window size", examples=[6])
    vitals: List[VitalSummaryResponse]
    blood_pressure: BloodPressureChartResponse
    diagnostic_list: List[DiagnosisResponse]
    lab_results: List[str]


class VitalDefinitionResponse(BaseModel):
    """Single vital definition from the registry."""
    key: str
    field: str
    display_name: str
    unit: str
    color: str
    scope: str
    decimals: int
