"""
Pydantic schemas for patient records returned by the remote record service.

Records are read-only snapshots. Unknown fields are ignored and level
strings are carried through as sent; only the aggregator rejects levels it
does not recognize.

diagnosis_history is kept in the order the record service sends it,
newest first.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class VitalLevel(str, Enum):
    """Categorical assessment attached to a vital reading."""

    LOWER = "Lower than Average"
    NORMAL = "Normal"
    HIGHER = "Higher than Average"


class VitalReading(BaseModel):
    """A single measured value paired with its categorical level."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    value: float = Field(..., description="Measured value", examples=[78])
    levels: str = Field(..., description="Categorical level label", examples=["Normal"])


class BloodPressure(BaseModel):
    """Systolic and diastolic readings taken together."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    systolic: VitalReading
    diastolic: VitalReading


class HistoryEntry(BaseModel):
    """One month of vital readings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    month: str = Field(..., examples=["March"])
    year: int = Field(..., examples=[2024])
    heart_rate: VitalReading
    respiratory_rate: VitalReading
    temperature: VitalReading
    blood_pressure: BloodPressure


class DiagnosisEntry(BaseModel):
    """A row of the diagnostic list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    description: str = ""
    status: str = ""


class PatientRecord(BaseModel):
    """
    One patient's health record.

    Identity is the exact patient name; the record service returns a list of
    these and the dashboard selects one by name.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., examples=["Jessica Taylor"])
    date_of_birth: str = Field(default="", examples=["08/23/1996"])
    gender: str = ""
    phone_number: str = ""
    emergency_contact: str = ""
    insurance_type: str = ""
    profile_picture: str = ""
    lab_results: List[str] = Field(default_factory=list)
    diagnostic_list: List[DiagnosisEntry] = Field(default_factory=list)
    diagnosis_history: List[HistoryEntry] = Field(default_factory=list)
