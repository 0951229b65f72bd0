"""
Patient selection by exact name.

Matching reads only the "name" key of each raw record; the matched record is
the only one parsed into a PatientRecord.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from core.exceptions import PatientNotFoundError, RecordServiceResponseError
from schemas.patient_record import PatientRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatientLookup:
    """Result of a name lookup: either carries the record or records the miss."""
    name: str
    record: Optional[PatientRecord] = None

    @property
    def found(self) -> bool:
        return self.record is not None

    def require(self) -> PatientRecord:
        """
        Get the record.

        Raises:
            PatientNotFoundError: If no record matched
        """
        if self.record is None:
            raise PatientNotFoundError(patient_name=self.name)
        return self.record


def parse_record(raw: Mapping[str, Any]) -> PatientRecord:
    """
    Parse one raw record from the record service.

    Raises:
        RecordServiceResponseError: If the record cannot be read
    """
    try:
        return PatientRecord.model_validate(raw)
    except ValidationError as e:
        logger.error(
            "Record service returned a record that cannot be read",
            extra={"patient": raw.get("name"), "errors": e.error_count()},
        )
        raise RecordServiceResponseError(
            detail="Record service returned a record that cannot be read",
            errors=e.error_count(),
        ) from e


def find_patient(records: Iterable[Mapping[str, Any]], name: str) -> PatientLookup:
    """
    Select the first raw record whose name matches exactly (case-sensitive).

    Raises:
        RecordServiceResponseError: If the matched record cannot be read
    """
    for raw in records:
        if isinstance(raw, Mapping) and raw.get("name") == name:
            return PatientLookup(name=name, record=parse_record(raw))
    logger.info("No patient record matched", extra={"patient": name})
    return PatientLookup(name=name)
