"""
Vital sign aggregation over a patient's diagnosis history.

Responsible for:
- Numeric averages of vital readings
- Categorical averages: each level is encoded as -1/0/1, averaged, rounded
  half up and decoded back to a level
- Selecting the trailing window of history used for charting
- Per-vital summaries with an explicit no-data result

Ordering: history is newest-first as received from the record service.
Averages do not depend on order; trailing_window is the one place that
produces chronological (oldest-to-newest) order.

All functions are pure and accept both pydantic models and raw dicts.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from core.exceptions import EmptySeriesError, UnknownLevelError
from core.vital_registry import VitalDefinition, get_vital, list_vitals
from schemas.patient_record import VitalLevel

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 6

LEVEL_ENCODING: Dict[VitalLevel, int] = {
    VitalLevel.LOWER: -1,
    VitalLevel.NORMAL: 0,
    VitalLevel.HIGHER: 1,
}
LEVEL_DECODING: Dict[int, VitalLevel] = {code: level for level, code in LEVEL_ENCODING.items()}


# =============================================================================
# FIELD ACCESS
# =============================================================================

def _field(reading: Any, name: str) -> Any:
    """Read a field from a model or a mapping."""
    if isinstance(reading, Mapping):
        return reading.get(name)
    return getattr(reading, name, None)


# =============================================================================
# LEVEL ENCODING
# =============================================================================

def encode_level(level: Any) -> int:
    """
    Encode a level label as -1, 0 or 1.

    Raises:
        UnknownLevelError: If the label is not one of the VitalLevel strings
    """
    try:
        return LEVEL_ENCODING[VitalLevel(level)]
    except ValueError:
        raise UnknownLevelError(level) from None


def decode_level(code: int) -> VitalLevel:
    """Decode an integer to a level, clamping to the -1..1 scale."""
    return LEVEL_DECODING[max(-1, min(1, code))]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (0.5 -> 1, -0.5 -> 0)."""
    return math.floor(value + 0.5)


# =============================================================================
# AVERAGES
# =============================================================================

def categorical_average(readings: Iterable[Any]) -> VitalLevel:
    """
    Average the categorical levels of a series of readings.

    Args:
        readings: Objects or dicts exposing a ``levels`` label

    Returns:
        The level nearest to the mean of the encoded levels

    Raises:
        EmptySeriesError: If there are no readings
        UnknownLevelError: If a reading carries an unrecognized label
    """
    codes = [encode_level(_field(reading, "levels")) for reading in readings]
    if not codes:
        raise EmptySeriesError()
    return decode_level(round_half_up(sum(codes) / len(codes)))


def numeric_average(readings: Iterable[Any]) -> float:
    """
    Arithmetic mean of the ``value`` field of a series of readings.

    Raises:
        EmptySeriesError: If there are no readings
    """
    values = [float(_field(reading, "value")) for reading in readings]
    if not values:
        raise EmptySeriesError()
    return sum(values) / len(values)


# =============================================================================
# TRAILING WINDOW
# =============================================================================

def trailing_window(history: Sequence[Any], window_size: int = DEFAULT_WINDOW_SIZE) -> List[Any]:
    """
    Select the most recent entries of a newest-first history, oldest first.

    Args:
        history: Diagnosis history, newest entry first
        window_size: Maximum number of entries to keep

    Returns:
        min(window_size, len(history)) entries in chronological order

    Raises:
        ValueError: If window_size is less than 1
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    chronological = list(reversed(history))
    return chronological[-window_size:]


# =============================================================================
# SUMMARIES
# =============================================================================

@dataclass(frozen=True)
class VitalSummary:
    """
    Average value and level for one vital.

    average and status are both None when there was nothing to average.
    """
    key: str
    average: Optional[float]
    status: Optional[VitalLevel]
    sample_size: int

    @property
    def has_data(self) -> bool:
        return self.sample_size > 0

    @classmethod
    def no_data(cls, key: str) -> "VitalSummary":
        return cls(key=key, average=None, status=None, sample_size=0)


def summarize_vital(readings: Sequence[Any], key: str) -> VitalSummary:
    """
    Summarize a series of readings for one vital.

    An empty series gives VitalSummary.no_data instead of raising.

    Raises:
        UnknownLevelError: If a reading carries an unrecognized label
    """
    if not readings:
        return VitalSummary.no_data(key)
    return VitalSummary(
        key=key,
        average=numeric_average(readings),
        status=categorical_average(readings),
        sample_size=len(readings),
    )


@dataclass
class VitalsOverview:
    """
    Summaries of every registered vital plus the charted window.

    window holds the trailing window in chronological order.
    """
    summaries: Dict[str, VitalSummary]
    window: List[Any] = field(default_factory=list)

    def __getitem__(self, key: str) -> VitalSummary:
        return self.summaries[key]

    @property
    def labels(self) -> List[str]:
        """Chart labels, e.g. "March 2024"."""
        return [f"{_field(entry, 'month')} {_field(entry, 'year')}" for entry in self.window]

    def window_values(self, key: str) -> List[float]:
        """Values of one vital across the window, oldest first."""
        vital = get_vital(key)
        return [float(_field(vital.read(entry), "value")) for entry in self.window]

    @property
    def systolic_values(self) -> List[float]:
        return self.window_values("systolic")

    @property
    def diastolic_values(self) -> List[float]:
        return self.window_values("diastolic")


def _series(vital: VitalDefinition, entries: Sequence[Any]) -> List[Any]:
    return [vital.read(entry) for entry in entries]


def summarize_record(
    history: Sequence[Any],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> VitalsOverview:
    """
    Summarize every registered vital of a diagnosis history.

    Vitals with scope "history" average every entry; vitals with scope
    "window" (blood pressure) average only the trailing window.

    Args:
        history: Diagnosis history, newest entry first
        window_size: Size of the trailing window

    Raises:
        UnknownLevelError: If a reading carries an unrecognized label
        ValueError: If window_size is less than 1
    """
    window = trailing_window(history, window_size)
    summaries: Dict[str, VitalSummary] = {}
    for key, vital in list_vitals().items():
        entries = window if vital.scope == "window" else history
        summaries[key] = summarize_vital(_series(vital, entries), key)

    logger.debug(
        "Summarized vitals",
        extra={"history_size": len(history), "window_size": len(window)},
    )
    return VitalsOverview(summaries=summaries, window=window)
