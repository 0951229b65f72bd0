"""
Tests for the vital registry loaded from core/vitals.yaml.
"""
import pytest

from core.vital_registry import (
    VitalDefinition,
    _parse_vital_entry,
    _validate_vital_entry,
    card_vitals,
    get_vital,
    list_vitals,
)
from schemas.patient_record import HistoryEntry


def test_registry_order():
    assert list(list_vitals()) == ["heart_rate", "respiratory_rate", "temperature", "systolic", "diastolic"]


def test_card_order():
    assert [v.key for v in card_vitals()] == ["respiratory_rate", "temperature", "heart_rate"]


def test_blood_pressure_uses_window_scope():
    assert get_vital("systolic").scope == "window"
    assert get_vital("diastolic").scope == "window"
    assert get_vital("heart_rate").scope == "history"


def test_unknown_vital():
    with pytest.raises(KeyError):
        get_vital("oxygen_saturation")


def test_read_from_dict_and_model(make_entry):
    raw = make_entry(systolic=(131, "Higher than Average"))
    systolic = get_vital("systolic")
    assert systolic.read(raw)["value"] == 131
    assert systolic.read(HistoryEntry.model_validate(raw)).value == 131


def test_read_missing_field():
    with pytest.raises(KeyError):
        get_vital("diastolic").read({"month": "March", "year": 2024})


def test_format_value():
    assert get_vital("heart_rate").format_value(78.26) == "78.3 bpm"
    assert get_vital("temperature").format_value(98.6) == "98.6°C"
    assert get_vital("systolic").format_number(120) == "120.0"


class TestEntryValidation:
    """Tests for YAML entry validation and parsing."""

    def test_missing_required_field(self):
        with pytest.raises(ValueError, match="missing required field: 'field'"):
            _validate_vital_entry({"key": "spo2", "color": "#FFFFFF"}, 0)

    def test_invalid_color(self):
        with pytest.raises(ValueError, match="invalid color"):
            _validate_vital_entry({"key": "spo2", "field": "spo2", "color": "pink"}, 0)

    def test_invalid_scope(self):
        with pytest.raises(ValueError, match="invalid scope"):
            _validate_vital_entry({"key": "spo2", "field": "spo2", "color": "#FFFFFF", "scope": "recent"}, 0)

    def test_parse_defaults(self):
        definition = _parse_vital_entry({"key": "oxygen_saturation", "field": "spo2", "color": "#00AAFF"})
        assert definition == VitalDefinition(
            key="oxygen_saturation",
            field="spo2",
            display_name="Oxygen Saturation",
            unit="",
            unit_spacing=True,
            color="#00AAFF",
            scope="history",
            decimals=1,
        )
