"""
Central vital registry - single source of truth for vital sign definitions.

This module provides:
- YAML-based configuration loading and validation
- VitalDefinition dataclass for vital configuration
- Read-only access to vital definitions
- Reading extraction from history entries by dotted field path

All vital-related presentation (titles, units, colors, precision) MUST derive
from this registry. YAML access is encapsulated here - no other module should
read vitals.yaml directly.

Usage:
    from core.vital_registry import get_vital, list_vitals, card_vitals

    heart_rate = get_vital("heart_rate")
    reading = heart_rate.read(history_entry)
    heart_rate.format_value(72.25)  # "72.3 bpm"
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import yaml

logger = logging.getLogger(__name__)

VALID_SCOPES = ("history", "window")


# =============================================================================
# VITAL DEFINITION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class VitalDefinition:
    """
    Immutable definition for a vital sign.

    Attributes:
        key: Canonical identifier (e.g. "heart_rate", "systolic")
        field: Dotted path of the reading inside a history entry
        display_name: Human-readable title
        unit: Measurement unit
        unit_spacing: Whether a space separates value and unit
        color: Hex color for cards and chart lines
        scope: "history" (all entries) or "window" (trailing window only)
        decimals: Digits after the decimal point when formatting
    """
    key: str
    field: str
    display_name: str
    unit: str
    unit_spacing: bool
    color: str
    scope: str
    decimals: int

    def read(self, entry: Any) -> Any:
        """
        Extract this vital's reading from a history entry.

        Works on HistoryEntry models and on raw dicts alike.

        Raises:
            KeyError: If the entry has no value at this vital's field path
        """
        current = entry
        for part in self.field.split("."):
            if isinstance(current, Mapping):
                if part not in current:
                    raise KeyError(f"History entry has no '{self.field}'")
                current = current[part]
            else:
                if not hasattr(current, part):
                    raise KeyError(f"History entry has no '{self.field}'")
                current = getattr(current, part)
        return current

    def format_number(self, value: float) -> str:
        """Format a value with this vital's precision."""
        return f"{value:.{self.decimals}f}"

    def format_value(self, value: float) -> str:
        """Format a value with precision and unit, e.g. "72.3 bpm" or "98.6°C"."""
        separator = " " if self.unit_spacing else ""
        return f"{self.format_number(value)}{separator}{self.unit}"


# =============================================================================
# YAML CONFIGURATION LOADING & VALIDATION
# =============================================================================

def _get_config_path() -> Path:
    """Get the path to the vitals configuration file."""
    return Path(__file__).parent / "vitals.yaml"


def _load_yaml_config() -> Dict[str, Any]:
    """
    Load and parse the YAML configuration file.

    Raises:
        FileNotFoundError: If vitals.yaml is not found
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = _get_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error("Vitals config file not found", extra={"path": str(config_path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse vitals config", extra={"path": str(config_path), "error": str(e)})
        raise


def _validate_vital_entry(raw: Dict[str, Any], index: int) -> None:
    """
    Validate a single vital entry from YAML.

    Raises:
        ValueError: If required fields are missing or invalid
    """
    for field in ("key", "field", "color"):
        if field not in raw:
            raise ValueError(f"Vital at index {index} is missing required field: '{field}'")

    color = raw.get("color", "")
    if not re.match(r"^#[0-9A-Fa-f]{6}$", str(color)):
        raise ValueError(f"Vital '{raw['key']}' has invalid color format: '{color}'")

    scope = raw.get("scope", "history")
    if scope not in VALID_SCOPES:
        raise ValueError(f"Vital '{raw['key']}' has invalid scope: '{scope}'")

    decimals = raw.get("decimals", 1)
    if not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"Vital '{raw['key']}' has invalid decimals: {decimals!r}")


def _parse_vital_entry(raw: Dict[str, Any]) -> VitalDefinition:
    """Parse a single vital entry from YAML into a VitalDefinition."""
    key = raw["key"]
    return VitalDefinition(
        key=key,
        field=raw["field"],
        display_name=raw.get("display_name", key.replace("_", " ").title()),
        unit=raw.get("unit", ""),
        unit_spacing=bool(raw.get("unit_spacing", True)),
        color=raw["color"],
        scope=raw.get("scope", "history"),
        decimals=raw.get("decimals", 1),
    )


@lru_cache(maxsize=1)
def _load_registry() -> Tuple[Tuple[VitalDefinition, ...], Tuple[str, ...]]:
    """
    Load and cache the vital registry from YAML.

    Returns a tuple of:
    - All vital definitions, in file order
    - Card order (vital keys)
    """
    config = _load_yaml_config()

    definitions: List[VitalDefinition] = []
    seen = set()
    for i, raw in enumerate(config.get("vitals", [])):
        _validate_vital_entry(raw, i)
        definition = _parse_vital_entry(raw)
        if definition.key in seen:
            raise ValueError(f"Duplicate vital key: '{definition.key}'")
        seen.add(definition.key)
        definitions.append(definition)

    card_order = tuple(config.get("card_order", []))
    unknown = [key for key in card_order if key not in seen]
    if unknown:
        raise ValueError(f"card_order references unknown vitals: {unknown}")

    return tuple(definitions), card_order


# =============================================================================
# PUBLIC API - VITAL ACCESS
# =============================================================================

def list_vitals() -> Dict[str, VitalDefinition]:
    """Get all vital definitions keyed by canonical key, in registry order."""
    definitions, _ = _load_registry()
    return {definition.key: definition for definition in definitions}


def get_vital(key: str) -> VitalDefinition:
    """
    Get a vital definition by key.

    Raises:
        KeyError: If no vital is registered under this key
    """
    vitals = list_vitals()
    if key not in vitals:
        raise KeyError(f"Unknown vital: '{key}'")
    return vitals[key]


def card_vitals() -> List[VitalDefinition]:
    """Get the vitals shown as summary cards, in display order."""
    _, card_order = _load_registry()
    vitals = list_vitals()
    return [vitals[key] for key in card_order]
