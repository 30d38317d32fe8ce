"""Record classifier.

Inexpensive sensor chipsets share field names (a thermometer and a TPMS
sensor may both report ``channel``), so classification is an ordered
decision list rather than a score: the first rule that matches wins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pyrtl433.ingestion.normalize import clean_record
from pyrtl433.state.device import SchemaTag

_WEATHER_KEYS = frozenset(
    {
        "direction_deg",
        "wind_dir_deg",
        "winddirection",
        "wind_dir",
        "speed",
        "windstrength",
        "gust",
    }
)
_WEATHER_PREFIXES = ("wind_speed", "wind_avg", "wind_max", "wind_gust", "gust_", "rain")

# Tire pressure only; barometric pressure_hpa is a thermometer field.
_TPMS_KEYS = frozenset({"pressure", "pressure_bar", "pressure_kpa", "pressure_psi"})

_THERMOMETER_KEYS = frozenset({"temperature", "temperature_c", "temperature_f", "temp_c", "temp_f", "humidity"})


def is_weather_station(keys: frozenset[str], record: Mapping[str, Any]) -> bool:
    if keys & _WEATHER_KEYS:
        return True
    return any(key.startswith(_WEATHER_PREFIXES) for key in keys)


def is_tpms_type(record: Mapping[str, Any]) -> bool:
    """Whether the decoder tagged *record* as a TPMS packet."""
    kind = record.get("type")
    return isinstance(kind, str) and kind.strip().upper() == "TPMS"


def is_tpms(keys: frozenset[str], record: Mapping[str, Any]) -> bool:
    return is_tpms_type(record) or bool(keys & _TPMS_KEYS)


def is_switch(keys: frozenset[str], record: Mapping[str, Any]) -> bool:
    return "switch1" in keys


def is_thermometer(keys: frozenset[str], record: Mapping[str, Any]) -> bool:
    return bool(keys & _THERMOMETER_KEYS)


_RULES: tuple[tuple[Callable[[frozenset[str], Mapping[str, Any]], bool], SchemaTag], ...] = (
    (is_weather_station, SchemaTag.WEATHER_STATION),
    (is_tpms, SchemaTag.TPMS),
    (is_switch, SchemaTag.SWITCH),
    (is_thermometer, SchemaTag.THERMOMETER),
)


def classify(record: Mapping[str, Any]) -> SchemaTag:
    """Return the sensor family *record* belongs to.

    Keys are compared case-insensitively and keys whose value is a
    placeholder (``None``, ``""``, NaN) do not count as present.
    """
    cleaned = clean_record(record)
    keys = frozenset(cleaned)
    for rule, tag in _RULES:
        if rule(keys, cleaned):
            return tag
    return SchemaTag.UNCLASSIFIED
