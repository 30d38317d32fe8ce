from __future__ import annotations

import pytest

from pyrtl433.ingestion.classify import classify
from pyrtl433.state.device import SchemaTag


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        ({"model": "Fineoffset-WH1080", "id": 3, "speed": 4.2, "direction_deg": 90}, SchemaTag.WEATHER_STATION),
        ({"model": "Acurite-5n1", "id": 1, "wind_avg_km_h": 3.0}, SchemaTag.WEATHER_STATION),
        ({"model": "Oregon-PCR800", "id": 2, "rain_mm": 12.5}, SchemaTag.WEATHER_STATION),
        ({"model": "Toyota", "type": "TPMS", "id": "1a2b3c4d"}, SchemaTag.TPMS),
        ({"model": "Schrader", "id": "abc", "pressure_kPa": 220}, SchemaTag.TPMS),
        ({"model": "Interlogix-Security", "id": "ab12", "switch1": "OPEN"}, SchemaTag.SWITCH),
        ({"model": "Nexus-TH", "id": 21, "temperature_C": 21.5}, SchemaTag.THERMOMETER),
        ({"model": "LaCrosse-TX", "id": 5, "humidity": 40}, SchemaTag.THERMOMETER),
        ({"model": "Bresser-TPMS", "id": "abc", "pressure_PSI": 32}, SchemaTag.TPMS),
        ({"model": "Generic-Remote", "id": 9, "cmd": 3}, SchemaTag.UNCLASSIFIED),
    ],
)
def test_classify_families(record: dict, expected: SchemaTag) -> None:
    assert classify(record) == expected


def test_weather_fields_win_over_thermometer_fields() -> None:
    record = {"model": "Acurite-5n1", "channel": "A", "temperature_C": 5.0, "wind_speed_kph": 12}

    assert classify(record) == SchemaTag.WEATHER_STATION


def test_tpms_wins_over_thermometer() -> None:
    record = {"model": "Citroen", "type": "TPMS", "id": "8a2b", "temperature_C": 18}

    assert classify(record) == SchemaTag.TPMS


def test_keys_are_case_insensitive() -> None:
    assert classify({"model": "X", "TEMPERATURE_F": 70}) == SchemaTag.THERMOMETER


def test_placeholder_values_do_not_count_as_present() -> None:
    assert classify({"model": "X", "id": 1, "wind_avg_km_h": None, "temperature_C": 20}) == SchemaTag.THERMOMETER


def test_switch_requires_switch1() -> None:
    assert classify({"model": "X", "id": 1, "switch2": "OPEN"}) == SchemaTag.UNCLASSIFIED


def test_barometric_pressure_is_not_tire_pressure() -> None:
    record = {"model": "Fineoffset-WH32B", "id": 42, "temperature_C": 21.5, "humidity": 40, "pressure_hPa": 1013.2}

    assert classify(record) == SchemaTag.THERMOMETER


def test_barometric_pressure_alone_is_unclassified() -> None:
    assert classify({"model": "Baro", "id": 1, "pressure_hPa": 1013.2}) == SchemaTag.UNCLASSIFIED
