"""Tests for the lenient reading models."""

from __future__ import annotations

import pytest

from pyrtl433.models.readings import (
    CommonReading,
    SwitchReading,
    ThermometerReading,
    TpmsReading,
    WeatherStationReading,
)


class TestCommonReading:
    def test_model_and_channel_are_text(self) -> None:
        reading = CommonReading.model_validate({"Model": "Nexus-TH", "channel": 2})
        assert (reading.model, reading.channel) == ("Nexus-TH", "2")

    def test_battery_ok_maps_to_text(self) -> None:
        assert CommonReading.model_validate({"battery_ok": 1}).battery_text == "OK"
        assert CommonReading.model_validate({"battery_ok": 0}).battery_text == "LOW"
        assert CommonReading.model_validate({"battery": "LOW", "battery_ok": 1}).battery_text == "LOW"
        assert CommonReading.model_validate({}).battery_text is None

    def test_raw_is_stashed(self) -> None:
        record = {"model": "Nexus-TH", "id": 1}
        assert CommonReading.model_validate(record).raw == record

    def test_raw_keeps_only_string_keys(self) -> None:
        reading = CommonReading.model_validate({"model": "Nexus-TH", 5: "x", None: 1})
        assert reading.raw == {"model": "Nexus-TH"}
        assert reading.model == "Nexus-TH"


class TestThermometerReading:
    def test_fahrenheit_is_converted(self) -> None:
        reading = ThermometerReading.model_validate({"temperature_F": 98.6})
        assert reading.temperature == pytest.approx(37.0, abs=0.01)

    def test_celsius_preferred_over_fahrenheit(self) -> None:
        reading = ThermometerReading.model_validate({"temperature_C": 20.0, "temperature_F": 100.0})
        assert reading.temperature == 20.0

    def test_unannotated_temperature_is_celsius(self) -> None:
        assert ThermometerReading.model_validate({"temperature": "21.5"}).temperature == 21.5

    def test_malformed_fields_become_none(self) -> None:
        reading = ThermometerReading.model_validate({"temperature_C": "hot", "humidity": {"v": 4}})
        assert reading.temperature is None
        assert reading.humidity is None

    def test_boolean_is_not_a_measurement(self) -> None:
        assert ThermometerReading.model_validate({"humidity": True}).humidity is None


class TestWeatherStationReading:
    def test_unannotated_speed_is_canonical(self) -> None:
        reading = WeatherStationReading.model_validate({"speed": 12, "windstrength": 30})
        assert reading.wind_speed == 12

    def test_m_s_and_mph_are_converted(self) -> None:
        assert WeatherStationReading.model_validate({"wind_avg_m_s": 10}).wind_speed == 36
        assert WeatherStationReading.model_validate({"wind_max_mi_h": 10}).wind_gust == 16

    def test_kph_suffix(self) -> None:
        assert WeatherStationReading.model_validate({"wind_speed_kph": 12}).wind_speed == 12

    def test_direction_rain_uv_lux_aliases(self) -> None:
        reading = WeatherStationReading.model_validate(
            {"direction_deg": 270, "rain_mm": 31, "uvi": 4, "light_lux": 12000}
        )
        assert reading.wind_dir == 270
        assert reading.rain == 31
        assert reading.uv_index == 4
        assert reading.lux == 12000

    def test_inherits_thermometer_fields(self) -> None:
        reading = WeatherStationReading.model_validate({"temperature_C": -4.5, "humidity": 88})
        assert reading.temperature == -4.5
        assert reading.humidity == 88


class TestTpmsReading:
    def test_kpa_to_bar(self) -> None:
        assert TpmsReading.model_validate({"pressure_kpa": 230}).pressure == pytest.approx(2.3)

    def test_psi_to_bar(self) -> None:
        assert TpmsReading.model_validate({"pressure_PSI": 32}).pressure == pytest.approx(2.2063, abs=1e-3)

    def test_opaque_fields_are_strings(self) -> None:
        reading = TpmsReading.model_validate({"flags": 64, "state": "ok", "checksum": "CRC", "code": "1a2b"})
        assert reading.flags == "64"
        assert reading.state == "ok"
        assert reading.checksum == "CRC"
        assert reading.code == "1a2b"


class TestSwitchReading:
    def test_positions_stop_at_first_gap(self) -> None:
        reading = SwitchReading.model_validate(
            {"switch1": "OPEN", "switch2": "CLOSED", "switch3": 1, "switch5": "OPEN"}
        )
        assert reading.positions == (1, 0, 1)

    def test_unreadable_position_is_none(self) -> None:
        reading = SwitchReading.model_validate({"switch1": "JAMMED", "switch2": {"a": 1}, "switch3": "ON"})
        assert reading.positions == (None, None, 1)

    def test_no_switches(self) -> None:
        assert SwitchReading.model_validate({"model": "X"}).positions == ()
