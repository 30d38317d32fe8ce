"""Typed views of one rtl_433 record, one model per sensor family.

rtl_433 decoders disagree on field names and units: wind speed arrives
as ``speed``, ``wind_avg_km_h``, ``wind_avg_m_s`` or ``wind_avg_mi_h``,
pressure as ``pressure_kPa``, ``pressure_PSI`` or ``pressure_bar``.
Each unit gets its own field; the properties return the canonical unit.
Fields without a unit marker are taken as already canonical.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import model_validator

from pyrtl433._constants import KPA_TO_BAR, MPH_TO_KPH, MS_TO_KPH, PSI_TO_BAR, f_to_c
from pyrtl433.ingestion.normalize import clean_record, safe_position
from pyrtl433.models._base import LenientFloat, LenientInt, LenientStr, Rtl433BaseModel

__all__ = [
    "CommonReading",
    "SwitchReading",
    "ThermometerReading",
    "TpmsReading",
    "WeatherStationReading",
]


def _to_kph(kph: float | None, m_s: float | None, mph: float | None) -> int | None:
    if kph is not None:
        return int(round(kph))
    if m_s is not None:
        return int(round(m_s * MS_TO_KPH))
    if mph is not None:
        return int(round(mph * MPH_TO_KPH))
    return None


class CommonReading(Rtl433BaseModel):
    """Fields every decoder may report.

    The sensor id is resolved by :func:`~pyrtl433.ingestion.identity.derive_identity`.
    """

    model: LenientStr = None
    channel: LenientStr = None
    battery: LenientStr = None
    battery_ok: LenientInt = None

    @property
    def battery_text(self) -> str | None:
        if self.battery is not None:
            return self.battery
        if self.battery_ok is None:
            return None
        return "OK" if self.battery_ok else "LOW"


class ThermometerReading(Rtl433BaseModel):
    _KEY_ALIASES: ClassVar[dict[str, str]] = {
        "temperature": "temperature_c",
        "temp_c": "temperature_c",
        "temp_f": "temperature_f",
    }

    temperature_c: LenientFloat = None
    temperature_f: LenientFloat = None
    humidity: LenientInt = None

    @property
    def temperature(self) -> float | None:
        """Degrees Celsius."""
        if self.temperature_c is not None:
            return self.temperature_c
        if self.temperature_f is not None:
            return f_to_c(self.temperature_f)
        return None


class WeatherStationReading(ThermometerReading):
    _KEY_ALIASES: ClassVar[dict[str, str]] = {
        **ThermometerReading._KEY_ALIASES,
        "direction_deg": "wind_dir",
        "wind_dir_deg": "wind_dir",
        "winddirection": "wind_dir",
        "wind_avg_km_h": "wind_speed_kph",
        "wind_speed_km_h": "wind_speed_kph",
        "wind_speed": "wind_speed_kph",
        "speed": "wind_speed_kph",
        "windstrength": "wind_speed_kph",
        "wind_avg_m_s": "wind_speed_ms",
        "wind_speed_m_s": "wind_speed_ms",
        "wind_avg_mi_h": "wind_speed_mph",
        "wind_speed_mi_h": "wind_speed_mph",
        "wind_max_km_h": "wind_gust_kph",
        "gust_speed_kph": "wind_gust_kph",
        "gust_kph": "wind_gust_kph",
        "wind_gust": "wind_gust_kph",
        "gust": "wind_gust_kph",
        "wind_max_m_s": "wind_gust_ms",
        "gust_speed_m_s": "wind_gust_ms",
        "wind_gust_m_s": "wind_gust_ms",
        "wind_max_mi_h": "wind_gust_mph",
        "gust_speed_mph": "wind_gust_mph",
        "wind_gust_mi_h": "wind_gust_mph",
        "rain_mm": "rain",
        "rain_in": "rain",
        "rain_total": "rain",
        "rainfall_accumulation": "rain",
        "uv": "uv_index",
        "uvi": "uv_index",
        "light_lux": "lux",
    }

    wind_dir: LenientInt = None
    wind_speed_kph: LenientFloat = None
    wind_speed_ms: LenientFloat = None
    wind_speed_mph: LenientFloat = None
    wind_gust_kph: LenientFloat = None
    wind_gust_ms: LenientFloat = None
    wind_gust_mph: LenientFloat = None
    rain: LenientInt = None
    uv_index: LenientInt = None
    lux: LenientInt = None

    @property
    def wind_speed(self) -> int | None:
        return _to_kph(self.wind_speed_kph, self.wind_speed_ms, self.wind_speed_mph)

    @property
    def wind_gust(self) -> int | None:
        return _to_kph(self.wind_gust_kph, self.wind_gust_ms, self.wind_gust_mph)


class TpmsReading(Rtl433BaseModel):
    _KEY_ALIASES: ClassVar[dict[str, str]] = {
        "pressure": "pressure_bar",
    }

    pressure_bar: LenientFloat = None
    pressure_kpa: LenientFloat = None
    pressure_psi: LenientFloat = None
    flags: LenientStr = None
    state: LenientStr = None
    checksum: LenientStr = None
    code: LenientStr = None

    @property
    def pressure(self) -> float | None:
        """Pressure in bar."""
        if self.pressure_bar is not None:
            return self.pressure_bar
        if self.pressure_kpa is not None:
            return self.pressure_kpa * KPA_TO_BAR
        if self.pressure_psi is not None:
            return self.pressure_psi * PSI_TO_BAR
        return None


class SwitchReading(Rtl433BaseModel):
    """Switch panels report ``switch1`` .. ``switchN``; numbering stops at the first gap.

    An unreadable position is ``None``.
    """

    positions: tuple[int | None, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _collect_positions(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "positions" in values:
            return values
        working = clean_record(values)
        positions: list[int | None] = []
        index = 1
        while f"switch{index}" in working:
            positions.append(safe_position(working[f"switch{index}"]))
            index += 1
        return {**values, "positions": tuple(positions)}
