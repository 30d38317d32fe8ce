"""Device state export.

Renders a :class:`~pyrtl433.state.device.DeviceState` as a flat dict
using the dotted field names rtl_433 device trackers expose
(``rtl433.device.temperature``, ``rtl433.device.temperature_rrd``, ...).
Unset attributes are omitted.  Histories are rendered per resolution,
oldest bucket first.
"""

from __future__ import annotations

from typing import Any

from pyrtl433.state.device import (
    DeviceState,
    SwitchState,
    ThermometerState,
    TpmsState,
    WeatherStationState,
)

_PREFIX = "rtl433.device"

_COMMON_FIELDS: dict[str, str] = {
    "model": f"{_PREFIX}.model",
    "sensor_id": f"{_PREFIX}.id",
    "channel": f"{_PREFIX}.rtlchannel",
    "battery": f"{_PREFIX}.battery",
}

_THERMOMETER_FIELDS: dict[str, str] = {
    "temperature": f"{_PREFIX}.temperature",
    "humidity": f"{_PREFIX}.humidity",
}

_WEATHER_FIELDS: dict[str, str] = {
    "wind_dir": f"{_PREFIX}.wind_dir",
    "wind_speed": f"{_PREFIX}.weatherstation.wind_speed",
    "wind_gust": f"{_PREFIX}.wind_gust",
    "rain": f"{_PREFIX}.rain",
    "uv_index": f"{_PREFIX}.uv_index",
    "lux": f"{_PREFIX}.lux",
}

_TPMS_FIELDS: dict[str, str] = {
    "pressure_bar": f"{_PREFIX}.tpms.pressure_bar",
    "flags": f"{_PREFIX}.tpms.flags",
    "state": f"{_PREFIX}.tpms.state",
    "checksum": f"{_PREFIX}.tpms.checksum",
    "code": f"{_PREFIX}.tpms.code",
}


def _copy_fields(source: object, fields: dict[str, str], out: dict[str, Any]) -> None:
    for attribute, name in fields.items():
        value = getattr(source, attribute)
        if value is not None:
            out[name] = value


def export_device(state: DeviceState, *, include_history: bool = True) -> dict[str, Any]:
    """Serialize *state* under its lock."""
    with state.lock:
        out: dict[str, Any] = {
            f"{_PREFIX}.key": state.identity.key,
            f"{_PREFIX}.schema": str(state.schema_tag),
            f"{_PREFIX}.packets": state.packets,
        }
        if state.first_seen is not None:
            out[f"{_PREFIX}.first_time"] = state.first_seen
        if state.last_seen is not None:
            out[f"{_PREFIX}.last_time"] = state.last_seen
        _copy_fields(state, _COMMON_FIELDS, out)

        payload = state.payload
        if isinstance(payload, ThermometerState):
            _copy_fields(payload, _THERMOMETER_FIELDS, out)
        if isinstance(payload, WeatherStationState):
            _copy_fields(payload, _WEATHER_FIELDS, out)
        if isinstance(payload, TpmsState):
            _copy_fields(payload, _TPMS_FIELDS, out)
        if isinstance(payload, SwitchState) and payload.positions:
            out[f"{_PREFIX}.switch_vec"] = list(payload.positions)

        if include_history:
            for attribute, series in sorted(state.series.items()):
                out[f"{_PREFIX}.{attribute}_rrd"] = series.as_dict()

        return out
