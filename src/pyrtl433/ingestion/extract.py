"""Field extractors, one per sensor family.

:func:`read_record` parses a record into its typed models; it is the only
step that can fail, so callers run it before touching any state.  Each
extractor then copies the fields that are present onto the device.  A
missing or malformed field leaves the attribute at its previous value;
numeric attributes with a history also feed their aggregated series.

Callers hold the device lock and have already moved the device to a
payload compatible with the extractor (see
:meth:`~pyrtl433.state.device.DeviceState.adopt_schema`).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, cast

from pyrtl433._constants import UNKNOWN_POSITION
from pyrtl433.models._base import Rtl433BaseModel
from pyrtl433.models.readings import (
    CommonReading,
    SwitchReading,
    ThermometerReading,
    TpmsReading,
    WeatherStationReading,
)
from pyrtl433.state.device import (
    DeviceState,
    Identity,
    SchemaTag,
    SwitchState,
    ThermometerState,
    TpmsState,
    WeatherStationState,
)

Extractor = Callable[[Any, DeviceState, float], None]

READING_MODELS: dict[SchemaTag, type[Rtl433BaseModel]] = {
    SchemaTag.THERMOMETER: ThermometerReading,
    SchemaTag.WEATHER_STATION: WeatherStationReading,
    SchemaTag.TPMS: TpmsReading,
    SchemaTag.SWITCH: SwitchReading,
}


def read_record(record: Mapping[str, Any], tag: SchemaTag) -> tuple[CommonReading, Rtl433BaseModel | None]:
    """Validate *record* as common fields plus the model for *tag*.

    Raises
    ------
    pydantic.ValidationError
        If the record cannot be validated at all.
    """
    values = dict(record)
    common = CommonReading.model_validate(values)
    model = READING_MODELS.get(tag)
    return common, (model.model_validate(values) if model is not None else None)


def extract_common(reading: CommonReading, identity: Identity, state: DeviceState) -> None:
    if reading.model is not None:
        state.model = reading.model
    if identity.sensor_id is not None:
        state.sensor_id = identity.sensor_id
    if reading.channel is not None:
        state.channel = reading.channel
    battery = reading.battery_text
    if battery is not None:
        state.battery = battery


def _apply_thermometer(reading: ThermometerReading, payload: ThermometerState, state: DeviceState, ts: float) -> None:
    temperature = reading.temperature
    if temperature is not None:
        payload.temperature = temperature
        state.record("temperature", ts, int(round(temperature)))
    if reading.humidity is not None:
        payload.humidity = reading.humidity
        state.record("humidity", ts, reading.humidity)


def extract_thermometer(reading: ThermometerReading, state: DeviceState, timestamp: float) -> None:
    payload = cast(ThermometerState, state.payload)
    _apply_thermometer(reading, payload, state, timestamp)


def extract_weather_station(reading: WeatherStationReading, state: DeviceState, timestamp: float) -> None:
    payload = cast(WeatherStationState, state.payload)
    _apply_thermometer(reading, payload, state, timestamp)

    values: dict[str, int | None] = {
        "wind_dir": reading.wind_dir,
        "wind_speed": reading.wind_speed,
        "wind_gust": reading.wind_gust,
        "rain": reading.rain,
        "uv_index": reading.uv_index,
        "lux": reading.lux,
    }
    for attribute, value in values.items():
        if value is None:
            continue
        setattr(payload, attribute, value)
        state.record(attribute, timestamp, value)


def extract_tpms(reading: TpmsReading, state: DeviceState, timestamp: float) -> None:
    payload = cast(TpmsState, state.payload)
    pressure = reading.pressure
    if pressure is not None:
        payload.pressure_bar = pressure
    for attribute in ("flags", "state", "checksum", "code"):
        value = getattr(reading, attribute)
        if value is not None:
            setattr(payload, attribute, value)


def extract_switch(reading: SwitchReading, state: DeviceState, timestamp: float) -> None:
    payload = cast(SwitchState, state.payload)
    if not reading.positions:
        return
    previous = payload.positions
    positions: list[int] = []
    for index, position in enumerate(reading.positions):
        if position is None:
            # Unreadable positions keep the last good value.
            position = previous[index] if index < len(previous) else UNKNOWN_POSITION
        positions.append(position)
    payload.positions = tuple(positions)


EXTRACTORS: dict[SchemaTag, Extractor] = {
    SchemaTag.THERMOMETER: extract_thermometer,
    SchemaTag.WEATHER_STATION: extract_weather_station,
    SchemaTag.TPMS: extract_tpms,
    SchemaTag.SWITCH: extract_switch,
}
