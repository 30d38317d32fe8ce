"""Canonical per-sensor state.

A :class:`DeviceState` is a tagged variant: common attributes every
rtl_433 sensor shares, a :class:`SchemaTag`, and exactly one family
payload selected by the classifier.  Numeric attributes that make sense
as a history each own an :class:`~pyrtl433.state.rrd.AggregatedSeries`.
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Sequence
from enum import StrEnum

from pyrtl433.state.rrd import AggregatedSeries, Resolution, RingSpec, empty_history


class SchemaTag(StrEnum):
    THERMOMETER = "thermometer"
    WEATHER_STATION = "weather_station"
    TPMS = "tpms"
    SWITCH = "switch"
    UNCLASSIFIED = "unclassified"


@dataclasses.dataclass(frozen=True)
class Identity:
    """Stable key of one physical sensor."""

    model: str | None
    sensor_id: str | None
    channel: str | None
    key: str
    """``model|id|channel`` with empty parts for missing fields."""

    def __str__(self) -> str:
        return self.key


@dataclasses.dataclass
class ThermometerState:
    temperature: float | None = None
    """Degrees Celsius."""
    humidity: int | None = None
    """Relative humidity, percent."""


@dataclasses.dataclass
class WeatherStationState(ThermometerState):
    """Weather stations also report temperature and humidity in some packets."""

    wind_dir: int | None = None
    """Degrees."""
    wind_speed: int | None = None
    """Kph."""
    wind_gust: int | None = None
    """Kph."""
    rain: int | None = None
    """Whatever unit the sensor reports; not normalized."""
    uv_index: int | None = None
    lux: int | None = None


@dataclasses.dataclass
class TpmsState:
    pressure_bar: float | None = None
    flags: str | None = None
    state: str | None = None
    checksum: str | None = None
    code: str | None = None


@dataclasses.dataclass
class SwitchState:
    positions: tuple[int, ...] = ()
    """1 = on/open, 0 = off/closed, -1 = never read cleanly."""


FamilyPayload = ThermometerState | WeatherStationState | TpmsState | SwitchState

PAYLOAD_TYPES: dict[SchemaTag, type[FamilyPayload]] = {
    SchemaTag.THERMOMETER: ThermometerState,
    SchemaTag.WEATHER_STATION: WeatherStationState,
    SchemaTag.TPMS: TpmsState,
    SchemaTag.SWITCH: SwitchState,
}


@dataclasses.dataclass(eq=False)
class DeviceState:
    """Normalized, schema-tagged in-memory record of one sensor.

    Mutate only while holding :attr:`lock`; the ingest pipeline and the
    history export both do.
    """

    identity: Identity
    rings: tuple[RingSpec, ...]
    model: str | None = None
    sensor_id: str | None = None
    channel: str | None = None
    battery: str | None = None
    schema_tag: SchemaTag = SchemaTag.UNCLASSIFIED
    payload: FamilyPayload | None = None
    series: dict[str, AggregatedSeries] = dataclasses.field(default_factory=dict)
    first_seen: float | None = None
    last_seen: float | None = None
    packets: int = 0
    lock: threading.Lock = dataclasses.field(default_factory=threading.Lock, repr=False)

    def touch(self, timestamp: float) -> None:
        if self.first_seen is None:
            self.first_seen = timestamp
        self.last_seen = timestamp
        self.packets += 1

    def adopt_schema(self, tag: SchemaTag) -> bool:
        """Move the device towards *tag*; return whether *tag* records may be extracted.

        The tag is never downgraded to ``UNCLASSIFIED``.  A thermometer is
        upgraded to a weather station (whose payload is a superset), and a
        weather station keeps accepting thermometer-only packets.  Any other
        family change is refused.
        """
        if tag is SchemaTag.UNCLASSIFIED:
            return False

        wanted = PAYLOAD_TYPES[tag]
        current = self.payload
        if current is None:
            self.schema_tag = tag
            self.payload = wanted()
            return True
        if isinstance(current, wanted):
            return True
        if issubclass(wanted, type(current)):
            self.payload = wanted(**dataclasses.asdict(current))
            self.schema_tag = tag
            return True
        return False

    def record(self, attribute: str, timestamp: float, value: int) -> None:
        series = self.series.get(attribute)
        if series is None:
            series = AggregatedSeries(self.rings)
            self.series[attribute] = series
        series.record(timestamp, value)

    def read(self, attribute: str, resolution: Resolution) -> list[int]:
        series = self.series.get(attribute)
        if series is None:
            return empty_history(self.rings, resolution)
        return series.read(resolution)


def new_device_state(identity: Identity, rings: Sequence[RingSpec]) -> DeviceState:
    return DeviceState(identity=identity, rings=tuple(rings))
