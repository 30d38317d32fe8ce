"""Configuration for pyrtl433."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyrtl433._constants import DEFAULT_RINGS, MQTT_DEFAULT_TOPIC
from pyrtl433.exceptions import Rtl433ConfigError
from pyrtl433.state.rrd import Resolution, RingSpec


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise Rtl433ConfigError(f"{env_key} must be an integer, got {value!r}") from exc


def default_rings() -> tuple[RingSpec, ...]:
    return tuple(RingSpec(Resolution(name), count, seconds) for name, count, seconds in DEFAULT_RINGS)


def parse_rings(text: str) -> tuple[RingSpec, ...]:
    """Parse a ring layout such as ``"second:60:1,minute:60:60"``.

    Rings must be listed finest first, each with a positive bucket count
    and a bucket duration strictly longer than the previous ring's.
    """
    rings: list[RingSpec] = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(":")
        if len(parts) != 3:
            raise Rtl433ConfigError(f"ring spec must be resolution:count:seconds, got {chunk!r}")
        name, count_text, seconds_text = parts
        try:
            resolution = Resolution(name.strip().lower())
        except ValueError as exc:
            raise Rtl433ConfigError(f"unknown resolution {name!r}") from exc
        rings.append(
            RingSpec(
                resolution,
                _env_int("RTL433_RINGS", count_text.strip()),
                _env_int("RTL433_RINGS", seconds_text.strip()),
            )
        )
    validate_rings(rings)
    return tuple(rings)


def validate_rings(rings: list[RingSpec] | tuple[RingSpec, ...]) -> None:
    if not rings:
        raise Rtl433ConfigError("at least one history ring is required")
    seen: set[Resolution] = set()
    previous = 0
    for ring in rings:
        if ring.bucket_count <= 0 or ring.bucket_seconds <= 0:
            raise Rtl433ConfigError(f"ring {ring.resolution} needs a positive count and duration")
        if ring.bucket_seconds <= previous:
            raise Rtl433ConfigError("rings must be ordered finest first with growing bucket durations")
        if ring.resolution in seen:
            raise Rtl433ConfigError(f"ring {ring.resolution} configured twice")
        seen.add(ring.resolution)
        previous = ring.bucket_seconds


@dataclasses.dataclass(frozen=True)
class Rtl433Config:
    """Library configuration.

    Parameters
    ----------
    rings : tuple of RingSpec
        History ring layout shared by every aggregated series, finest
        resolution first.  Defaults to 60 x 1s, 60 x 1min, 24 x 1h and
        7 x 1day.
    mqtt_enabled : bool
        Start the MQTT record feed.
    mqtt_host : str
        Broker host rtl_433 publishes to.
    mqtt_port : int
        Broker port.
    mqtt_topic : str
        Topic filter carrying rtl_433 JSON events.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    mqtt_username : str or None
        Optional broker username.
    mqtt_password : str or None
        Optional broker password.
    """

    rings: tuple[RingSpec, ...] = dataclasses.field(default_factory=default_rings)
    mqtt_enabled: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_topic: str = MQTT_DEFAULT_TOPIC
    mqtt_keepalive: int = 60
    mqtt_username: str | None = None
    mqtt_password: str | None = None

    def __post_init__(self) -> None:
        validate_rings(self.rings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Rtl433Config:
        """Create configuration from ``RTL433_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        Rtl433ConfigError
            If a numeric variable or the ring layout cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "RTL433_MQTT_HOST": "mqtt_host",
            "RTL433_MQTT_TOPIC": "mqtt_topic",
            "RTL433_MQTT_USERNAME": "mqtt_username",
            "RTL433_MQTT_PASSWORD": "mqtt_password",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_INT_MAP = {
            "RTL433_MQTT_PORT": "mqtt_port",
            "RTL433_MQTT_KEEPALIVE": "mqtt_keepalive",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        if "mqtt_enabled" not in overrides:
            config_kwargs["mqtt_enabled"] = _env_bool(env.get("RTL433_MQTT_ENABLED"), False)

        rings_env = env.get("RTL433_RINGS")
        if rings_env is not None and "rings" not in overrides:
            config_kwargs["rings"] = parse_rings(rings_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
