"""Internal MQTT runtime and payload parsing.

rtl_433 run with ``-F mqtt`` publishes every decoded packet as a JSON
object on ``rtl_433/<host>/events``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from pyrtl433.exceptions import Rtl433FeedError


@dataclass(frozen=True)
class MqttBroker:
    """Broker connection details."""

    host: str
    port: int
    topic: str
    username: str | None = None
    password: str | None = None
    client_id: str = ""


@dataclass(frozen=True)
class MqttRecord:
    """One decoded rtl_433 event."""

    topic: str
    payload: dict[str, Any]


def decode_record_payload(payload: bytes, *, topic: str = "") -> dict[str, Any]:
    """Parse an MQTT payload into a JSON object."""
    try:
        parsed = json.loads(payload.decode("utf-8", errors="replace"))
    except ValueError as exc:
        raise Rtl433FeedError(f"payload is not JSON: {exc}", topic=topic) from exc
    if not isinstance(parsed, dict):
        raise Rtl433FeedError("payload is not a JSON object", topic=topic)
    return parsed


class Rtl433MqttRuntime:
    """Threaded paho-mqtt runtime that emits parsed records onto an asyncio loop."""

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_record: Callable[[MqttRecord], None],
        keepalive: int = 60,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._on_record = on_record
        self._keepalive = keepalive
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether a client is connected or connecting."""
        return self._running

    def handle_message(self, topic: str, payload: bytes) -> None:
        """Decode one PUBLISH and hand it to the event loop."""
        try:
            record = decode_record_payload(payload, topic=topic)
        except Rtl433FeedError:
            self._logger.debug("Skipping undecodable payload on %s", topic, exc_info=True)
            return
        self._logger.debug("Record on %s keys=%s", topic, sorted(record))
        self._loop.call_soon_threadsafe(self._on_record, MqttRecord(topic=topic, payload=record))

    def _on_connect(self, client: mqtt.Client, _userdata: Any, _flags: Any, reason_code: Any, _properties: Any) -> None:
        if reason_code.is_failure:
            self._logger.warning("Broker refused connection: %s", reason_code)
            return
        if self._topic:
            client.subscribe(self._topic, qos=0)
            self._logger.debug("Subscribed to %s", self._topic)

    def _on_message(self, _client: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
        self.handle_message(msg.topic, msg.payload)

    def start(self, broker: MqttBroker) -> None:
        """Connect to *broker* and follow its rtl_433 events topic.

        Blocks until the TCP connection is opened; run it in an executor.
        """
        self.stop()
        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=broker.client_id,
            protocol=mqtt.MQTTv311,
        )
        client.enable_logger(self._logger)
        if broker.username:
            client.username_pw_set(broker.username, broker.password)
        client.on_connect = self._on_connect
        client.on_message = self._on_message

        self._topic = broker.topic
        self._logger.debug("Connecting to %s:%s for %s", broker.host, broker.port, broker.topic)
        client.connect(broker.host, broker.port, keepalive=self._keepalive)
        client.loop_start()
        self._client = client
        self._running = True

    def stop(self) -> None:
        """Disconnect and join the network thread; no-op when not started."""
        client, self._client = self._client, None
        self._running = False
        self._topic = None
        if client is None:
            return
        client.disconnect()
        client.loop_stop()
