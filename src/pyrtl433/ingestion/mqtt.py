"""MQTT record feed.

Subscribes to the rtl_433 events topic and pushes every decoded record
through :meth:`Rtl433Ingestor.ingest` on the asyncio loop.

Usage::

    ingestor = Rtl433Ingestor(config=config)
    async with MqttFeed(ingestor, config) as feed:
        await asyncio.Event().wait()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pyrtl433._mqtt import MqttBroker, MqttRecord, Rtl433MqttRuntime
from pyrtl433.config import Rtl433Config
from pyrtl433.ingestion.pipeline import IngestResult, Rtl433Ingestor

_logger = logging.getLogger(__name__)


class MqttFeed:
    def __init__(
        self,
        ingestor: Rtl433Ingestor,
        config: Rtl433Config,
        *,
        on_result: Callable[[MqttRecord, IngestResult], None] | None = None,
    ) -> None:
        self._ingestor = ingestor
        self._config = config
        self._on_result = on_result
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runtime: Rtl433MqttRuntime | None = None
        self.accepted = 0
        self.rejected = 0

    @property
    def runtime(self) -> Rtl433MqttRuntime | None:
        return self._runtime

    async def __aenter__(self) -> MqttFeed:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def _broker(self) -> MqttBroker:
        return MqttBroker(
            host=self._config.mqtt_host,
            port=self._config.mqtt_port,
            topic=self._config.mqtt_topic,
            username=self._config.mqtt_username,
            password=self._config.mqtt_password,
        )

    async def start(self) -> None:
        self._loop = asyncio.get_running_loop()
        if not self._config.mqtt_enabled:
            _logger.debug("MQTT feed disabled by configuration")
            return

        runtime = Rtl433MqttRuntime(
            loop=self._loop,
            on_record=self.handle_record,
            keepalive=self._config.mqtt_keepalive,
            logger=_logger,
        )
        await self._loop.run_in_executor(None, runtime.start, self._broker())
        self._runtime = runtime

    async def stop(self) -> None:
        runtime = self._runtime
        self._runtime = None
        if runtime is None or self._loop is None:
            return
        await self._loop.run_in_executor(None, runtime.stop)

    def handle_record(self, record: MqttRecord) -> None:
        result = self._ingestor.ingest(record.payload)
        if result.accepted:
            self.accepted += 1
        else:
            self.rejected += 1
            _logger.debug("MQTT record rejected topic=%s reason=%s", record.topic, result.reject_reason)
        if self._on_result is not None:
            self._on_result(record, result)
