"""Ingest pipeline.

One call per record:

- resolve the sensor identity
- classify the record into a sensor family and validate its typed models
- find or create the device state, then under its lock refresh common
  attributes and run the family extractor, which also feeds the
  aggregated series

Only an unidentifiable, non-mapping or unparseable record is rejected,
and always before any device state is created or changed.  Everything
else is accepted, including records that match no family.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from pyrtl433.config import Rtl433Config
from pyrtl433.exceptions import Rtl433IdentityError
from pyrtl433.ingestion.classify import classify
from pyrtl433.ingestion.extract import EXTRACTORS, extract_common, read_record
from pyrtl433.ingestion.identity import derive_identity
from pyrtl433.state.device import DeviceState, SchemaTag
from pyrtl433.state.inventory import DeviceInventory, InMemoryInventory
from pyrtl433.state.rrd import Resolution, RingSpec

_logger = logging.getLogger(__name__)


class RejectReason(StrEnum):
    UNIDENTIFIABLE = "unidentifiable"
    MALFORMED = "malformed"


class IngestResult(BaseModel):
    """Outcome of one :meth:`Rtl433Ingestor.ingest` call."""

    model_config = ConfigDict(frozen=True)

    accepted: bool
    schema_tag: SchemaTag | None = None
    """Family the record was classified into; ``None`` when rejected."""
    reject_reason: RejectReason | None = None
    identity_key: str | None = None

    @classmethod
    def rejected(cls, reason: RejectReason) -> IngestResult:
        return cls(accepted=False, reject_reason=reason)


class Rtl433Ingestor:
    """Turns rtl_433 records into canonical device state and history.

    Parameters
    ----------
    inventory
        Host device inventory.  Defaults to an :class:`InMemoryInventory`
        using the configured rings.
    config
        Library configuration; only ``rings`` is used here.
    clock
        Epoch-seconds time source used to slot samples into buckets.
    """

    def __init__(
        self,
        *,
        inventory: DeviceInventory | None = None,
        config: Rtl433Config | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or Rtl433Config()
        self._inventory = inventory if inventory is not None else InMemoryInventory(self._config.rings)
        self._clock = clock

    @property
    def inventory(self) -> DeviceInventory:
        return self._inventory

    @property
    def rings(self) -> tuple[RingSpec, ...]:
        return self._config.rings

    def ingest(self, record: Mapping[str, Any]) -> IngestResult:
        """Apply one record; never raises for bad sensor input."""
        if not isinstance(record, Mapping):
            _logger.warning("Dropping non-mapping record type=%s", type(record).__name__)
            return IngestResult.rejected(RejectReason.MALFORMED)

        try:
            identity = derive_identity(record)
        except Rtl433IdentityError as exc:
            _logger.warning("Dropping record: %s", exc)
            return IngestResult.rejected(RejectReason.UNIDENTIFIABLE)

        tag = classify(record)
        try:
            common, reading = read_record(record, tag)
        except ValidationError as exc:
            _logger.warning("Dropping malformed record key=%s: %s", identity.key, exc)
            return IngestResult.rejected(RejectReason.MALFORMED)

        state = self._inventory.find_or_create(identity)
        now = self._clock()

        with state.lock:
            state.touch(now)
            extract_common(common, identity, state)
            if state.adopt_schema(tag):
                EXTRACTORS[tag](reading, state, now)
            elif tag is not SchemaTag.UNCLASSIFIED:
                _logger.warning(
                    "Record family %s conflicts with device family %s key=%s; common fields only",
                    tag,
                    state.schema_tag,
                    identity.key,
                )

        _logger.debug("Ingested record key=%s family=%s", identity.key, tag)
        return IngestResult(accepted=True, schema_tag=tag, identity_key=identity.key)

    def history(self, state: DeviceState, attribute: str, resolution: Resolution) -> list[int]:
        """Snapshot of one attribute's ring, oldest to newest."""
        with state.lock:
            return state.read(attribute, resolution)
