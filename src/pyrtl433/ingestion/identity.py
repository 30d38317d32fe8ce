"""Identity resolution.

A sensor is keyed by ``(model, id, channel)``.  The id is normalized so
the same physical sensor maps to the same key whatever spelling the
decoder used in a given packet:

* ``id`` wins over ``sensor_id`` (Acurite) which wins over ``device``
  (older decoders).
* Integer ids are rendered in decimal, so ``42``, ``"42"`` and ``42.0``
  are the same sensor.
* TPMS decoders (``type: TPMS``) report ids as hex strings, sometimes
  with a ``0x`` prefix; those are parsed base 16 and rendered as
  lowercase hex.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyrtl433.exceptions import Rtl433IdentityError
from pyrtl433.ingestion.classify import is_tpms_type
from pyrtl433.ingestion.normalize import clean_record, parse_sensor_id, safe_str
from pyrtl433.state.device import Identity

_logger = logging.getLogger(__name__)

_ID_KEYS = ("id", "sensor_id", "device")


def _resolve_sensor_id(cleaned: dict[str, Any], *, tpms: bool) -> str | None:
    for key in _ID_KEYS:
        if key not in cleaned:
            continue
        value = cleaned[key]
        if tpms:
            parsed = parse_sensor_id(value, hex_text=True)
            if parsed is not None:
                return format(parsed, "x")
        else:
            parsed = parse_sensor_id(value)
            if parsed is not None:
                return str(parsed)
        # Unparseable ids (e.g. alphanumeric serials) are kept verbatim.
        text = safe_str(value)
        if text is not None:
            return text
    return None


def derive_identity(record: Mapping[str, Any]) -> Identity:
    """Build the stable identity of the sensor that produced *record*.

    Raises
    ------
    Rtl433IdentityError
        If the record carries neither a model nor an id, or only a zero id.
        Merging such a record would fold unrelated sensors together.
    """
    cleaned = clean_record(record)
    model = safe_str(cleaned.get("model"))
    # Measurement keys vary between packets of one sensor; the decoder type does not.
    tpms = is_tpms_type(cleaned)
    sensor_id = _resolve_sensor_id(cleaned, tpms=tpms)
    channel = safe_str(cleaned.get("channel"))

    if model is None and sensor_id is None:
        raise Rtl433IdentityError("record has no model, id or device field", record=dict(record))
    if model is None and sensor_id is not None and set(sensor_id) == {"0"}:
        raise Rtl433IdentityError("record has only a zero id", record=dict(record))

    key = "|".join(part or "" for part in (model, sensor_id, channel))
    _logger.debug("Resolved identity key=%s tpms=%s", key, tpms)
    return Identity(model=model, sensor_id=sensor_id, channel=channel, key=key)
