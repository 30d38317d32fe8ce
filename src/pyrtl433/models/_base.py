"""Base model and lenient scalar types for rtl_433 records.

Every reading model inherits from :class:`Rtl433BaseModel` which
provides:

* lowercase keys, so ``temperature_C`` and ``temperature_c`` both map
  to the ``temperature_c`` field.
* A ``model_validator(mode="before")`` that strips sentinel values and
  applies per-model ``_KEY_ALIASES`` (decoder spelling -> field name).
* A ``raw`` dict that captures the string-keyed items of the original
  record.

Fields use the ``Lenient*`` annotated types: a value of the wrong type
becomes ``None`` instead of failing validation, so one bad field never
discards the rest of the record.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from pyrtl433.ingestion.normalize import clean_record, safe_float, safe_int, safe_str

LenientFloat = Annotated[float | None, BeforeValidator(safe_float)]
LenientInt = Annotated[int | None, BeforeValidator(safe_int)]
LenientStr = Annotated[str | None, BeforeValidator(safe_str)]


class Rtl433BaseModel(BaseModel):
    """Base for rtl_433 reading models."""

    _KEY_ALIASES: ClassVar[dict[str, str]] = {}
    """``{decoder_key: field_name}``; applied only when the field key is absent.

    Aliases are tried in declaration order, so list the preferred spelling
    first when several map to the same field.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original record."""

    @model_validator(mode="before")
    @classmethod
    def _clean_record_values(cls, values: Any) -> Any:
        """Lowercase keys, strip sentinels, apply key aliases and stash the raw record."""
        if not isinstance(values, dict):
            return values
        original = dict(values)

        working = clean_record(original)
        working.pop("raw", None)
        aliases: dict[str, str] = getattr(cls, "_KEY_ALIASES", {})
        for old_key, new_key in aliases.items():
            if old_key in working and new_key not in working:
                working[new_key] = working.pop(old_key)

        working["raw"] = {key: value for key, value in original.items() if isinstance(key, str)}
        return working


__all__ = [
    "LenientFloat",
    "LenientInt",
    "LenientStr",
    "Rtl433BaseModel",
]
