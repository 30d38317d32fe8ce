"""Round-robin history for a single numeric attribute.

An :class:`AggregatedSeries` keeps one :class:`BucketRing` per configured
resolution.  Samples land in the finest ring through
:func:`~pyrtl433.state.combiner.combine`; every coarser ring holds the
:func:`~pyrtl433.state.combiner.average` of the finer buckets that fall
inside its current bucket.

Each bucket remembers the time slot it was last written for, so a bucket
left over from a previous trip around the ring reads as absent and is
reset before it is reused.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from enum import StrEnum

from pyrtl433._constants import ABSENT
from pyrtl433.state.combiner import average, combine


class Resolution(StrEnum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


@dataclasses.dataclass(frozen=True)
class RingSpec:
    """Shape of one history ring."""

    resolution: Resolution
    bucket_count: int
    bucket_seconds: int

    @property
    def period(self) -> int:
        """Seconds covered by one full trip around the ring."""
        return self.bucket_count * self.bucket_seconds


class BucketRing:
    """Fixed-size ring of buckets for one resolution."""

    __slots__ = ("spec", "_values", "_slots")

    def __init__(self, spec: RingSpec) -> None:
        self.spec = spec
        self._values: list[int] = [ABSENT] * spec.bucket_count
        self._slots: list[int | None] = [None] * spec.bucket_count

    def slot_for(self, timestamp: float) -> int:
        return int(timestamp // self.spec.bucket_seconds)

    def _index(self, slot: int) -> int:
        # Same as (timestamp mod period) // bucket_seconds.
        return slot % self.spec.bucket_count

    def _claim(self, slot: int) -> int:
        index = self._index(slot)
        if self._slots[index] != slot:
            self._values[index] = ABSENT
            self._slots[index] = slot
        return index

    def combine_into(self, timestamp: float, value: int) -> None:
        """Merge *value* into the bucket for *timestamp*."""
        index = self._claim(self.slot_for(timestamp))
        self._values[index] = combine(self._values[index], value)

    def store(self, slot: int, value: int) -> None:
        """Overwrite the bucket for *slot* with *value*."""
        index = self._claim(slot)
        self._values[index] = value

    def values_between(self, start: float, end: float) -> list[int]:
        """Values of live buckets whose span starts in ``[start, end)``."""
        seconds = self.spec.bucket_seconds
        values: list[int] = []
        for slot, value in zip(self._slots, self._values):
            if slot is None:
                continue
            if start <= slot * seconds < end:
                values.append(value)
        return values

    def snapshot(self, anchor: float) -> list[int]:
        """Ring contents oldest to newest, ending at the bucket holding *anchor*."""
        last_slot = self.slot_for(anchor)
        count = self.spec.bucket_count
        result: list[int] = []
        for slot in range(last_slot - count + 1, last_slot + 1):
            index = self._index(slot)
            result.append(self._values[index] if self._slots[index] == slot else ABSENT)
        return result


class AggregatedSeries:
    """Multi-resolution rolling history of one attribute."""

    def __init__(self, rings: Sequence[RingSpec]) -> None:
        if not rings:
            raise ValueError("an aggregated series needs at least one ring")
        self._rings = [BucketRing(spec) for spec in rings]
        self._by_resolution = {ring.spec.resolution: ring for ring in self._rings}
        self.last_time: float | None = None

    @property
    def resolutions(self) -> tuple[Resolution, ...]:
        return tuple(ring.spec.resolution for ring in self._rings)

    def record(self, timestamp: float, value: int) -> None:
        """Add a sample observed at *timestamp* (epoch seconds)."""
        if value == ABSENT:
            return

        self._rings[0].combine_into(timestamp, value)

        for finer, coarser in zip(self._rings, self._rings[1:]):
            coarse_slot = coarser.slot_for(timestamp)
            start = coarse_slot * coarser.spec.bucket_seconds
            end = start + coarser.spec.bucket_seconds
            coarser.store(coarse_slot, average(finer.values_between(start, end)))

        # Out-of-order samples still land (and may reset a newer bucket), but
        # the read anchor never moves backwards.
        if self.last_time is None or timestamp > self.last_time:
            self.last_time = timestamp

    def read(self, resolution: Resolution) -> list[int]:
        """Ring for *resolution*, oldest to newest, always full length."""
        ring = self._by_resolution.get(resolution)
        if ring is None:
            raise ValueError(f"resolution {resolution!s} is not configured")
        if self.last_time is None:
            return [ABSENT] * ring.spec.bucket_count
        return ring.snapshot(self.last_time)

    def as_dict(self) -> dict[str, list[int]]:
        return {str(resolution): self.read(resolution) for resolution in self.resolutions}


def empty_history(rings: Sequence[RingSpec], resolution: Resolution) -> list[int]:
    """All-absent read for an attribute that was never recorded."""
    for spec in rings:
        if spec.resolution == resolution:
            return [ABSENT] * spec.bucket_count
    raise ValueError(f"resolution {resolution!s} is not configured")
