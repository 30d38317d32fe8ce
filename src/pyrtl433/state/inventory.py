"""Device inventory.

The ingest pipeline never allocates device storage itself; it asks a
:class:`DeviceInventory` to find or create the state for an identity.
Hosts with their own device tracker implement the protocol;
:class:`InMemoryInventory` is the default.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from typing import Protocol

from pyrtl433.state.device import DeviceState, Identity, new_device_state
from pyrtl433.state.rrd import RingSpec


class DeviceInventory(Protocol):
    def find_or_create(self, identity: Identity) -> DeviceState: ...


class InMemoryInventory:
    """Dict-backed inventory keyed by :attr:`Identity.key`."""

    def __init__(self, rings: Sequence[RingSpec]) -> None:
        self._rings = tuple(rings)
        self._devices: dict[str, DeviceState] = {}
        self._lock = threading.Lock()

    def find_or_create(self, identity: Identity) -> DeviceState:
        with self._lock:
            state = self._devices.get(identity.key)
            if state is None:
                state = new_device_state(identity, self._rings)
                self._devices[identity.key] = state
            return state

    def get(self, key: str) -> DeviceState | None:
        with self._lock:
            return self._devices.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def __iter__(self) -> Iterator[DeviceState]:
        with self._lock:
            devices = list(self._devices.values())
        return iter(devices)
