"""Shared fixtures: an in-memory attribute store and sample Homematic objects."""

from __future__ import annotations

from typing import Any

import pytest

from pyhmdm.exceptions import ApiError
from pyhmdm.models import ChannelObject, DeviceObject, State, StateObject
from pyhmdm.rest import merge_objects
from pyhmdm.store import AttributeStore


class MemoryStore(AttributeStore):
    """Attribute store keeping raw objects and state values in dicts."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self.values: dict[str, Any] = {}
        self.writes: list[tuple[str, Any, bool]] = []
        self.failing: set[str] = set()

    def add(self, object_id: str, object_type: str, common=None, native=None) -> None:
        self.objects[object_id] = {
            "_id": object_id,
            "type": object_type,
            "common": common or {},
            "native": native or {},
        }

    def _children(self, parent_id: str, object_type: str) -> list[dict[str, Any]]:
        return [
            obj
            for object_id, obj in self.objects.items()
            if obj["type"] == object_type and object_id.rsplit(".", 1)[0] == parent_id
        ]

    async def async_get_devices(self) -> list[DeviceObject]:
        return [
            DeviceObject.from_dict(obj)
            for obj in self.objects.values()
            if obj["type"] == "device"
        ]

    async def async_get_channels_of(self, device_id: str) -> list[ChannelObject]:
        return [ChannelObject.from_dict(obj) for obj in self._children(device_id, "channel")]

    async def async_get_states_of(self, channel_id: str) -> list[StateObject]:
        return [StateObject.from_dict(obj) for obj in self._children(channel_id, "state")]

    async def async_get_object(self, object_id: str) -> dict[str, Any] | None:
        return self.objects.get(object_id)

    async def async_get_state(self, state_id: str) -> State | None:
        if state_id in self.failing:
            raise ApiError(500, "store down")
        if state_id not in self.values:
            return None
        return State(val=self.values[state_id], ack=True)

    async def async_set_state(self, state_id: str, value: Any, ack: bool = False) -> None:
        if state_id in self.failing:
            raise ApiError(500, "store down")
        self.writes.append((state_id, value, ack))
        self.values[state_id] = value

    async def async_extend_object(
        self, object_id: str, obj: dict[str, Any]
    ) -> dict[str, Any] | None:
        if object_id not in self.objects:
            return None
        self.objects[object_id] = merge_objects(self.objects[object_id], obj)
        return self.objects[object_id]


DEVICE_ID = "hm-rpc.0.OEQ0000001"


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def dimmer_store(store: MemoryStore) -> MemoryStore:
    """Store holding one dimmer actuator with a key channel."""
    store.add(
        DEVICE_ID,
        "device",
        common={"name": "Living room dimmer", "icon": "/icons/dimmer.png"},
        native={"TYPE": "HM-LC-Dim1T-Pl", "FIRMWARE": "2.9", "AVAILABLE_FIRMWARE": "3.0"},
    )
    store.add(f"{DEVICE_ID}.0", "channel", native={"TYPE": "MAINTENANCE"})
    store.add(
        f"{DEVICE_ID}.0.UNREACH",
        "state",
        common={"type": "boolean", "read": True, "write": False},
    )
    store.add(f"{DEVICE_ID}.1", "channel", common={"name": "Dimmer"}, native={"TYPE": "DIMMER"})
    store.add(
        f"{DEVICE_ID}.1.LEVEL",
        "state",
        common={"type": "number", "read": True, "write": True, "unit": "%", "min": 0, "max": 1},
    )
    store.add(
        f"{DEVICE_ID}.1.WORKING",
        "state",
        common={"type": "boolean", "read": True, "write": False},
    )
    store.add(f"{DEVICE_ID}.2", "channel", native={"TYPE": "KEY"})
    store.add(
        f"{DEVICE_ID}.2.PRESS_SHORT",
        "state",
        common={"type": "boolean", "read": False, "write": True, "role": "button"},
    )
    store.values[f"{DEVICE_ID}.1.LEVEL"] = 40
    store.values[f"{DEVICE_ID}.1.WORKING"] = False
    return store
