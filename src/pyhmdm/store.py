"""Attribute store interface consumed by the device manager."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import ChannelObject, DeviceObject, State, StateObject


class AttributeStore(ABC):
    """Read/write surface of the store holding devices, channels and states.

    Implementations raise ``PyHmDmException`` subclasses on failure. Lookups
    of unknown ids return ``None`` instead of raising.
    """

    @abstractmethod
    async def async_get_devices(self) -> list[DeviceObject]:
        """Return all devices of the adapter instance."""

    @abstractmethod
    async def async_get_channels_of(self, device_id: str) -> list[ChannelObject]:
        """Return the channels of a device."""

    @abstractmethod
    async def async_get_states_of(self, channel_id: str) -> list[StateObject]:
        """Return the state objects of a channel."""

    @abstractmethod
    async def async_get_object(self, object_id: str) -> dict[str, Any] | None:
        """Return a raw object, or None if it does not exist."""

    @abstractmethod
    async def async_get_state(self, state_id: str) -> State | None:
        """Return the current value of a state, or None if it has none."""

    @abstractmethod
    async def async_set_state(self, state_id: str, value: Any, ack: bool = False) -> None:
        """Write a new value to a state."""

    @abstractmethod
    async def async_extend_object(
        self, object_id: str, obj: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Merge ``obj`` into an existing object and return the result."""
