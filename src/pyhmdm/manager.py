"""Device manager: the per-device view offered to a device management UI."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any

from .classifier import classify_group
from .const import (
    ACTION_RENAME,
    ACTION_RENAME_ICON,
    DEFAULT_ADAPTER,
    DEFAULT_LANGUAGE,
    DEFAULT_MANUFACTURER,
    ERROR_DEVICE_NOT_FOUND,
    INFO_CHANNEL_SUFFIX,
    RENAME_DESCRIPTION,
    RENAME_TITLE,
    SYSTEM_CONFIG_ID,
)
from .detector import ChannelDetector, ObjectLookup, PatternDetector
from .exceptions import PyHmDmException
from .models import (
    Action,
    Control,
    DeviceDetails,
    DeviceInfo,
    DeviceObject,
)
from .ordering import sort_controls
from .status import async_get_status
from .store import AttributeStore

_LOGGER = logging.getLogger(__name__)


class ActionContext(ABC):
    """Host side context handed to device actions."""

    @abstractmethod
    async def show_form(
        self, schema: dict[str, Any], options: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Show a form and return the submitted data, or None if cancelled."""


class DeviceManager:
    """Lists devices with status and inferred controls.

    Call :meth:`async_setup` once before listing to resolve the display
    language from the system configuration.
    """

    def __init__(
        self,
        store: AttributeStore,
        detector: PatternDetector | None = None,
        adapter: str = DEFAULT_ADAPTER,
        language: str | None = None,
        manufacturer: str = DEFAULT_MANUFACTURER,
    ) -> None:
        """Initialize the device manager."""
        self.store = store
        self.detector = detector or ChannelDetector()
        self.adapter = adapter
        self.manufacturer = manufacturer
        self._explicit_language = language
        self.language: str = language or DEFAULT_LANGUAGE

    async def async_setup(self) -> None:
        """Resolve the display language once."""
        if self._explicit_language:
            return
        try:
            config = await self.store.async_get_object(SYSTEM_CONFIG_ID)
        except PyHmDmException as err:
            _LOGGER.warning("Can not read system language, using %s: %s", self.language, err)
            return
        language = ((config or {}).get("common") or {}).get("language")
        if language:
            self.language = language
        _LOGGER.debug("Using display language %s", self.language)

    async def async_list_devices(self) -> list[DeviceInfo]:
        """Return the descriptors of all devices."""
        devices = await self.store.async_get_devices()
        result = []
        for device in devices:
            status = await async_get_status(self.store, device.id)
            result.append(
                DeviceInfo(
                    id=device.id,
                    name=device.name,
                    icon=(
                        f"../../adapter/{self.adapter}{device.icon}"
                        if device.icon
                        else None
                    ),
                    manufacturer=self.manufacturer,
                    model=device.type or None,
                    status=status,
                    has_details=bool(device.available_firmware or device.firmware),
                    actions=[
                        Action(
                            id=ACTION_RENAME,
                            icon=ACTION_RENAME_ICON,
                            description=RENAME_DESCRIPTION,
                            handler=self.async_rename_device,
                        )
                    ],
                    controls=await self.async_get_controls(device),
                )
            )
        _LOGGER.debug("Listed %d devices", len(result))
        return result

    async def async_get_controls(self, device: DeviceObject) -> list[Control] | None:
        """Classify the states of every channel of a device.

        The information channel is skipped. Returns None if the device has
        no controls.
        """
        channels = await self.store.async_get_channels_of(device.id)
        controls: list[Control] = []
        used_ids: set[str] = set()
        for channel in channels:
            if not channel or not channel.id or channel.id.endswith(INFO_CHANNEL_SUFFIX):
                continue
            states = await self.store.async_get_states_of(channel.id)
            objects: ObjectLookup = {state.id: state for state in states}
            objects[channel.id] = channel

            for group in self.detector.detect(channel.id, objects) or []:
                controls.extend(classify_group(group, objects, self.store, used_ids))

        controls = sort_controls(controls, self.language)
        return controls or None

    async def _async_find_device(self, device_id: str) -> DeviceObject | None:
        devices = await self.store.async_get_devices()
        return next((device for device in devices if device.id == device_id), None)

    async def async_get_device_details(
        self, device_id: str
    ) -> DeviceDetails | dict[str, str]:
        """Return the firmware detail panel of a device."""
        device = await self._async_find_device(device_id)
        if device is None:
            return {"error": ERROR_DEVICE_NOT_FOUND}

        items: dict[str, Any] = {}
        if device.firmware:
            items["firmwareLabel"] = {
                "type": "staticText",
                "text": "Installed firmware:",
                "style": {"fontWeight": "bold"},
                "newLine": False,
            }
            items["firmware"] = {
                "type": "staticText",
                "text": f"{device.firmware}",
                "newLine": False,
            }
        if device.available_firmware:
            items["labelAvailableFirmware"] = {
                "type": "staticText",
                "text": "Available firmware:",
                "style": {"fontWeight": "bold"},
                "newLine": True,
            }
            items["availableFirmware"] = {
                "type": "staticText",
                "text": f"{device.available_firmware}",
                "newLine": False,
            }
        return DeviceDetails(id=device.id, schema={"type": "panel", "items": items})

    async def async_rename_device(
        self, device_id: str, context: ActionContext
    ) -> dict[str, bool]:
        """Ask the user for a new device name and store it."""
        result = await context.show_form(
            {
                "type": "panel",
                "items": {
                    "newName": {"type": "text", "trim": False, "placeholder": ""},
                },
            },
            {"data": {"newName": ""}, "title": RENAME_TITLE},
        )
        new_name = (result or {}).get("newName")
        if not new_name:
            return {"refresh": False}

        try:
            res = await self.store.async_extend_object(
                device_id, {"common": {"name": new_name}}
            )
        except PyHmDmException as err:
            _LOGGER.warning("Can not rename device %s: %s", device_id, err)
            return {"refresh": False}
        if res is None:
            _LOGGER.warning("Can not rename device %s: no object returned", device_id)
            return {"refresh": False}

        _LOGGER.info("Renamed device %s to %s", device_id, new_name)
        return {"refresh": True}
