"""Attribute store backed by the ioBroker REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from .auth import AuthHandler
from .const import (
    DEFAULT_ADAPTER,
    DEFAULT_BASE_URL,
    DEFAULT_INSTANCE,
    DEFAULT_TIMEOUT,
    OBJECT_ENDPOINT,
    OBJECTS_ENDPOINT,
    STATE_ENDPOINT,
)
from .exceptions import ApiError, PyHmDmException
from .models import ChannelObject, DeviceObject, State, StateObject
from .store import AttributeStore

_LOGGER = logging.getLogger(__name__)


def merge_objects(target: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Return ``target`` with ``update`` merged in recursively."""
    merged = dict(target)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_objects(merged[key], value)
        else:
            merged[key] = value
    return merged


def _parent_id(object_id: str) -> str:
    return object_id.rsplit(".", 1)[0]


class RestStore(AttributeStore):
    """Reads and writes objects and states of one adapter instance over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        adapter: str = DEFAULT_ADAPTER,
        instance: int = DEFAULT_INSTANCE,
        auth_handler: Optional[AuthHandler] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the store."""
        self._base_url = base_url.rstrip("/")
        self.namespace = f"{adapter}.{instance}"
        self._auth_handler = auth_handler
        self._session = session
        self._managed_session = session is None
        self._timeout = timeout

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._auth_handler is not None:
            return await self._auth_handler._get_session()
        if self._session is None or self._session.closed:
            _LOGGER.debug("Creating new aiohttp ClientSession for RestStore.")
            self._session = aiohttp.ClientSession()
            self._managed_session = True
        return self._session

    async def async_close(self) -> None:
        """Close the HTTP session if it is owned by the library."""
        if self._auth_handler is not None:
            await self._auth_handler.close_session()
        elif self._session and not self._session.closed and self._managed_session:
            await self._session.close()
            self._session = None

    async def _async_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        json_data: Any = None,
        allow_missing: bool = False,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body.

        Returns None for a 404 response when ``allow_missing`` is set.
        """
        url = self._base_url + endpoint
        headers = {"Accept": "application/json"}
        if self._auth_handler is not None:
            access_token = await self._auth_handler.get_access_token()
            headers["Authorization"] = f"Bearer {access_token}"

        session = await self._get_session()
        _LOGGER.debug("Making %s request to %s (params: %s)", method, url, params)

        try:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                _LOGGER.debug("Response status code: %s", response.status)

                if response.status == 404 and allow_missing:
                    return None
                if response.status >= 400:
                    error_text = await response.text()
                    _LOGGER.error(
                        "API Error Response (%s): %s", response.status, error_text
                    )
                    try:
                        error_content = await response.json()
                        error_message = (
                            error_content.get("error") or error_text
                            if isinstance(error_content, dict)
                            else error_text
                        )
                    except (aiohttp.ContentTypeError, ValueError):
                        error_message = error_text
                    raise ApiError(response.status, str(error_message))

                if response.status == 204:
                    return {}
                return await response.json(content_type=None)

        except PyHmDmException:
            raise
        except TimeoutError as timeout_err:
            _LOGGER.error("Request timed out: %s %s", method, url)
            raise ApiError(408, "Request timed out") from timeout_err
        except aiohttp.ClientError as req_err:
            _LOGGER.error("Request error during API request: %s", req_err)
            raise ApiError(0, f"Request error: {req_err}") from req_err

    async def _async_get_objects(
        self, pattern: str, object_type: str
    ) -> dict[str, dict[str, Any]]:
        data = await self._async_request(
            "GET", OBJECTS_ENDPOINT, params={"filter": pattern, "type": object_type}
        )
        return data or {}

    async def async_get_devices(self) -> list[DeviceObject]:
        """Return all devices of the adapter instance."""
        objects = await self._async_get_objects(f"{self.namespace}.*", "device")
        devices = []
        for object_id, data in objects.items():
            data.setdefault("_id", object_id)
            devices.append(DeviceObject.from_dict(data))
        _LOGGER.debug("Found %d devices in %s", len(devices), self.namespace)
        return devices

    async def async_get_channels_of(self, device_id: str) -> list[ChannelObject]:
        """Return the direct child channels of a device."""
        objects = await self._async_get_objects(f"{device_id}.*", "channel")
        channels = []
        for object_id, data in objects.items():
            if _parent_id(object_id) != device_id:
                continue
            data.setdefault("_id", object_id)
            channels.append(ChannelObject.from_dict(data))
        return channels

    async def async_get_states_of(self, channel_id: str) -> list[StateObject]:
        """Return the direct child states of a channel."""
        objects = await self._async_get_objects(f"{channel_id}.*", "state")
        states = []
        for object_id, data in objects.items():
            if _parent_id(object_id) != channel_id:
                continue
            data.setdefault("_id", object_id)
            states.append(StateObject.from_dict(data))
        return states

    async def async_get_object(self, object_id: str) -> dict[str, Any] | None:
        """Return a raw object, or None if it does not exist."""
        return await self._async_request(
            "GET", OBJECT_ENDPOINT + quote(object_id, safe=""), allow_missing=True
        )

    async def async_get_state(self, state_id: str) -> State | None:
        """Return the current value of a state, or None if it has none."""
        data = await self._async_request(
            "GET", STATE_ENDPOINT + quote(state_id, safe=""), allow_missing=True
        )
        if not data:
            return None
        return State.from_dict(data)

    async def async_set_state(self, state_id: str, value: Any, ack: bool = False) -> None:
        """Write a new value to a state."""
        _LOGGER.debug("Writing %s to %s (ack=%s)", value, state_id, ack)
        await self._async_request(
            "PATCH",
            STATE_ENDPOINT + quote(state_id, safe=""),
            json_data={"val": value, "ack": ack},
        )

    async def async_extend_object(
        self, object_id: str, obj: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Merge ``obj`` into an existing object and write it back."""
        current = await self.async_get_object(object_id)
        if current is None:
            _LOGGER.warning("Can not extend missing object %s", object_id)
            return None
        merged = merge_objects(current, obj)
        await self._async_request(
            "PUT", OBJECT_ENDPOINT + quote(object_id, safe=""), json_data=merged
        )
        return merged
