"""Aggregation of the diagnostic states of a device into a status summary."""

from __future__ import annotations

import logging
import re

from .const import (
    CONNECTION_CONNECTED,
    CONNECTION_DISCONNECTED,
    STATE_LOWBAT,
    STATE_RSSI_DEVICE,
    STATE_SABOTAGE,
    STATE_UNREACH,
    WARNING_SABOTAGE,
)
from .exceptions import PyHmDmException
from .models import State, Status
from .store import AttributeStore

_LOGGER = logging.getLogger(__name__)

_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


async def _async_get_diagnostic(
    store: AttributeStore, device_id: str, name: str
) -> State | None:
    state_id = f"{device_id}.0.{name}"
    try:
        return await store.async_get_state(state_id)
    except PyHmDmException as err:
        _LOGGER.debug("Can not read %s, treating it as absent: %s", state_id, err)
        return None


def parse_rssi(value: object) -> float | None:
    """Parse a signal strength value; empty values count as 0.

    Only the leading number is read, so ``"-65 dBm"`` gives -65.
    """
    match = _NUMBER_PREFIX.match(str(value or "0"))
    if match is None:
        _LOGGER.debug("Ignoring non numeric signal strength %r", value)
        return None
    return float(match.group())


async def async_get_status(store: AttributeStore, device_id: str) -> Status:
    """Read the diagnostic states of a device and reduce them to a Status.

    A missing diagnostic state leaves the matching field unset. An unknown
    reachability counts as connected.
    """
    unreach = await _async_get_diagnostic(store, device_id, STATE_UNREACH)
    rssi = await _async_get_diagnostic(store, device_id, STATE_RSSI_DEVICE)
    lowbat = await _async_get_diagnostic(store, device_id, STATE_LOWBAT)
    sabotage = await _async_get_diagnostic(store, device_id, STATE_SABOTAGE)

    return Status(
        connection=(
            CONNECTION_DISCONNECTED if unreach and unreach.val else CONNECTION_CONNECTED
        ),
        rssi=parse_rssi(rssi.val) if rssi else None,
        # low battery means the battery is not ok
        battery=False if lowbat and lowbat.val else None,
        warning=WARNING_SABOTAGE if sabotage and sabotage.val else None,
    )
