"""Classification of pattern groups into UI controls.

Every state of a pattern group becomes at most one :class:`Control`. The kind
of the control is decided from the loosely typed state metadata (type,
read/write flags, role, unit, bounds and enumerations) in a fixed priority
order:

1. Writable states, button roles and ``PRESS_*`` keys become ``select``
   (enumerated values), ``number``/``slider`` (numbers), ``button``/``switch``
   (booleans) or ``text`` (anything else).
2. Remaining readable states become read-only ``info`` controls.
3. Everything else is dropped.

Bindings never raise. Store failures are reported as :class:`ControlError`.
"""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any

from .const import (
    ERROR_CODE_NO_STATE,
    ERROR_MESSAGE_NO_STATE,
    PRESS_PREFIX,
    ROLE_BUTTON,
)
from .detector import ObjectLookup
from .exceptions import PyHmDmException
from .models import (
    BindingResult,
    ChannelInfo,
    ChannelObject,
    Control,
    ControlError,
    ControlKind,
    ControlOption,
    GetStateHandler,
    PatternGroup,
    PatternState,
    SetStateHandler,
    State,
    StateObject,
)
from .store import AttributeStore

_LOGGER = logging.getLogger(__name__)


def _no_state() -> ControlError:
    return ControlError(message=ERROR_MESSAGE_NO_STATE, code=ERROR_CODE_NO_STATE)


async def _async_read(store: AttributeStore, state_id: str) -> State | None:
    """Read a state, treating store failures as a missing value."""
    try:
        return await store.async_get_state(state_id)
    except PyHmDmException as err:
        _LOGGER.debug("Reading %s failed: %s", state_id, err)
        return None


def _get_state_handler(store: AttributeStore) -> GetStateHandler:
    async def get_state(device_id: str, control_id: str) -> BindingResult:
        state = await _async_read(store, control_id)
        if state is None:
            return _no_state()
        return state

    return get_state


def _set_state_handler(store: AttributeStore, press: bool = False) -> SetStateHandler:
    """Return a write binding; a ``press`` binding always writes ``True``."""

    async def set_state(device_id: str, control_id: str, value: Any) -> BindingResult:
        _LOGGER.debug("Setting %s of %s to %s", control_id, device_id, value)
        if press:
            value = True
        try:
            await store.async_set_state(control_id, value, ack=False)
        except PyHmDmException as err:
            _LOGGER.warning("Can not set %s: %s", control_id, err)
            return _no_state()
        state = await _async_read(store, control_id)
        if state is None:
            return _no_state()
        return state

    return set_state


def _state_key(value: Any) -> str:
    """Render a value the way it appears as a key of an enumeration mapping."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def translate_value(states: list[Any] | dict[Any, Any] | None, value: Any) -> Any:
    """Translate a raw value through an enumeration, if it has an entry for it."""
    if value is None or not states:
        return value
    if isinstance(states, list):
        # list enumerations are indexed by the raw value
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(states):
            return states[value]
        return value
    try:
        if value in states:
            return states[value]
    except TypeError:
        return value
    return states.get(_state_key(value), value)


def _info_get_state_handler(
    store: AttributeStore, states: list[Any] | dict[str, Any] | None
) -> GetStateHandler:
    async def get_state(device_id: str, control_id: str) -> BindingResult:
        state = await _async_read(store, control_id)
        if state is None:
            return _no_state()
        val = translate_value(states, state.val)
        if val is True:
            val = "true"
        elif val is False:
            val = "false"
        return replace(state, val=val)

    return get_state


def state_label(state: PatternState, obj: StateObject) -> str:
    """Derive the display label of a state from its id."""
    name = state.id.rsplit(".", 1)[-1] or obj.control or state.name or ""
    return name.replace("_", " ")


def channel_info(channel_id: str, channel: ChannelObject | None) -> ChannelInfo:
    """Build the display metadata of a channel."""
    index = channel_id.rsplit(".", 1)[-1]
    try:
        order = int(index, 10)
    except ValueError:
        order = None
    if channel is None:
        return ChannelInfo(name=index, order=order)
    return ChannelInfo(
        name=channel.name or channel.type or index,
        description=channel.type,
        order=order,
    )


def _options(states: list[Any] | dict[str, Any]) -> list[ControlOption]:
    if isinstance(states, list):
        return [ControlOption(label=str(value), value=value) for value in states]
    return [
        ControlOption(label=label if label is not None else str(value), value=value)
        for value, label in states.items()
    ]


def _is_button_like(obj: StateObject, label: str) -> bool:
    return bool(obj.role and ROLE_BUTTON in obj.role) or label.startswith(PRESS_PREFIX)


def classify_state(
    state: PatternState,
    obj: StateObject,
    channel: ChannelInfo,
    store: AttributeStore,
) -> Control | None:
    """Turn one state into a control, or None if it has no UI counterpart."""
    label = state_label(state, obj)
    base = {
        "id": state.id,
        "state_id": state.id,
        "label": label,
        "channel": channel,
        "description": obj.desc,
        "get_state": _get_state_handler(store),
    }

    if obj.write is not False or _is_button_like(obj, label):
        if obj.states:
            return Control(
                kind=ControlKind.SELECT,
                options=_options(obj.states),
                set_state=_set_state_handler(store),
                **base,
            )

        if obj.type == "number":
            kind = ControlKind.NUMBER
            minimum, maximum = obj.min, obj.max
            if obj.unit == "%":
                kind = ControlKind.SLIDER
                minimum, maximum = 0, 100
            elif minimum is None and maximum is None:
                kind = ControlKind.NUMBER
            elif minimum is None:
                kind = ControlKind.SLIDER
                minimum = 0
            return Control(
                kind=kind,
                unit=obj.unit,
                min=minimum,
                max=maximum,
                set_state=_set_state_handler(store),
                **base,
            )

        if obj.type == "boolean":
            if obj.read is False or _is_button_like(obj, label):
                return Control(
                    kind=ControlKind.BUTTON,
                    set_state=_set_state_handler(store, press=True),
                    **base,
                )
            return Control(
                kind=ControlKind.SWITCH,
                set_state=_set_state_handler(store),
                **base,
            )

        return Control(
            kind=ControlKind.TEXT,
            unit=obj.unit,
            set_state=_set_state_handler(store),
            **base,
        )

    if obj.read is not False:
        base["get_state"] = _info_get_state_handler(store, obj.states)
        return Control(kind=ControlKind.INFO, unit=obj.unit, **base)

    return None


def classify_group(
    group: PatternGroup,
    objects: ObjectLookup,
    store: AttributeStore,
    used_ids: set[str] | None = None,
) -> list[Control]:
    """Classify every state of a pattern group, keeping the group's order.

    States whose id is already in ``used_ids`` are skipped, and the ids of
    new controls are added to it, so a state never yields two controls.
    """
    if used_ids is None:
        used_ids = set()
    controls: list[Control] = []
    for state in group.states:
        if not state.id:
            continue
        if state.id in used_ids:
            _LOGGER.debug("State %s already has a control, skipping", state.id)
            continue
        obj = objects.get(state.id)
        if not isinstance(obj, StateObject):
            _LOGGER.debug("No state object for %s, skipping", state.id)
            continue
        channel_id = state.id.rsplit(".", 1)[0]
        channel = objects.get(channel_id)
        info = channel_info(
            channel_id, channel if isinstance(channel, ChannelObject) else None
        )
        control = classify_state(state, obj, info, store)
        if control is not None:
            used_ids.add(state.id)
            controls.append(control)
    return controls
