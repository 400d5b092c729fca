"""Data models for pyhmdm."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Union

from .const import DEFAULT_LANGUAGE

# Plain string or a language -> text mapping
Translated = Union[str, dict[str, str]]


def get_text(text: Translated | None, language: str) -> str:
    """Return the text for the given language, falling back to English."""
    if isinstance(text, str):
        return text
    if text:
        return text.get(language) or text.get(DEFAULT_LANGUAGE) or ""
    return ""


def parse_states(states: Any) -> list[Any] | dict[str, Any] | None:
    """Normalize the enumeration of allowed values of a state.

    Lists and mappings are returned as declared. The legacy string form
    ``"0:OFF;1:ON"`` is parsed into a mapping. Anything else is ignored.
    """
    if isinstance(states, (list, dict)):
        return states or None
    if isinstance(states, str) and states:
        parsed = {}
        for entry in states.split(";"):
            key, sep, label = entry.partition(":")
            if sep:
                parsed[key.strip()] = label.strip()
        return parsed or None
    return None


@dataclass
class DeviceObject:
    """Represents a device object of the attribute store."""

    id: str
    name: Translated = ""
    icon: str | None = None
    type: str | None = None
    firmware: str | None = None
    available_firmware: str | None = None
    raw_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceObject:
        """Create a device from a raw store object."""
        common = data.get("common") or {}
        native = data.get("native") or {}
        return cls(
            id=data["_id"],
            name=common.get("name") or "",
            icon=common.get("icon"),
            type=native.get("TYPE"),
            firmware=native.get("FIRMWARE"),
            available_firmware=native.get("AVAILABLE_FIRMWARE"),
            raw_data=data,
        )


@dataclass
class ChannelObject:
    """Represents a channel object of the attribute store."""

    id: str
    name: Translated = ""
    type: str | None = None
    raw_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChannelObject:
        """Create a channel from a raw store object."""
        common = data.get("common") or {}
        native = data.get("native") or {}
        return cls(
            id=data["_id"],
            name=common.get("name") or "",
            type=native.get("TYPE"),
            raw_data=data,
        )


@dataclass
class StateObject:
    """Represents the metadata of one state (data point) of a channel."""

    id: str
    name: Translated = ""
    type: str | None = None
    read: bool | None = None
    write: bool | None = None
    role: str | None = None
    unit: str | None = None
    min: float | None = None
    max: float | None = None
    states: list[Any] | dict[str, Any] | None = None
    desc: Translated | None = None
    control: str | None = None
    raw_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StateObject:
        """Create a state from a raw store object."""
        common = data.get("common") or {}
        native = data.get("native") or {}
        return cls(
            id=data["_id"],
            name=common.get("name") or "",
            type=common.get("type"),
            read=common.get("read"),
            write=common.get("write"),
            role=common.get("role"),
            unit=common.get("unit"),
            min=common.get("min"),
            max=common.get("max"),
            states=parse_states(common.get("states")),
            desc=common.get("desc"),
            control=native.get("CONTROL"),
            raw_data=data,
        )


@dataclass
class State:
    """Represents the current value of a state."""

    val: Any
    ack: bool = False
    ts: int | None = None
    lc: int | None = None
    from_: str | None = None
    q: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> State:
        """Create a state value from a raw store response."""
        return cls(
            val=data.get("val"),
            ack=bool(data.get("ack", False)),
            ts=data.get("ts"),
            lc=data.get("lc"),
            from_=data.get("from"),
            q=data.get("q"),
        )


@dataclass
class ControlError:
    """Structured failure returned by a control binding."""

    message: str
    code: int

    def as_dict(self) -> dict[str, Any]:
        """Return the error in its wire shape."""
        return {"error": {"message": self.message, "code": self.code}}


BindingResult = Union[State, ControlError]
GetStateHandler = Callable[[str, str], Awaitable[BindingResult]]
SetStateHandler = Callable[[str, str, Any], Awaitable[BindingResult]]


class ControlKind(StrEnum):
    """Kind of a UI control."""

    SELECT = "select"
    NUMBER = "number"
    SLIDER = "slider"
    SWITCH = "switch"
    BUTTON = "button"
    TEXT = "text"
    INFO = "info"


@dataclass(frozen=True)
class ChannelInfo:
    """Display metadata of the channel owning a control."""

    name: Translated
    description: str | None = None
    # None when the channel index is not numeric
    order: int | None = None


@dataclass(frozen=True)
class ControlOption:
    """One entry of a select control."""

    label: Translated
    value: Any


@dataclass
class Control:
    """A classified, UI ready descriptor derived from one state."""

    id: str
    state_id: str
    kind: ControlKind
    label: str
    channel: ChannelInfo | None = None
    description: Translated | None = None
    unit: str | None = None
    min: float | None = None
    max: float | None = None
    options: list[ControlOption] | None = None
    get_state: GetStateHandler | None = None
    set_state: SetStateHandler | None = None


@dataclass
class Status:
    """Health summary of a device."""

    connection: str
    rssi: float | None = None
    battery: bool | None = None
    warning: str | None = None


@dataclass
class Action:
    """A device level action offered to the host UI."""

    id: str
    icon: str
    description: Translated
    handler: Callable[..., Awaitable[dict[str, Any]]]


@dataclass
class DeviceInfo:
    """Descriptor of one device as returned by the device lister."""

    id: str
    name: Translated
    status: Status
    actions: list[Action]
    icon: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    has_details: bool = False
    controls: list[Control] | None = None


@dataclass
class DeviceDetails:
    """Detail panel of a device."""

    id: str
    schema: dict[str, Any]


@dataclass
class PatternState:
    """One state reference inside a pattern group."""

    id: str | None
    name: str = ""


@dataclass
class PatternGroup:
    """Related states of one channel forming one logical control."""

    type: str
    states: list[PatternState] = field(default_factory=list)
