"""Python library exposing Homematic devices as UI controls."""

from .auth import AuthHandler
from .classifier import classify_group
from .detector import ChannelDetector, PatternDetector
from .manager import ActionContext, DeviceManager
from .models import (
    ChannelInfo,
    Control,
    ControlError,
    ControlKind,
    ControlOption,
    DeviceDetails,
    DeviceInfo,
    PatternGroup,
    PatternState,
    State,
    Status,
)
from .ordering import sort_controls
from .rest import RestStore
from .store import AttributeStore

from .exceptions import PyHmDmException, AuthError, ApiError

__version__ = "0.1.0"

__all__ = [
    "ActionContext",
    "ApiError",
    "AttributeStore",
    "AuthError",
    "AuthHandler",
    "ChannelDetector",
    "ChannelInfo",
    "Control",
    "ControlError",
    "ControlKind",
    "ControlOption",
    "DeviceDetails",
    "DeviceInfo",
    "DeviceManager",
    "PatternDetector",
    "PatternGroup",
    "PatternState",
    "PyHmDmException",
    "RestStore",
    "State",
    "Status",
    "classify_group",
    "sort_controls",
    "__version__",
]
