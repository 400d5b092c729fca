"""Pattern detection: grouping the states of a channel into logical controls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from .models import ChannelObject, PatternGroup, PatternState, StateObject

ObjectLookup = dict[str, Union[StateObject, ChannelObject]]


class PatternDetector(ABC):
    """Groups the state ids of one channel into pattern groups."""

    @abstractmethod
    def detect(self, channel_id: str, objects: ObjectLookup) -> list[PatternGroup]:
        """Return the pattern groups found in the channel."""


class ChannelDetector(PatternDetector):
    """Treats every channel as one group holding all of its states."""

    def detect(self, channel_id: str, objects: ObjectLookup) -> list[PatternGroup]:
        """Return a single group with the channel's states in id order."""
        prefix = f"{channel_id}."
        states = [
            PatternState(id=obj.id, name=obj.id.rsplit(".", 1)[-1])
            for obj in objects.values()
            if isinstance(obj, StateObject) and obj.id.startswith(prefix)
        ]
        if not states:
            return []
        states.sort(key=lambda state: state.id)
        return [PatternGroup(type="channel", states=states)]
