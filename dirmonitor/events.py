"""
Events module for DirMonitor.

This module provides:
- The concrete event kinds (created, deleted, updated) and the `all` pseudo-kind
- The immutable event payload handed to listeners
- A registry mapping each kind to its ordered listeners, with dispatch
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from dirmonitor.exceptions import ListenerError, UnknownEventKind

logger = logging.getLogger(__name__)

ALL = "all"

# Legacy "on"-prefixed event names still accepted at registration.
_LEGACY_NAMES = {
    "oncreate": "created",
    "ondelete": "deleted",
    "onupdate": "updated",
}


class EventKind(Enum):
    CREATED = "created"
    DELETED = "deleted"
    UPDATED = "updated"

    @classmethod
    def parse(cls, value: Union["EventKind", str]) -> "EventKind":
        """
        Resolve an event kind from an EventKind or its name.

        Accepts "created", "deleted", "updated" and the legacy "oncreate",
        "ondelete", "onupdate" names. The `all` pseudo-kind is not a concrete
        kind and is rejected here.

        Raises:
            UnknownEventKind: If the value names no concrete kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            name = _LEGACY_NAMES.get(name, name)
            for kind in cls:
                if kind.value == name:
                    return kind
        raise UnknownEventKind(f"No such event: {value!r}")


@dataclass(frozen=True)
class Event:
    """Payload passed to listeners."""

    kind: EventKind
    file_path: str
    previous_fingerprint: Optional[str] = None
    current_fingerprint: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


Listener = Callable[[Event], None]


class EventRegistry:
    """
    Registry of listeners per concrete event kind.

    Listeners for a kind fire in registration order. Registering under `all`
    appends the listener to every concrete kind at registration time.

    Attributes:
        isolate_listeners: When False (default) an exception raised by a
            listener propagates out of dispatch and aborts the pass. When True
            each failure is logged and returned, and the remaining listeners
            still run.
    """

    def __init__(self, isolate_listeners: bool = False):
        self.isolate_listeners = isolate_listeners
        self._listeners: Dict[EventKind, List[Listener]] = {
            kind: [] for kind in EventKind
        }

    def register(self, kind: Union[EventKind, str], listener: Listener):
        """
        Register a listener for an event kind.

        Args:
            kind: A concrete EventKind, its name, or "all"
            listener: Callable taking a single Event

        Raises:
            UnknownEventKind: If kind is neither a concrete kind nor "all".
            TypeError: If listener is not callable.
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener).__name__}")

        if isinstance(kind, str) and kind.strip().lower() == ALL:
            for listeners in self._listeners.values():
                listeners.append(listener)
            logger.debug(f"Registered listener {listener!r} for all events")
            return

        kind = EventKind.parse(kind)
        self._listeners[kind].append(listener)
        logger.debug(f"Registered listener {listener!r} for {kind.value}")

    def listeners(self, kind: Union[EventKind, str]) -> Tuple[Listener, ...]:
        return tuple(self._listeners[EventKind.parse(kind)])

    def dispatch(self, event: Event) -> List[ListenerError]:
        """
        Invoke every listener registered for the event's kind, in order.

        Returns:
            The failures collected when isolating listeners; always empty
            otherwise, since the first failure propagates.
        """
        failures = []
        for listener in list(self._listeners[event.kind]):
            if not self.isolate_listeners:
                listener(event)
                continue
            try:
                listener(event)
            except Exception as e:
                failure = ListenerError(listener, event, e)
                logger.exception(str(failure))
                failures.append(failure)
        return failures
