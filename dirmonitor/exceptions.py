"""Exceptions raised by DirMonitor."""


class DirMonitorError(Exception):
    """Base class for DirMonitor errors."""

    pass


class InvalidDirectory(DirMonitorError):
    """Raised when the monitored root does not exist or is not a directory."""

    pass


class UnknownEventKind(DirMonitorError, ValueError):
    """Raised when registering a listener for an event kind that does not exist."""

    pass


class ListenerError(DirMonitorError):
    """
    A listener that raised while the registry isolates listener failures.

    Attributes:
        listener: The callable that failed
        event: The event it was handling
        error: The exception it raised
    """

    def __init__(self, listener, event, error):
        self.listener = listener
        self.event = event
        self.error = error
        name = getattr(listener, "__name__", repr(listener))
        super().__init__(
            f"Listener {name} failed on {event.kind.value} {event.file_path}: {error}"
        )
