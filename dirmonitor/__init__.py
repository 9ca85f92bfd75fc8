"""
DirMonitor: a polling directory monitor.

Walks a directory tree, fingerprints every regular file and reports which
files were created, updated or deleted since the previous pass through
registered listeners. No OS-level file-watch API is involved.
"""

from dirmonitor.events import ALL, Event, EventKind, EventRegistry
from dirmonitor.exceptions import (DirMonitorError, InvalidDirectory,
                                   ListenerError, UnknownEventKind)
from dirmonitor.monitor import Monitor, MonitorState

__version__ = "0.1.0"

__all__ = [
    "ALL",
    "DirMonitorError",
    "Event",
    "EventKind",
    "EventRegistry",
    "InvalidDirectory",
    "ListenerError",
    "Monitor",
    "MonitorState",
    "UnknownEventKind",
]
