"""
Monitor module for DirMonitor.

This module provides the scan loop that owns the snapshot lifecycle:
- A suppressed baseline pass that records pre-existing files
- Repeated passes emitting created/updated events while walking
- Delete detection once each walk completes
- Snapshot rotation between passes
"""

import logging
import os
import threading
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from dirmonitor.events import Event, EventKind, EventRegistry, Listener
from dirmonitor.exceptions import InvalidDirectory
from dirmonitor.walker import Snapshot, find_deleted, walk


class MonitorState(Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    SCANNING = "scanning"
    STOPPED = "stopped"


def validate_directory(directory: str) -> str:
    """
    Return the absolute path of directory.

    Raises:
        InvalidDirectory: If the path does not exist or is not a directory.
    """
    path = os.path.abspath(os.fspath(directory))
    if not os.path.exists(path):
        raise InvalidDirectory(f"No such file or directory: {path}")
    if not os.path.isdir(path):
        raise InvalidDirectory(f"{path} is not a directory")
    return path


class Monitor:
    """
    Monitor that reports file changes under a directory.

    Every pass walks the whole tree, so a pass blocks for as long as the walk
    takes. Passes never overlap.

    Attributes:
        directory: Absolute path of the monitored root
        interval: Seconds to wait between passes in start(); 0 rescans immediately
        registry: Listener registry events are dispatched through
        state: Current MonitorState
        logger: Logger instance
    """

    def __init__(
        self,
        directory: str,
        interval: float = 1.0,
        isolate_listeners: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize a monitor instance.

        Args:
            directory: Root directory to monitor
            interval: Seconds between passes
            isolate_listeners: Log and collect listener failures instead of
                aborting the pass
            logger: Logger to use; defaults to the module logger

        Raises:
            InvalidDirectory: If directory does not exist or is not a directory.
            ValueError: If interval is negative.
        """
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.directory = validate_directory(directory)
        self.interval = interval
        self.registry = EventRegistry(isolate_listeners=isolate_listeners)
        self.state = MonitorState.IDLE
        self.logger = logger or logging.getLogger(__name__)
        self._previous: Optional[Snapshot] = None
        self._stop = threading.Event()

    def register(self, kind: Union[EventKind, str], listener: Listener):
        """Register a listener for "created", "deleted", "updated" or "all"."""
        self.registry.register(kind, listener)

    add_event_listener = register

    @property
    def snapshot(self) -> Mapping[str, Optional[str]]:
        """Read-only view of the snapshot from the last completed pass."""
        return MappingProxyType(self._previous or {})

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def initialize(self) -> bool:
        """
        Run the baseline pass without emitting events.

        Returns:
            True if the baseline was recorded, False if stopped midway.
        """
        self.state = MonitorState.INITIALIZING
        self.logger.info(f"Building baseline for {self.directory}")
        current: Snapshot = {}
        completed = walk(
            self.directory,
            {},
            current,
            self._emit_ignored,
            suppress_events=True,
            stop_event=self._stop,
        )
        if not completed:
            self.logger.info("Baseline interrupted.")
            return False
        self._previous = current
        self.state = MonitorState.SCANNING
        self.logger.info(f"Baseline recorded with {len(current)} files")
        return True

    def run_once(self) -> List[Event]:
        """
        Run one scanning pass.

        Created and updated events are dispatched as each file is visited;
        deleted events once the walk has completed. The baseline is built
        first if none exists yet.

        Returns:
            The events dispatched during this pass.
        """
        if self._previous is None and not self.initialize():
            return []

        previous = self._previous
        current: Snapshot = {}
        dispatched: List[Event] = []

        def emit(kind, path, old, new):
            self._dispatch(Event(kind, path, old, new), dispatched)

        self.logger.debug("Starting scan pass.")
        if not walk(
            self.directory, previous, current, emit, stop_event=self._stop
        ):
            self.logger.info("Scan pass interrupted; snapshot left unchanged.")
            return dispatched

        for path in find_deleted(previous, current):
            self._dispatch(Event(EventKind.DELETED, path), dispatched)

        self._previous = current
        self.logger.info(
            f"Scan pass completed: {len(current)} files, {len(dispatched)} events"
        )
        return dispatched

    def start(self):
        """
        Run the monitor until stop() is called.

        Builds the baseline, then repeats scanning passes, waiting `interval`
        seconds between them. A stopped monitor does not restart; create a
        new one instead.
        """
        self._previous = None
        self.logger.info(
            f"Monitoring {self.directory} (interval={self.interval}s)"
        )
        if self.initialize():
            while not self._stop.is_set():
                self.run_once()
                if self._stop.wait(self.interval):
                    break
        self.state = MonitorState.STOPPED
        self.logger.info("Monitor stopped.")

    def stop(self):
        """Signal the loop to stop; a walk in progress ends at the next entry."""
        self._stop.set()
        self.state = MonitorState.STOPPED
        self.logger.info("Monitor stopping.")

    def _dispatch(self, event: Event, dispatched: List[Event]):
        self.logger.debug(f"{event.kind.value} {event.file_path}")
        dispatched.append(event)
        self.registry.dispatch(event)

    @staticmethod
    def _emit_ignored(kind, path, old, new):
        pass
