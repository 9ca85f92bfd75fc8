"""
Tree walker for DirMonitor.

Walks a directory tree depth-first with an explicit stack, fingerprints each
regular file, classifies it against the previous snapshot and records it in
the snapshot being built for the current pass.
"""

import logging
import os
import threading
from typing import Callable, Dict, List, Optional

from dirmonitor.events import EventKind
from dirmonitor.fingerprint import compute_fingerprint

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Optional[str]]
Emit = Callable[[EventKind, str, Optional[str], Optional[str]], None]


def classify(
    path: str, fingerprint: Optional[str], previous: Snapshot
) -> Optional[EventKind]:
    """
    Classify a file against the previous snapshot.

    A file is created when its path is unknown, or when it was recorded
    without a fingerprint and is now readable. It is updated when both
    fingerprints exist and differ. A file that cannot be fingerprinted
    produces no event.
    """
    if fingerprint is None:
        return None
    if path not in previous:
        return EventKind.CREATED
    old = previous[path]
    if old is None:
        return EventKind.CREATED
    if old != fingerprint:
        return EventKind.UPDATED
    return None


def _carry_over(directory: str, previous: Snapshot, current: Snapshot):
    """Keep the previous entries below an unlistable directory."""
    prefix = directory.rstrip(os.sep) + os.sep
    for path, fingerprint in previous.items():
        if path.startswith(prefix):
            current.setdefault(path, fingerprint)


def walk(
    root: str,
    previous: Snapshot,
    current: Snapshot,
    emit: Emit,
    suppress_events: bool = False,
    stop_event: Optional[threading.Event] = None,
) -> bool:
    """
    Walk every regular file and directory under root.

    Args:
        root: Directory to walk
        previous: Snapshot of the last completed pass; never modified
        current: Snapshot being built; every regular file is written to it
        emit: Called as emit(kind, path, previous_fingerprint, current_fingerprint)
            for each created or updated file, at the moment it is visited
        suppress_events: Record files without emitting (baseline pass)
        stop_event: Checked between entries; the walk stops when it is set

    Returns:
        True if the tree was fully walked, False if interrupted by stop_event.

    Raises:
        OSError: If root itself cannot be listed. Subdirectories that cannot
            be listed are skipped and their previous entries carried over.
    """
    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if directory == root:
                raise
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            _carry_over(directory, previous, current)
            continue

        subdirs = []
        for entry in entries:
            if stop_event is not None and stop_event.is_set():
                return False
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    # Symlinks, FIFOs, sockets and devices.
                    continue
            except OSError as e:
                logger.warning(f"Error accessing {entry.path}: {e}")
                continue

            fingerprint = compute_fingerprint(entry.path)
            logger.debug(f"File: {entry.path} -> md5={fingerprint}")
            if not suppress_events:
                kind = classify(entry.path, fingerprint, previous)
                if kind is not None:
                    emit(kind, entry.path, previous.get(entry.path), fingerprint)
            current[entry.path] = fingerprint

        stack.extend(reversed(subdirs))

    return True


def find_deleted(previous: Snapshot, current: Snapshot) -> List[str]:
    """Return the paths known in the previous snapshot but absent from the current one."""
    return sorted(set(previous) - set(current))
