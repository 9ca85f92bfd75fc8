"""
Tests for the tree walker and delete detection.
"""

import hashlib
import os
import threading

import pytest

from dirmonitor import walker
from dirmonitor.events import EventKind
from dirmonitor.walker import classify, find_deleted, walk


def md5(text):
    return hashlib.md5(text.encode()).hexdigest()


@pytest.fixture
def tree(tmp_path):
    """Fixture to create a small nested directory structure."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("a")
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").write_text("b")
    (root / "sub" / "deeper").mkdir()
    (root / "sub" / "deeper" / "c.txt").write_text("c")
    (root / "empty").mkdir()
    return root


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, kind, path, old, new):
        self.calls.append((kind, path, old, new))


def test_walk_records_every_regular_file(tree):
    current = {}
    emit = Recorder()
    assert walk(str(tree), {}, current, emit, suppress_events=True)

    assert current == {
        str(tree / "a.txt"): md5("a"),
        str(tree / "sub" / "b.txt"): md5("b"),
        str(tree / "sub" / "deeper" / "c.txt"): md5("c"),
    }
    assert emit.calls == []


def test_walk_emits_created_for_unknown_files(tree):
    current = {}
    emit = Recorder()
    walk(str(tree), {}, current, emit)

    assert sorted(emit.calls) == sorted(
        (EventKind.CREATED, path, None, fp) for path, fp in current.items()
    )


def test_walk_emits_updated_for_changed_content(tree):
    previous = {}
    walk(str(tree), {}, previous, Recorder(), suppress_events=True)

    (tree / "sub" / "b.txt").write_text("B")
    current = {}
    emit = Recorder()
    walk(str(tree), previous, current, emit)

    path = str(tree / "sub" / "b.txt")
    assert emit.calls == [(EventKind.UPDATED, path, md5("b"), md5("B"))]
    assert previous[path] == md5("b")


def test_walk_unchanged_tree_emits_nothing(tree):
    previous = {}
    walk(str(tree), {}, previous, Recorder(), suppress_events=True)

    current = {}
    emit = Recorder()
    walk(str(tree), previous, current, emit)
    assert emit.calls == []
    assert current == previous


def test_walk_skips_symlinks(tree):
    link = tree / "link.txt"
    try:
        os.symlink(str(tree / "a.txt"), str(link))
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    current = {}
    walk(str(tree), {}, current, Recorder())
    assert str(link) not in current


def test_walk_records_unreadable_file_without_event(tree, monkeypatch):
    unreadable = str(tree / "a.txt")
    real = walker.compute_fingerprint
    monkeypatch.setattr(
        walker, "compute_fingerprint",
        lambda path: None if path == unreadable else real(path),
    )

    current = {}
    emit = Recorder()
    walk(str(tree), {}, current, emit)

    assert current[unreadable] is None
    assert unreadable not in [call[1] for call in emit.calls]


def test_walk_unlistable_subdirectory_is_skipped(tree, monkeypatch):
    previous = {}
    walk(str(tree), {}, previous, Recorder(), suppress_events=True)

    bad = str(tree / "sub")
    real_scandir = os.scandir

    def scandir(path):
        if path == bad:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(walker.os, "scandir", scandir)
    (tree / "new.txt").write_text("new")

    current = {}
    emit = Recorder()
    assert walk(str(tree), previous, current, emit)

    assert emit.calls == [(EventKind.CREATED, str(tree / "new.txt"), None, md5("new"))]
    # Entries below the skipped subtree keep their previous fingerprints.
    assert current[str(tree / "sub" / "b.txt")] == md5("b")
    assert current[str(tree / "sub" / "deeper" / "c.txt")] == md5("c")
    assert find_deleted(previous, current) == []


def test_walk_unlistable_root_raises(tmp_path):
    with pytest.raises(OSError):
        walk(str(tmp_path / "missing"), {}, {}, Recorder())


def test_walk_stops_when_stop_event_set(tree):
    stop = threading.Event()
    stop.set()
    current = {}
    assert walk(str(tree), {}, current, Recorder(), stop_event=stop) is False
    assert current == {}


def test_walk_handles_deep_trees(tmp_path):
    current_dir = tmp_path
    for i in range(300):
        current_dir = current_dir / "d"
        current_dir.mkdir()
    (current_dir / "leaf.txt").write_text("leaf")

    current = {}
    walk(str(tmp_path), {}, current, Recorder(), suppress_events=True)
    assert current == {str(current_dir / "leaf.txt"): md5("leaf")}


@pytest.mark.parametrize("previous, fingerprint, expected", [
    ({}, "x", EventKind.CREATED),
    ({"/f": None}, "x", EventKind.CREATED),
    ({"/f": "x"}, "y", EventKind.UPDATED),
    ({"/f": "x"}, "x", None),
    ({}, None, None),
    ({"/f": "x"}, None, None),
])
def test_classify(previous, fingerprint, expected):
    assert classify("/f", fingerprint, previous) is expected


def test_find_deleted_is_key_difference():
    previous = {"/a": "1", "/b": None, "/c": "3"}
    current = {"/a": "9", "/d": "4"}
    assert find_deleted(previous, current) == ["/b", "/c"]
    assert find_deleted(current, current) == []
