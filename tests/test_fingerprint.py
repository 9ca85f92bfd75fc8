import hashlib

from dirmonitor.fingerprint import compute_fingerprint


def test_fingerprint_is_md5_of_content(tmp_path):
    f = tmp_path / "a.txt"
    f.write_text("hello")
    assert compute_fingerprint(str(f)) == hashlib.md5(b"hello").hexdigest()


def test_fingerprint_is_content_sensitive(tmp_path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("hello")
    b.write_text("hello")
    assert compute_fingerprint(str(a)) == compute_fingerprint(str(b))

    b.write_text("world")
    assert compute_fingerprint(str(a)) != compute_fingerprint(str(b))


def test_fingerprint_large_file_spans_chunks(tmp_path):
    data = b"x" * 200000
    f = tmp_path / "big.bin"
    f.write_bytes(data)
    assert compute_fingerprint(str(f)) == hashlib.md5(data).hexdigest()


def test_fingerprint_missing_file_returns_none(tmp_path):
    assert compute_fingerprint(str(tmp_path / "gone.txt")) is None


def test_fingerprint_directory_returns_none(tmp_path):
    # Opening a directory raises an OSError subclass.
    assert compute_fingerprint(str(tmp_path)) is None
