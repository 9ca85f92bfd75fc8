"""Content fingerprints for regular files."""

import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536


def compute_fingerprint(path: str) -> Optional[str]:
    """
    Compute the MD5 hex digest of a file's content.

    Returns None when the file cannot be read (permission denied, vanished
    mid-read, I/O error); the caller records the file without a fingerprint.
    """
    try:
        md5 = hashlib.md5()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                md5.update(chunk)
        return md5.hexdigest()
    except OSError as e:
        logger.warning(f"Error computing fingerprint for {path}: {e}")
        return None
