"""
In-memory cache of file contents for the storage layer

Reduces file I/O for repeated reads. A cached value is only served while the
file on disk is unchanged (same inode, size and modification time) and the TTL
has not run out, so a write by another store or process is always seen.
"""
import os
import time
from typing import Any, Dict, Optional, Tuple
from threading import Lock

# (inode, size, mtime in ns); None when the file does not exist
FileSignature = Optional[Tuple[int, int, int]]


def file_signature(filepath: str) -> FileSignature:
    try:
        st = os.stat(filepath)
    except FileNotFoundError:
        return None
    return (st.st_ino, st.st_size, st.st_mtime_ns)


class FileCache:
    """
    Thread-safe cache of parsed file contents, keyed by path
    """
    def __init__(self, ttl_seconds: int = 60):
        self.ttl = ttl_seconds
        self._cache: Dict[str, Tuple[Any, FileSignature, float]] = {}
        self._lock = Lock()

    def get(self, filepath: str) -> Optional[Any]:
        """Get cached contents if the file is unchanged and the entry not expired"""
        signature = file_signature(filepath)
        with self._lock:
            if filepath in self._cache:
                value, cached_signature, expiry = self._cache[filepath]
                if cached_signature == signature and time.monotonic() < expiry:
                    return value
                # Stale
                del self._cache[filepath]
            return None

    def set(self, filepath: str, value: Any, signature: FileSignature):
        """
        Cache contents against the signature of the file they came from

        Readers pass the signature taken before reading, so a file replaced
        mid-read is re-read next time.
        """
        with self._lock:
            self._cache[filepath] = (value, signature, time.monotonic() + self.ttl)

    def invalidate(self, filepath: str):
        with self._lock:
            self._cache.pop(filepath, None)
