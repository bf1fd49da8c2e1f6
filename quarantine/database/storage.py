"""
Simple JSON file storage with in-memory caching

- The whole patient collection lives in one JSON file (array of patients)
- Every operation loads the full collection and writes the full collection back
- Writes go to a temporary file first and are swapped in with os.replace,
  so a concurrent reader never sees a partial file
- In-memory cache reduces file I/O for repeated reads; a cached read is only
  reused while the file is unchanged, so writes from other stores are seen
- Stores on the same file share one writer lock within a process
- Easy to migrate to SQL/NoSQL later by replacing this class
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from quarantine.core.config import CACHE_TTL_SECONDS, PATIENTS_FILE
from quarantine.database.cache import FileCache, FileSignature, file_signature
from quarantine.database.schemas import Patient

logger = logging.getLogger(__name__)

_patient_list = TypeAdapter(List[Patient])


class StorageError(RuntimeError):
    """Stored data could not be read or is not a valid patient collection"""


def read_json(filepath: str) -> Any:
    """
    Read JSON file, return empty list if not found
    """
    path = Path(filepath)
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        return []
    except json.JSONDecodeError as e:
        raise StorageError(f"Stored data at {path} is not valid JSON: {e}") from e


def write_json(filepath: str, data: Any) -> FileSignature:
    """
    Write data to JSON file atomically

    Returns the signature of the written file.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(data, f, indent=2)
            f.flush()
            st = os.fstat(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return (st.st_ino, st.st_size, st.st_mtime_ns)


# One writer lock per data file, shared by every store on that file
_file_locks: Dict[str, Any] = {}
_file_locks_guard = Lock()


def _lock_for(filepath: str):
    key = os.path.realpath(filepath)
    with _file_locks_guard:
        return _file_locks.setdefault(key, RLock())


class PatientStore:
    """
    Record store for the patient collection

    Callers that load, mutate and save must hold ``lock`` for the whole cycle.
    The lock is shared by all stores on the same file in this process; writers
    in other processes need an external lock.
    """

    def __init__(self, filepath: str, cache_ttl: int = CACHE_TTL_SECONDS):
        self.filepath = str(filepath)
        self.lock = _lock_for(self.filepath)
        self._cache = FileCache(ttl_seconds=cache_ttl)

    def _read_raw(self) -> Any:
        cached = self._cache.get(self.filepath)
        if cached is not None:
            return cached
        signature = file_signature(self.filepath)
        raw = read_json(self.filepath)
        self._cache.set(self.filepath, raw, signature)
        return raw

    def _write_raw(self, raw: Any):
        signature = write_json(self.filepath, raw)
        self._cache.set(self.filepath, raw, signature)

    def load(self) -> List[Patient]:
        """
        Load the full collection (empty list if nothing has been stored yet)

        Always returns fresh Patient objects, never the cached data itself.
        """
        raw = self._read_raw()
        try:
            return _patient_list.validate_python(raw)
        except ValidationError as e:
            raise StorageError(f"Stored data at {self.filepath} is not a valid patient collection: {e}") from e

    def save(self, patients: List[Patient]):
        """
        Persist the full collection
        """
        self._write_raw(_patient_list.dump_python(patients, mode="json"))

    def export_json(self) -> str:
        """
        Stored collection as JSON array text
        """
        return json.dumps(self._read_raw(), indent=2)

    def import_json(self, raw_text: str):
        """
        Replace the stored collection wholesale

        Only checks that the text parses as JSON; schema problems surface on
        the next load().
        """
        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON: {e}") from e
        with self.lock:
            self._write_raw(data)
        logger.info(f"Imported collection into {self.filepath}")

    def clear(self):
        """
        Delete all stored data
        """
        with self.lock:
            path = Path(self.filepath)
            if path.exists():
                path.unlink()
            self._cache.invalidate(self.filepath)
        logger.info(f"Cleared patient store at {self.filepath}")


# Global store instance backed by the configured data file
_patient_store: Optional[PatientStore] = None


def get_patient_store() -> PatientStore:
    global _patient_store
    if _patient_store is None:
        _patient_store = PatientStore(PATIENTS_FILE)
    return _patient_store
