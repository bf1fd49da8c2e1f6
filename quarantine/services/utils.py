"""
Shared helpers for the patient services
"""
from datetime import datetime, timezone
from typing import Iterable, List, Sequence, TypeVar, Union

from quarantine.database.schemas import TemperatureRecord, Visit

Entry = TypeVar("Entry", TemperatureRecord, Visit)


def today_iso() -> str:
    """
    Current UTC date as YYYY-MM-DD
    """
    return datetime.now(timezone.utc).date().isoformat()


def has_entry_for_date(entries: Iterable[Union[TemperatureRecord, Visit]], day: str) -> bool:
    """
    Whether a record or visit collection already holds an entry for ``day``
    """
    return any(entry.date == day for entry in entries)


def recent_entries(entries: Sequence[Entry], limit: int = 14) -> List[Entry]:
    """
    Last ``limit`` entries, newest first
    """
    return list(reversed(entries[-limit:])) if limit > 0 else []
