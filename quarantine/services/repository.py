"""
Patient repository

In-memory operations over a loaded patient collection. Functions take the
caller's list and only mutate it on success.
"""
import re
from typing import Any, List, Optional, Union

from quarantine.database.schemas import Patient
from quarantine.services.errors import OperationError, ValidationReason, validation_error

_ID_PREFIX = "P"
_LEADING_DIGITS = re.compile(r"\d+")
_WHOLE_NUMBER = re.compile(r"\s*\d+\s*")


def find_by_id(patients: List[Patient], patient_id: str) -> Optional[Patient]:
    return next((patient for patient in patients if patient.id == patient_id), None)


def is_bed_available(patients: List[Patient], bed: int) -> bool:
    """
    A bed is free unless an active (not discharged, not deceased) patient holds it
    """
    return not any(patient.bed == bed and patient.is_active for patient in patients)


def _id_sequence(patient_id: str) -> int:
    match = _LEADING_DIGITS.match((patient_id or "").replace(_ID_PREFIX, "", 1))
    return int(match.group()) if match else 0


def next_id(patients: List[Patient]) -> str:
    """
    Next patient id: one past the highest existing sequence number

    Derived only from existing ids, so ids of discharged or deceased patients
    are never handed out again. An empty collection starts at P001.
    """
    highest = max((_id_sequence(patient.id) for patient in patients), default=0)
    return f"{_ID_PREFIX}{highest + 1:03d}"


def _positive_int(value: Any) -> Optional[int]:
    """
    Whole positive number from form input (int, integral float or digit text), else None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = int(value) if value.is_integer() else None
    elif isinstance(value, str):
        value = int(value) if _WHOLE_NUMBER.fullmatch(value) else None
    if not isinstance(value, int) or value <= 0:
        return None
    return value


def admit(
    patients: List[Patient],
    name: Any,
    age: Any,
    bed: Any,
) -> Union[Patient, OperationError]:
    """
    Admit a new patient

    Args:
        patients: Loaded collection (appended to on success)
        name: Patient name (surrounding whitespace is stripped; non-text counts as empty)
        age: Age in years, must be a positive whole number
        bed: Bed number, must be a positive whole number and not held by an active patient

    Returns:
        The created Patient, or an OperationError naming the failed check
    """
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        return validation_error(ValidationReason.EMPTY_NAME, "Enter patient name")
    age = _positive_int(age)
    if age is None:
        return validation_error(ValidationReason.INVALID_AGE, "Enter valid age")
    bed = _positive_int(bed)
    if bed is None:
        return validation_error(ValidationReason.INVALID_BED, "Enter valid bed no.")
    if not is_bed_available(patients, bed):
        return validation_error(ValidationReason.BED_TAKEN, "Bed already assigned")

    patient = Patient(id=next_id(patients), bed=bed, name=name, age=age)
    patients.append(patient)
    return patient
