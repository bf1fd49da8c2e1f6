"""
Patient mutation operations

Daily recording (temperature, doctor visit) and the terminal transitions
(discharge, death). Each operation validates completely before touching the
patient, and returns an OperationError instead of raising, so a rejected
operation leaves the collection exactly as it was.

Record and visit collections are append-only with at most one entry per date;
this module is the only place that guards that rule.
"""
import math
from typing import Any, List, Optional, Union

from quarantine.database.schemas import Patient, TemperatureRecord, Visit
from quarantine.services.errors import ErrorKind, OperationError, patient_not_found
from quarantine.services.repository import find_by_id
from quarantine.services.status import DISCHARGE_MIN_FEVER_FREE_DAYS, is_eligible_for_discharge
from quarantine.services.utils import has_entry_for_date


def _parse_temperature(value: Any) -> Optional[float]:
    """
    Parse a temperature reading, None if it is not a usable value

    Zero counts as unusable: a failed form parse commonly ends up as 0 or NaN,
    and no real reading is 0 degrees.
    """
    if isinstance(value, bool):
        return None
    try:
        temp = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(temp) or temp <= 0:
        return None
    return temp


def record_temperature(
    patients: List[Patient],
    patient_id: str,
    temp: Any,
    today: str,
) -> Union[Patient, OperationError]:
    """
    Record today's temperature for a patient

    Args:
        patients: Loaded collection
        patient_id: Patient to update
        temp: Reading in degrees Celsius (numeric or numeric text)
        today: Date to record against (format: YYYY-MM-DD)

    Returns:
        The updated Patient or an OperationError
    """
    patient = find_by_id(patients, patient_id)
    if patient is None:
        return patient_not_found(patient_id)

    reading = _parse_temperature(temp)
    if reading is None:
        return OperationError(kind=ErrorKind.INVALID_VALUE, message="Enter a valid temperature")

    if has_entry_for_date(patient.records, today):
        return OperationError(kind=ErrorKind.DUPLICATE_FOR_DATE, message="Temperature already recorded today")

    patient.records.append(TemperatureRecord(date=today, temp=reading))
    return patient


def record_visit(
    patients: List[Patient],
    patient_id: str,
    notes: Optional[str],
    today: str,
) -> Union[Patient, OperationError]:
    """
    Record today's doctor visit for a patient (notes may be empty)
    """
    patient = find_by_id(patients, patient_id)
    if patient is None:
        return patient_not_found(patient_id)

    if has_entry_for_date(patient.visits, today):
        return OperationError(kind=ErrorKind.DUPLICATE_FOR_DATE, message="Already visited today")

    patient.visits.append(Visit(date=today, notes=notes or ""))
    return patient


def discharge(patients: List[Patient], patient_id: str) -> Union[Patient, OperationError]:
    """
    Discharge a patient with enough fever-free days

    Discharging an already discharged patient succeeds without change.
    A deceased patient cannot be discharged.
    """
    patient = find_by_id(patients, patient_id)
    if patient is None:
        return patient_not_found(patient_id)

    if patient.deceased:
        return OperationError(kind=ErrorKind.NOT_ELIGIBLE, message="Patient is marked deceased")
    if not is_eligible_for_discharge(patient):
        return OperationError(
            kind=ErrorKind.NOT_ELIGIBLE,
            message=f"Needs {DISCHARGE_MIN_FEVER_FREE_DAYS} fever-free days",
        )

    patient.discharged = True
    return patient


def mark_deceased(patients: List[Patient], patient_id: str) -> Union[Patient, OperationError]:
    """
    Mark a patient as deceased

    No eligibility check; confirmation is the caller's job.
    """
    patient = find_by_id(patients, patient_id)
    if patient is None:
        return patient_not_found(patient_id)

    patient.deceased = True
    return patient
