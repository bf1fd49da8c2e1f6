"""
Patient status computation service

Derives the fever-free streak, the daily clinical status and discharge
eligibility from a patient's records. Nothing here is persisted: status is
recomputed from current data and the given day every time it is needed.
"""
from typing import Dict

from quarantine.database.schemas import Patient, PatientStatus, StatusCode
from quarantine.services.utils import has_entry_for_date

# Below this a day counts as fever-free
FEVER_THRESHOLD_C = 37.5

DISCHARGE_MIN_FEVER_FREE_DAYS = 3

# code -> (label, severity colour)
STATUS_DISPLAY = {
    StatusCode.DECEASED: ("Deceased", "red"),
    StatusCode.DISCHARGED: ("Discharged", "green"),
    StatusCode.NEEDS_TEMP: ("Needs Temp", "yellow"),
    StatusCode.NEEDS_VISIT: ("Needs Doctor Visit", "blue"),
    StatusCode.ELIGIBLE_DISCHARGE: ("Eligible Discharge", "green"),
    StatusCode.STABLE_TODAY: ("Stable Today", "green"),
}


def fever_free_days(patient: Patient) -> int:
    """
    Count the most recent consecutive recorded days below the fever threshold

    Days are recorded days, not calendar days: a day with no reading is simply
    absent and does not break the streak. If a date somehow holds more than one
    reading, the lowest one counts for that date.

    Args:
        patient: Patient to evaluate

    Returns:
        Streak length (0 when there are no records)
    """
    if not patient.records:
        return 0

    lowest_by_date: Dict[str, float] = {}
    for record in patient.records:
        current = lowest_by_date.get(record.date)
        lowest_by_date[record.date] = record.temp if current is None else min(current, record.temp)

    # ISO dates sort chronologically as strings
    streak = 0
    for day in sorted(lowest_by_date, reverse=True):
        if lowest_by_date[day] < FEVER_THRESHOLD_C:
            streak += 1
        else:
            break
    return streak


def is_eligible_for_discharge(patient: Patient) -> bool:
    return fever_free_days(patient) >= DISCHARGE_MIN_FEVER_FREE_DAYS


def determine_status_code(patient: Patient, today: str) -> StatusCode:
    """
    First matching rule wins: deceased, discharged, missing temperature,
    missing visit, eligible for discharge, otherwise stable.
    """
    if patient.deceased:
        return StatusCode.DECEASED
    if patient.discharged:
        return StatusCode.DISCHARGED

    if not has_entry_for_date(patient.records, today):
        return StatusCode.NEEDS_TEMP
    if not has_entry_for_date(patient.visits, today):
        return StatusCode.NEEDS_VISIT

    if is_eligible_for_discharge(patient):
        return StatusCode.ELIGIBLE_DISCHARGE
    return StatusCode.STABLE_TODAY


def compute_status(patient: Patient, today: str) -> PatientStatus:
    """
    Compute the patient's status for a given day

    Args:
        patient: Patient to evaluate
        today: Day to evaluate against (format: YYYY-MM-DD)

    Returns:
        PatientStatus with display label, severity and current streak
    """
    code = determine_status_code(patient, today)
    label, severity = STATUS_DISPLAY[code]
    return PatientStatus(
        patient_id=patient.id,
        code=code,
        label=label,
        severity=severity,
        fever_free_days=fever_free_days(patient),
    )
