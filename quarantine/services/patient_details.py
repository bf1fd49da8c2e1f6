"""
Patient views

Builds the patient table rows (search + sort by bed) and the detail view
from a loaded collection.
"""
from typing import List, Optional

from quarantine.database.schemas import Patient, PatientDetail, PatientSummary
from quarantine.services.status import compute_status, fever_free_days
from quarantine.services.utils import recent_entries

RECENT_ENTRY_LIMIT = 14


def matches_query(patient: Patient, query: Optional[str]) -> bool:
    """
    Case-insensitive match on name, bed number or id (empty query matches all)
    """
    if not query:
        return True
    query = query.lower()
    return (
        query in patient.name.lower()
        or query in str(patient.bed)
        or query in patient.id.lower()
    )


def build_patient_summaries(patients: List[Patient], today: str, query: Optional[str] = None) -> List[PatientSummary]:
    """
    Patient table rows ordered by bed number
    """
    rows = []
    for patient in sorted(patients, key=lambda p: p.bed):
        if not matches_query(patient, query):
            continue
        rows.append(
            PatientSummary(
                id=patient.id,
                bed=patient.bed,
                name=patient.name,
                age=patient.age,
                status=compute_status(patient, today),
                fever_free_days=fever_free_days(patient),
            )
        )
    return rows


def build_patient_detail(patient: Patient, today: str) -> PatientDetail:
    return PatientDetail(
        patient=patient,
        status=compute_status(patient, today),
        fever_free_days=fever_free_days(patient),
        recent_records=recent_entries(patient.records, RECENT_ENTRY_LIMIT),
        recent_visits=recent_entries(patient.visits, RECENT_ENTRY_LIMIT),
    )
