"""
Patient management endpoints

- Admission, patient table, detail view, reset
- Every write goes load -> operate -> save under the store lock
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from quarantine.api.utils import apply_mutation, get_store, get_today
from quarantine.database.schemas import Patient, PatientAdmission, PatientDetail, PatientSummary
from quarantine.database.storage import PatientStore
from quarantine.services.patient_details import build_patient_detail, build_patient_summaries
from quarantine.services.repository import admit, find_by_id

router = APIRouter()


@router.post("/patients", response_model=Patient)
async def admit_patient(admission: PatientAdmission, store: PatientStore = Depends(get_store)):
    """
    Admit a patient (add patient form)

    Assigns the next P### id and an empty record history.
    Returns 422 with the failed check when name, age or bed is invalid or the bed is taken.
    """
    return apply_mutation(store, admit, admission.name, admission.age, admission.bed)


@router.get("/patients", response_model=List[PatientSummary])
async def list_patients(
    q: Optional[str] = None,
    store: PatientStore = Depends(get_store),
    today: str = Depends(get_today),
):
    """
    Patient table, sorted by bed, optionally filtered by name, bed or id
    """
    return build_patient_summaries(store.load(), today, q)


@router.get("/patients/{patient_id}", response_model=PatientDetail)
async def get_patient(
    patient_id: str,
    store: PatientStore = Depends(get_store),
    today: str = Depends(get_today),
):
    """
    Patient detail: recent temperatures and visits, streak and status
    """
    patient = find_by_id(store.load(), patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail="Not found")
    return build_patient_detail(patient, today)


@router.delete("/patients")
async def reset_patients(store: PatientStore = Depends(get_store)):
    """
    Clear all stored data (confirmation is the client's job)
    """
    store.clear()
    return {"message": "All patient data cleared"}
