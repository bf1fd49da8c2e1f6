"""
Patient status and daily recording endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from quarantine.api.utils import apply_mutation, get_store, get_today
from quarantine.database.schemas import Patient, PatientStatus, TemperatureInput, VisitInput
from quarantine.database.storage import PatientStore
from quarantine.services.mutations import discharge, mark_deceased, record_temperature, record_visit
from quarantine.services.repository import find_by_id
from quarantine.services.status import compute_status

router = APIRouter()


@router.get("/patients/{patient_id}/status", response_model=PatientStatus)
async def get_patient_status(
    patient_id: str,
    store: PatientStore = Depends(get_store),
    today: str = Depends(get_today),
):
    """
    Get patient status

    Always computed from current records; status is never stored.
    """
    patient = find_by_id(store.load(), patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail=f"Patient {patient_id} not found")
    return compute_status(patient, today)


@router.post("/patients/{patient_id}/temperature", response_model=Patient)
async def post_temperature(
    patient_id: str,
    reading: TemperatureInput,
    store: PatientStore = Depends(get_store),
    today: str = Depends(get_today),
):
    """
    Nurse: record today's temperature (one per day)
    """
    return apply_mutation(store, record_temperature, patient_id, reading.temp, today)


@router.post("/patients/{patient_id}/visits", response_model=Patient)
async def post_visit(
    patient_id: str,
    visit: VisitInput,
    store: PatientStore = Depends(get_store),
    today: str = Depends(get_today),
):
    """
    Doctor: record today's visit (one per day)
    """
    return apply_mutation(store, record_visit, patient_id, visit.notes, today)


@router.post("/patients/{patient_id}/discharge", response_model=Patient)
async def post_discharge(patient_id: str, store: PatientStore = Depends(get_store)):
    """
    Admin: discharge a patient with at least 3 fever-free days
    """
    return apply_mutation(store, discharge, patient_id)


@router.post("/patients/{patient_id}/deceased", response_model=Patient)
async def post_deceased(patient_id: str, store: PatientStore = Depends(get_store)):
    """
    Admin: mark a patient as deceased
    """
    return apply_mutation(store, mark_deceased, patient_id)
