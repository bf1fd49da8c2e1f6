"""
Utility functions for API endpoints
"""
import logging
from typing import Any, Callable, Union

from fastapi import HTTPException

from quarantine.database.schemas import Patient
from quarantine.database.storage import PatientStore, get_patient_store
from quarantine.services.errors import ErrorKind, OperationError
from quarantine.services.utils import today_iso

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.PATIENT_NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 422,
    ErrorKind.INVALID_VALUE: 422,
    ErrorKind.DUPLICATE_FOR_DATE: 409,
    ErrorKind.NOT_ELIGIBLE: 409,
}


def get_store() -> PatientStore:
    """
    Patient store dependency (overridden in tests)
    """
    return get_patient_store()


def get_today() -> str:
    """
    Clinical "today" dependency (overridden in tests)
    """
    return today_iso()


def raise_for_error(error: OperationError):
    """
    Convert an OperationError into an HTTPException
    """
    raise HTTPException(
        status_code=ERROR_STATUS_CODES[error.kind],
        detail={"kind": error.kind.value, "reason": error.reason.value if error.reason else None, "message": error.message},
    )


def apply_mutation(store: PatientStore, operation: Callable[..., Union[Patient, OperationError]], *args: Any) -> Patient:
    """
    Load, run the operation and save, holding the store lock throughout

    Nothing is written when the operation is rejected.
    """
    with store.lock:
        patients = store.load()
        result = operation(patients, *args)
        if isinstance(result, OperationError):
            logger.warning(f"{operation.__name__} rejected: {result.kind.value} ({result.message})")
            raise_for_error(result)
        store.save(patients)
        logger.info(f"{operation.__name__} applied to patient {result.id}")
    return result
