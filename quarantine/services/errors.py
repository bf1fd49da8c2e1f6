"""
Operation errors

Repository and mutation operations return an OperationError instead of
raising, so the caller can render a specific message. A failed operation
never changes the collection.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    PATIENT_NOT_FOUND = "patient_not_found"
    VALIDATION_ERROR = "validation_error"
    DUPLICATE_FOR_DATE = "duplicate_for_date"
    INVALID_VALUE = "invalid_value"
    NOT_ELIGIBLE = "not_eligible"


class ValidationReason(str, Enum):
    EMPTY_NAME = "empty_name"
    INVALID_AGE = "invalid_age"
    INVALID_BED = "invalid_bed"
    BED_TAKEN = "bed_taken"


class OperationError(BaseModel):
    kind: ErrorKind                     = Field(..., description="Error category")
    message: str                        = Field(..., description="Human readable message")
    reason: Optional[ValidationReason]  = Field(None, description="Admission validation subcase")


def patient_not_found(patient_id: str) -> OperationError:
    return OperationError(kind=ErrorKind.PATIENT_NOT_FOUND, message=f"Patient {patient_id} not found")


def validation_error(reason: ValidationReason, message: str) -> OperationError:
    return OperationError(kind=ErrorKind.VALIDATION_ERROR, message=message, reason=reason)
