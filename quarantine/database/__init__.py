"""
Database module

Contains both data models (schemas) and storage operations.
"""

# Export schemas
from quarantine.database.schemas import (
    Patient,
    TemperatureRecord,
    Visit,
    PatientAdmission,
    TemperatureInput,
    VisitInput,
    StatusCode,
    PatientStatus,
    PatientSummary,
    PatientDetail,
    DailyTodo,
    ComplianceKPIs,
)

# Export storage for convenience
from quarantine.database.storage import (
    PatientStore,
    StorageError,
    get_patient_store,
    read_json,
    write_json,
)

__all__ = [
    # Schemas
    "Patient",
    "TemperatureRecord",
    "Visit",
    "PatientAdmission",
    "TemperatureInput",
    "VisitInput",
    "StatusCode",
    "PatientStatus",
    "PatientSummary",
    "PatientDetail",
    "DailyTodo",
    "ComplianceKPIs",
    # Storage
    "PatientStore",
    "StorageError",
    "get_patient_store",
    "read_json",
    "write_json",
]
