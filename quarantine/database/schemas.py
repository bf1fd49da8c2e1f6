"""
Data models

- Patient is the persisted entity; its field names are the export format
- Status, table rows and dashboard figures are derived and never persisted
- Pydantic provides validation when the stored collection is loaded
"""
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TemperatureRecord(BaseModel):
    """
    One temperature reading (at most one per date per patient)
    """
    date: str   = Field(..., description="Date of the reading (format: YYYY-MM-DD)")
    temp: float = Field(..., description="Temperature in degrees Celsius")


class Visit(BaseModel):
    """
    One doctor visit (at most one per date per patient)
    """
    date: str  = Field(..., description="Date of the visit (format: YYYY-MM-DD)")
    notes: str = Field("", description="Free-text notes from the doctor")


class Patient(BaseModel):
    """
    Quarantined patient (persisted to disk)
    """
    model_config = ConfigDict(extra="ignore")
    id: str                         = Field(...,  description="Patient identifier, 'P' + zero-padded sequence (e.g. P001)")
    bed: int                        = Field(...,  description="Bed number, unique among active patients")
    name: str                       = Field(...,  description="Patient name")
    age: int                        = Field(...,  description="Age in years")
    records: List[TemperatureRecord] = Field(default_factory=list, description="Daily temperature records")
    visits: List[Visit]             = Field(default_factory=list, description="Daily doctor visits")
    discharged: bool                = Field(False, description="Whether the patient has been discharged (terminal)")
    deceased: bool                  = Field(False, description="Whether the patient has died (terminal)")

    @property
    def is_active(self) -> bool:
        return not self.discharged and not self.deceased


class PatientAdmission(BaseModel):
    """
    Admission form input

    Values are validated by the admission operation, not here, so the caller
    gets the specific reason (empty name, invalid age, invalid bed, bed taken).
    """
    name: Union[str, int, float, None] = Field("",   description="Patient name")
    age: Union[int, float, str, None]  = Field(None, description="Age in years (raw form value)")
    bed: Union[int, float, str, None]  = Field(None, description="Bed number to assign (raw form value)")


class TemperatureInput(BaseModel):
    """
    Nurse temperature entry (accepts the raw form value)
    """
    temp: Union[float, str, None] = Field(None, description="Temperature in degrees Celsius")


class VisitInput(BaseModel):
    """
    Doctor visit entry
    """
    notes: Optional[str] = Field("", description="Visit notes (may be empty)")


class StatusCode(str, Enum):
    DECEASED = "deceased"
    DISCHARGED = "discharged"
    NEEDS_TEMP = "needs_temp"
    NEEDS_VISIT = "needs_visit"
    ELIGIBLE_DISCHARGE = "eligible_discharge"
    STABLE_TODAY = "stable_today"


class PatientStatus(BaseModel):
    """
    Derived clinical status for one patient on a given day
    """
    patient_id: str      = Field(..., description="Patient this status belongs to")
    code: StatusCode     = Field(..., description="Status category")
    label: str           = Field(..., description="Display label")
    severity: str        = Field(..., description="Display colour: red, yellow, blue or green")
    fever_free_days: int = Field(..., description="Current fever-free streak in recorded days")


class PatientSummary(BaseModel):
    """
    One row of the patient table
    """
    id: str
    bed: int
    name: str
    age: int
    status: PatientStatus
    fever_free_days: int


class PatientDetail(BaseModel):
    """
    Patient detail view

    Recent records and visits are the last 14 entries, newest first.
    """
    patient: Patient
    status: PatientStatus
    fever_free_days: int
    recent_records: List[TemperatureRecord]
    recent_visits: List[Visit]


class DailyTodo(BaseModel):
    """
    Active patients still missing today's entries
    """
    need_temp: int  = Field(..., description="Active patients without a temperature record today")
    need_visit: int = Field(..., description="Active patients without a doctor visit today")


class ComplianceKPIs(BaseModel):
    """
    Ward-level compliance metrics
    """
    total: int                = Field(..., description="All patients, including discharged and deceased")
    temp_compliance_pct: int  = Field(..., description="Percent of patients with a temperature record today")
    visit_compliance_pct: int = Field(..., description="Percent of patients with a doctor visit today")
    discharged_count: int     = Field(..., description="Number of discharged patients")
    mortality_pct: int        = Field(..., description="Percent of patients marked deceased")
