"""
Ward-level aggregates

Daily to-do counts and compliance KPIs over the whole collection.
"""
import math
from typing import List

from quarantine.database.schemas import ComplianceKPIs, DailyTodo, Patient
from quarantine.services.utils import has_entry_for_date


def _percent(part: int, total: int) -> int:
    """
    Whole-number percentage, halves rounded up; 0 when total is 0
    """
    if not total:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


def daily_todo(patients: List[Patient], today: str) -> DailyTodo:
    """
    Count active patients still missing today's temperature and today's visit

    The two counts are independent: a patient missing both is counted in both.
    """
    active = [patient for patient in patients if patient.is_active]
    return DailyTodo(
        need_temp=sum(1 for patient in active if not has_entry_for_date(patient.records, today)),
        need_visit=sum(1 for patient in active if not has_entry_for_date(patient.visits, today)),
    )


def kpis(patients: List[Patient], today: str) -> ComplianceKPIs:
    """
    Compliance metrics for the day

    Totals and compliance include discharged and deceased patients.
    """
    total = len(patients)
    temps_today = sum(1 for patient in patients if has_entry_for_date(patient.records, today))
    visits_today = sum(1 for patient in patients if has_entry_for_date(patient.visits, today))
    deceased = sum(1 for patient in patients if patient.deceased)

    return ComplianceKPIs(
        total=total,
        temp_compliance_pct=_percent(temps_today, total),
        visit_compliance_pct=_percent(visits_today, total),
        discharged_count=sum(1 for patient in patients if patient.discharged),
        mortality_pct=_percent(deceased, total),
    )
