"""
Dashboard endpoints: compliance KPIs and daily to-do counts
"""
from fastapi import APIRouter, Depends

from quarantine.api.utils import get_store, get_today
from quarantine.database.schemas import ComplianceKPIs, DailyTodo
from quarantine.database.storage import PatientStore
from quarantine.services.aggregation import daily_todo, kpis

router = APIRouter(prefix="/dashboard")


@router.get("/kpis", response_model=ComplianceKPIs)
async def get_kpis(store: PatientStore = Depends(get_store), today: str = Depends(get_today)):
    return kpis(store.load(), today)


@router.get("/todo", response_model=DailyTodo)
async def get_todo(store: PatientStore = Depends(get_store), today: str = Depends(get_today)):
    """
    Active patients still needing a temperature / a doctor visit today
    """
    return daily_todo(store.load(), today)
