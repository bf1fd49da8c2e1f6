# API routes
from fastapi import APIRouter
from quarantine.api.patients import router as patients_router
from quarantine.api.status import router as status_router
from quarantine.api.dashboard import router as dashboard_router
from quarantine.api.export import router as export_router

# Combine all routers
router = APIRouter()
router.include_router(patients_router)
router.include_router(status_router)
router.include_router(dashboard_router)
router.include_router(export_router)

__all__ = ["router"]
