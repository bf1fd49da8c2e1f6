"""
FastAPI app

- Quarantine ward tracker: admissions, daily temperatures and doctor visits,
  discharge / death, compliance dashboard
- CORS configured for browser front-end development
- Single router for all endpoints under /api/v1
- Basic health check
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quarantine.api import router
from quarantine.api.middleware import TimingMiddleware
from quarantine.core.config import CORS_ORIGINS, LOG_LEVEL
from quarantine.database.storage import StorageError

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Quarantine Ward Tracker")

# Logs request duration for all requests
app.add_middleware(TimingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
async def root():
    """
    Basic health check
    """
    return {"status": "ok"}
