"""
Export / import endpoints

The whole collection moves as one JSON array of patients. Import replaces
the stored collection after checking the body parses as JSON.
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from quarantine.api.utils import get_store
from quarantine.database.storage import PatientStore, StorageError

router = APIRouter()

EXPORT_FILENAME = "quarantine_data.json"


@router.get("/export")
async def export_patients(store: PatientStore = Depends(get_store)):
    """
    Download the stored collection as quarantine_data.json
    """
    return Response(
        content=store.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import")
async def import_patients(request: Request, store: PatientStore = Depends(get_store)):
    """
    Replace the stored collection with the JSON request body
    """
    body = await request.body()
    try:
        store.import_json(body.decode("utf-8"))
    except (StorageError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON")
    return {"message": "Imported"}
