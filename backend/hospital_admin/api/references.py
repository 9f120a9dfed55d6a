"""References API: records whose copied patient/doctor details went stale."""
from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..services.references import dangling_references, name_drift
from ..store.store import AppStore
from .deps import get_store

router = APIRouter(prefix="/references", tags=["references"])


@router.get("/dangling")
def get_dangling_references(store: AppStore = Depends(get_store)):
    """Appointments, prescriptions, invoices and lab orders pointing at deleted records."""
    return [asdict(issue) for issue in dangling_references(store.snapshot())]


@router.get("/drift")
def get_name_drift(store: AppStore = Depends(get_store)):
    return [asdict(issue) for issue in name_drift(store.snapshot())]
