"""Wards API: bed board, admissions and discharges."""
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..models.ward import Ward
from ..services.aggregation import WardStats, ward_stats
from ..services.wards import admit_patient, discharge_patient
from ..store.store import AppStore
from .deps import get_store
from .schemas import AdmitRequest

router = APIRouter(prefix="/wards", tags=["wards"])


@router.get("/", response_model=List[Ward])
def list_wards(store: AppStore = Depends(get_store)):
    return [ward.to_json() for ward in store.wards.items]


@router.get("/stats", response_model=WardStats)
def get_ward_stats(store: AppStore = Depends(get_store)):
    return asdict(ward_stats(store.wards.items))


@router.get("/{ward_id}", response_model=Ward)
def get_ward(ward_id: str, store: AppStore = Depends(get_store)):
    ward = store.wards.get(ward_id)
    if not ward:
        raise HTTPException(status_code=404, detail="Ward not found")
    return ward.to_json()


@router.post("/{ward_id}/beds/{bed_id}/admit", response_model=Ward)
def admit(ward_id: str, bed_id: str, body: AdmitRequest, store: AppStore = Depends(get_store)):
    """Occupy an available bed; the patient record (if registered) becomes Admitted."""
    ward = admit_patient(store, ward_id, bed_id, body.patient_id, body.patient_name)
    return ward.to_json()


@router.post("/{ward_id}/beds/{bed_id}/discharge", response_model=Ward)
def discharge(ward_id: str, bed_id: str, store: AppStore = Depends(get_store)):
    ward = discharge_patient(store, ward_id, bed_id)
    return ward.to_json()
