"""Dashboard API: headline numbers and per-domain statistics."""
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from ..services import aggregation
from ..store.store import AppStore
from .deps import get_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

DOMAIN_STATS = {
    "patients": lambda s: aggregation.patient_stats(s.patients),
    "appointments": lambda s: aggregation.appointment_stats(s.appointments),
    "doctors": lambda s: aggregation.doctor_stats(s.doctors),
    "pharmacy": lambda s: aggregation.pharmacy_stats(s.medicines, s.prescriptions),
    "billing": lambda s: aggregation.billing_stats(s.invoices),
    "laboratory": lambda s: aggregation.lab_stats(s.lab_tests, s.lab_orders),
    "wards": lambda s: aggregation.ward_stats(s.wards),
    "staff": lambda s: aggregation.staff_stats(s.staff, s.attendance),
}


@router.get("/stats")
def get_dashboard_stats(store: AppStore = Depends(get_store)):
    return aggregation.dashboard_stats(store.snapshot())


@router.get("/stats/{domain}")
def get_domain_stats(domain: str, store: AppStore = Depends(get_store)):
    compute = DOMAIN_STATS.get(domain)
    if compute is None:
        raise HTTPException(
            status_code=404, detail=f"Unknown domain. Choose from: {sorted(DOMAIN_STATS)}"
        )
    return asdict(compute(store.snapshot()))
