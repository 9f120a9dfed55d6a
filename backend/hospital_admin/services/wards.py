"""
Ward bed management: admissions and discharges.
"""
import datetime
import logging
from typing import Optional

from ..core.exceptions import BedStateError, EntityNotFoundError
from ..models.patient import PatientStatus
from ..models.ward import Bed, BedStatus, Ward
from ..store.store import AppStore

logger = logging.getLogger(__name__)


def _replace_bed(ward: Ward, bed: Bed) -> Ward:
    beds = tuple(bed if b.id == bed.id else b for b in ward.beds)
    return ward.model_copy(update={"beds": beds})


def _require_bed(ward: Ward, bed_id: str) -> Bed:
    bed = ward.find_bed(bed_id)
    if bed is None:
        raise EntityNotFoundError(f"Bed {bed_id} is not in ward {ward.name}")
    return bed


def admit_to_bed(
    ward: Ward,
    bed_id: str,
    patient_id: str,
    patient_name: str,
    on: Optional[datetime.date] = None,
) -> Ward:
    bed = _require_bed(ward, bed_id)
    if bed.status != BedStatus.AVAILABLE:
        raise BedStateError(f"Bed {bed.bed_number} is {bed.status.value}, cannot admit")
    occupied = bed.model_copy(
        update={
            "status": BedStatus.OCCUPIED,
            "patient_id": patient_id,
            "patient_name": patient_name,
            "admission_date": on or datetime.date.today(),
        }
    )
    return _replace_bed(ward, occupied)


def discharge_from_bed(ward: Ward, bed_id: str) -> Ward:
    bed = _require_bed(ward, bed_id)
    if bed.status != BedStatus.OCCUPIED:
        raise BedStateError(f"Bed {bed.bed_number} is {bed.status.value}, nobody to discharge")
    freed = bed.model_copy(
        update={
            "status": BedStatus.AVAILABLE,
            "patient_id": None,
            "patient_name": None,
            "admission_date": None,
        }
    )
    return _replace_bed(ward, freed)


def _get_ward(store: AppStore, ward_id: str) -> Ward:
    ward = store.wards.get(ward_id)
    if ward is None:
        raise EntityNotFoundError(f"Ward {ward_id} not found")
    return ward


def _set_patient_status(store: AppStore, patient_id: str, status: PatientStatus, **changes) -> None:
    patient = store.patients.get(patient_id)
    if patient is None:
        # Walk-in admissions may not be registered yet.
        logger.info("Patient %s not registered, bed updated without patient record", patient_id)
        return
    store.patients.update(patient.model_copy(update={"status": status, **changes}))


def admit_patient(
    store: AppStore,
    ward_id: str,
    bed_id: str,
    patient_id: str,
    patient_name: str,
    on: Optional[datetime.date] = None,
) -> Ward:
    """Occupy the bed and mark the registered patient (if any) as Admitted."""
    on = on or datetime.date.today()
    ward = admit_to_bed(_get_ward(store, ward_id), bed_id, patient_id, patient_name, on)
    store.wards.update(ward)
    _set_patient_status(store, patient_id, PatientStatus.ADMITTED, admission_date=on)
    logger.info("Admitted %s to bed %s in ward %s", patient_id, bed_id, ward.name)
    return ward


def discharge_patient(store: AppStore, ward_id: str, bed_id: str) -> Ward:
    """Free the bed and mark its patient (if registered) as Discharged."""
    current = _get_ward(store, ward_id)
    patient_id = _require_bed(current, bed_id).patient_id
    ward = discharge_from_bed(current, bed_id)
    store.wards.update(ward)
    if patient_id:
        _set_patient_status(store, patient_id, PatientStatus.DISCHARGED)
    logger.info("Discharged bed %s in ward %s", bed_id, ward.name)
    return ward
