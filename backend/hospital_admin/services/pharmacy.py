"""
Pharmacy operations: dispensing and prescription pricing.

Dispensing does not touch inventory. Whether stock should be decremented
automatically is an open product question, so quantities are reconciled
manually through the medicines collection for now.
"""
import datetime
from typing import Iterable, Optional

from ..models.pharmacy import Medicine, PrescribedMedicine, Prescription, PrescriptionStatus


def dispense_prescription(
    prescription: Prescription, on: Optional[datetime.date] = None
) -> Prescription:
    return prescription.model_copy(
        update={
            "status": PrescriptionStatus.DISPENSED,
            "dispensed_date": on or datetime.date.today(),
        }
    )


def prescription_total(
    prescribed: Iterable[PrescribedMedicine], medicines: Iterable[Medicine]
) -> float:
    """Price of the prescribed lines at current unit prices; unknown medicines count as 0."""
    prices = {m.id: m.unit_price for m in medicines}
    return round(
        sum(line.quantity * prices.get(line.medicine_id, 0.0) for line in prescribed),
        2,
    )
