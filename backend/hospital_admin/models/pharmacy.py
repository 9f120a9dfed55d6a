import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .base import EntityModel


class StockStatus(str, Enum):
    AVAILABLE = "Available"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
    EXPIRED = "Expired"


class PrescriptionStatus(str, Enum):
    PENDING = "Pending"
    DISPENSED = "Dispensed"
    PARTIALLY_DISPENSED = "Partially Dispensed"


def derive_stock_status(quantity: int, min_stock_level: int) -> StockStatus:
    """
    Out of Stock at zero, Low Stock up to and including the minimum level,
    Available above it. Expiry is reported separately (see is_expired).
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= min_stock_level:
        return StockStatus.LOW_STOCK
    return StockStatus.AVAILABLE


class Medicine(EntityModel):
    name: str = Field(min_length=1)
    category: str = ""
    manufacturer: str = ""
    batch_number: str = ""
    expiry_date: Optional[datetime.date] = None
    quantity: int = Field(default=0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    min_stock_level: int = Field(default=0, ge=0)
    description: str = ""

    @computed_field
    @property
    def status(self) -> StockStatus:
        # Evaluated on every read so it can never go stale after a
        # quantity change.
        return derive_stock_status(self.quantity, self.min_stock_level)

    @property
    def stock_value(self) -> float:
        return self.quantity * self.unit_price

    def is_expired(self, as_of: Optional[datetime.date] = None) -> bool:
        if self.expiry_date is None:
            return False
        return self.expiry_date < (as_of or datetime.date.today())


class PrescribedMedicine(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    medicine_id: str
    medicine_name: str
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    quantity: int = Field(default=1, ge=0)


class Prescription(EntityModel):
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    medicines: Tuple[PrescribedMedicine, ...] = ()
    status: PrescriptionStatus = PrescriptionStatus.PENDING
    prescription_date: datetime.date = Field(default_factory=datetime.date.today)
    dispensed_date: Optional[datetime.date] = None
    total_amount: float = Field(default=0.0, ge=0)
