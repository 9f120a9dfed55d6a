import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import EntityModel


class InvoiceStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class InvoiceItem(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    description: str
    quantity: int = Field(default=1, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    total: float = Field(default=0.0, ge=0)


class Invoice(EntityModel):
    invoice_number: str
    patient_id: str
    patient_name: str
    date: datetime.date = Field(default_factory=datetime.date.today)
    due_date: Optional[datetime.date] = None
    items: Tuple[InvoiceItem, ...] = ()
    subtotal: float = Field(default=0.0, ge=0)
    tax: float = Field(default=0.0, ge=0)
    total: float = Field(default=0.0, ge=0)
    status: InvoiceStatus = InvoiceStatus.PENDING
    payment_method: Optional[str] = None
    paid_date: Optional[datetime.date] = None
