"""Request and response bodies for the action endpoints."""
import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.staff import AttendanceStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdmitRequest(CamelModel):
    patient_id: str
    patient_name: str


class PaymentRequest(CamelModel):
    payment_method: str


class LabResultRequest(CamelModel):
    test_id: str
    result: str


class AttendanceRequest(CamelModel):
    status: AttendanceStatus = AttendanceStatus.PRESENT


class OverdueInvoice(CamelModel):
    id: str
    invoice_number: str
    patient_id: str
    patient_name: str
    total: float
    due_date: Optional[datetime.date] = None
    days_overdue: int
