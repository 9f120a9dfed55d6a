import datetime
from enum import Enum
from typing import Optional

from .base import EntityModel


class AppointmentType(str, Enum):
    CONSULTATION = "Consultation"
    FOLLOW_UP = "Follow-up"
    EMERGENCY = "Emergency"
    SURGERY = "Surgery"


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    URGENT = "Urgent"


class Appointment(EntityModel):
    # patient_name / doctor_name are copies taken when the appointment is
    # booked; see services/references.py for drift detection.
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    date: datetime.date
    time: str = ""
    type: AppointmentType = AppointmentType.CONSULTATION
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None
