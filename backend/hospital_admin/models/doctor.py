from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from .base import EntityModel


class DoctorStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    UNAVAILABLE = "Unavailable"


class Doctor(EntityModel):
    name: str = Field(min_length=1)
    specialization: str = ""
    qualification: Optional[str] = None
    phone: str = ""
    email: str = ""
    experience: int = Field(default=0, ge=0)
    department: Optional[str] = None
    consultation_fee: float = Field(default=0.0, ge=0)
    availability: Tuple[str, ...] = ()
    status: DoctorStatus = DoctorStatus.ACTIVE
