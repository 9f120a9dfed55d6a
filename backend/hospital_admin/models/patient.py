import re
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import EntityModel, generate_patient_code

PATIENT_CODE_PATTERN = re.compile(r"^HMS-\d{4}-\d{6}$")


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class PatientStatus(str, Enum):
    ACTIVE = "Active"
    ADMITTED = "Admitted"
    DISCHARGED = "Discharged"


class Patient(EntityModel):
    patient_id: str = Field(default_factory=generate_patient_code)
    name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Gender = Gender.OTHER
    phone: str = ""
    email: str = ""
    address: str = ""
    emergency_contact: str = ""
    blood_group: str = ""
    admission_date: Optional[date] = None
    status: PatientStatus = PatientStatus.ACTIVE

    @field_validator("patient_id")
    @classmethod
    def check_patient_code(cls, value: str) -> str:
        if not PATIENT_CODE_PATTERN.match(value):
            raise ValueError("patient code must look like HMS-<year>-<6 digits>")
        return value
