import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import EntityModel


class StaffStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class Shift(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"
    NIGHT = "Night"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half Day"


class StaffMember(EntityModel):
    employee_id: str = Field(pattern=r"^EMP\d{3,}$")
    name: str = Field(min_length=1)
    role: str = ""
    department: str = ""
    phone: str = ""
    email: str = ""
    join_date: datetime.date = Field(default_factory=datetime.date.today)
    salary: float = Field(default=0.0, ge=0)
    status: StaffStatus = StaffStatus.ACTIVE
    shift: Shift = Shift.MORNING


class Attendance(EntityModel):
    employee_id: str
    employee_name: str
    date: datetime.date = Field(default_factory=datetime.date.today)
    check_in: str = ""
    check_out: Optional[str] = None
    hours_worked: Optional[float] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
