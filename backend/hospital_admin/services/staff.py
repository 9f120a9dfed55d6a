"""
Staff roster helpers: employee numbering and attendance marking.
"""
import datetime
from typing import Optional, Sequence

from ..models.base import generate_uuid
from ..models.staff import Attendance, AttendanceStatus, StaffMember

SHIFT_START = "08:00"
LATE_START = "08:30"
SHIFT_END = "16:00"
SHIFT_HOURS = 8


def next_employee_id(staff: Sequence[StaffMember]) -> str:
    numbers = [int(s.employee_id[3:]) for s in staff if s.employee_id[3:].isdigit()]
    return f"EMP{max(numbers, default=0) + 1:03d}"


def mark_attendance(
    member: StaffMember,
    status: AttendanceStatus,
    on: Optional[datetime.date] = None,
) -> Attendance:
    status = AttendanceStatus(status)
    if status == AttendanceStatus.ABSENT:
        check_in, check_out, hours = "", None, None
    elif status == AttendanceStatus.HALF_DAY:
        check_in, check_out, hours = SHIFT_START, "12:00", SHIFT_HOURS / 2
    else:
        check_in = LATE_START if status == AttendanceStatus.LATE else SHIFT_START
        check_out, hours = SHIFT_END, SHIFT_HOURS
    return Attendance(
        id=generate_uuid(),
        employee_id=member.employee_id,
        employee_name=member.name,
        date=on or datetime.date.today(),
        check_in=check_in,
        check_out=check_out,
        hours_worked=hours,
        status=status,
    )
