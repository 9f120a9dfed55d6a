"""
Appointment status transitions.
"""
from ..models.appointment import Appointment, AppointmentStatus

CLOSED_STATUSES = (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)


def _transition(appointment: Appointment, status: AppointmentStatus) -> Appointment:
    if appointment.status in CLOSED_STATUSES:
        raise ValueError(
            f"Appointment {appointment.id} is already {appointment.status.value}"
        )
    return appointment.model_copy(update={"status": status})


def complete_appointment(appointment: Appointment) -> Appointment:
    return _transition(appointment, AppointmentStatus.COMPLETED)


def cancel_appointment(appointment: Appointment) -> Appointment:
    return _transition(appointment, AppointmentStatus.CANCELLED)
