"""
Derived statistics over collection snapshots.

Everything here is a pure function of its arguments: no caching, no I/O,
recomputed on every read.
"""
import datetime
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, TypeVar

from ..models.appointment import Appointment, AppointmentStatus
from ..models.billing import Invoice, InvoiceStatus
from ..models.doctor import Doctor, DoctorStatus
from ..models.laboratory import LabOrder, LabOrderStatus, LabTest
from ..models.patient import Patient, PatientStatus
from ..models.pharmacy import Medicine, Prescription, PrescriptionStatus, StockStatus
from ..models.staff import Attendance, AttendanceStatus, StaffMember, StaffStatus
from ..models.ward import Ward

T = TypeVar("T")

# Searchable attributes per collection, as filtered on the dashboard pages.
PATIENT_SEARCH_FIELDS = ("name", "patient_id", "phone")
DOCTOR_SEARCH_FIELDS = ("name", "specialization", "phone")
MEDICINE_SEARCH_FIELDS = ("name", "category")
INVOICE_SEARCH_FIELDS = ("patient_name", "invoice_number")
LAB_TEST_SEARCH_FIELDS = ("test_name", "test_code", "category")
LAB_ORDER_SEARCH_FIELDS = ("patient_name", "order_number")
STAFF_SEARCH_FIELDS = ("name", "role", "department", "employee_id")
APPOINTMENT_SEARCH_FIELDS = ("patient_name", "doctor_name")

SEARCH_FIELDS: Dict[str, Tuple[str, ...]] = {
    "patients": PATIENT_SEARCH_FIELDS,
    "appointments": APPOINTMENT_SEARCH_FIELDS,
    "doctors": DOCTOR_SEARCH_FIELDS,
    "medicines": MEDICINE_SEARCH_FIELDS,
    "invoices": INVOICE_SEARCH_FIELDS,
    "lab_tests": LAB_TEST_SEARCH_FIELDS,
    "lab_orders": LAB_ORDER_SEARCH_FIELDS,
    "staff": STAFF_SEARCH_FIELDS,
}


# ── generic helpers ──────────────────────────────────────────────────────────

def count_by(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for item in items if predicate(item))


def sum_by(
    items: Iterable[T],
    value: Callable[[T], float],
    predicate: Optional[Callable[[T], bool]] = None,
) -> float:
    return sum(value(item) for item in items if predicate is None or predicate(item))


def average_by(items: Sequence[T], value: Callable[[T], float]) -> float:
    if not items:
        return 0.0
    return sum(value(item) for item in items) / len(items)


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up (30.5 -> 31) as the dashboard displays them."""
    return int(math.floor(value + 0.5))


def ratio_percent(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return (part / whole) * 100


def occupancy_rate(occupied_beds: int, total_beds: int) -> float:
    """Occupied share of beds in percent; 0.0 when there are no beds."""
    return ratio_percent(occupied_beds, total_beds)


def search(items: Sequence[T], term: Optional[str], search_fields: Sequence[str]) -> Tuple[T, ...]:
    """
    Case-insensitive substring match across ``search_fields``.
    A blank term returns the whole collection; missing values never match.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return tuple(items)

    def matches(item: Any) -> bool:
        for name in search_fields:
            value = getattr(item, name, None)
            if value is not None and needle in str(value).lower():
                return True
        return False

    return tuple(item for item in items if matches(item))


def search_collection(name: str, items: Sequence[T], term: Optional[str]) -> Tuple[T, ...]:
    fields = SEARCH_FIELDS.get(name)
    if not fields:
        return tuple(items)
    return search(items, term, fields)


# ── per-domain statistics ────────────────────────────────────────────────────

@dataclass(frozen=True)
class PatientStats:
    total: int
    active: int
    admitted: int
    discharged: int
    average_age: int


@dataclass(frozen=True)
class AppointmentStats:
    total: int
    scheduled: int
    confirmed: int
    completed: int
    cancelled: int
    urgent: int


@dataclass(frozen=True)
class DoctorStats:
    total: int
    active: int
    average_experience: int


@dataclass(frozen=True)
class PharmacyStats:
    total_medicines: int
    low_stock: int
    inventory_value: float
    total_prescriptions: int
    pending_prescriptions: int
    expired: int


@dataclass(frozen=True)
class BillingStats:
    invoice_count: int
    total_revenue: float
    pending_amount: float
    overdue_amount: float


@dataclass(frozen=True)
class LabStats:
    catalogue_size: int
    completed_orders: int
    pending_orders: int
    revenue: float


@dataclass(frozen=True)
class WardStats:
    total_beds: int
    occupied_beds: int
    available_beds: int
    maintenance_beds: int
    occupancy_rate: float


@dataclass(frozen=True)
class StaffStats:
    total: int
    active: int
    present_today: int
    monthly_payroll: float


def average_age(patients: Sequence[Patient]) -> int:
    """Rounded mean over patients with a recorded age; 0 when there are none."""
    ages = [p.age for p in patients if p.age is not None]
    if not ages:
        return 0
    return round_half_up(sum(ages) / len(ages))


def patient_stats(patients: Sequence[Patient]) -> PatientStats:
    return PatientStats(
        total=len(patients),
        active=count_by(patients, lambda p: p.status == PatientStatus.ACTIVE),
        admitted=count_by(patients, lambda p: p.status == PatientStatus.ADMITTED),
        discharged=count_by(patients, lambda p: p.status == PatientStatus.DISCHARGED),
        average_age=average_age(patients),
    )


def appointment_stats(appointments: Sequence[Appointment]) -> AppointmentStats:
    def with_status(status):
        return count_by(appointments, lambda a: a.status == status)

    return AppointmentStats(
        total=len(appointments),
        scheduled=with_status(AppointmentStatus.SCHEDULED),
        confirmed=with_status(AppointmentStatus.CONFIRMED),
        completed=with_status(AppointmentStatus.COMPLETED),
        cancelled=with_status(AppointmentStatus.CANCELLED),
        urgent=with_status(AppointmentStatus.URGENT),
    )


def doctor_stats(doctors: Sequence[Doctor]) -> DoctorStats:
    return DoctorStats(
        total=len(doctors),
        active=count_by(doctors, lambda d: d.status == DoctorStatus.ACTIVE),
        average_experience=round_half_up(average_by(doctors, lambda d: d.experience)),
    )


def inventory_value(medicines: Iterable[Medicine]) -> float:
    return sum_by(medicines, lambda m: m.quantity * m.unit_price)


def low_stock_medicines(medicines: Iterable[Medicine]) -> Tuple[Medicine, ...]:
    """Medicines that need reordering: Low Stock or Out of Stock."""
    return tuple(
        m for m in medicines if m.status in (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)
    )


def expired_medicines(
    medicines: Iterable[Medicine], as_of: Optional[datetime.date] = None
) -> Tuple[Medicine, ...]:
    return tuple(m for m in medicines if m.is_expired(as_of))


def pharmacy_stats(
    medicines: Sequence[Medicine],
    prescriptions: Sequence[Prescription],
    as_of: Optional[datetime.date] = None,
) -> PharmacyStats:
    return PharmacyStats(
        total_medicines=len(medicines),
        low_stock=len(low_stock_medicines(medicines)),
        inventory_value=inventory_value(medicines),
        total_prescriptions=len(prescriptions),
        pending_prescriptions=count_by(
            prescriptions, lambda p: p.status == PrescriptionStatus.PENDING
        ),
        expired=len(expired_medicines(medicines, as_of)),
    )


def invoice_total_by_status(invoices: Iterable[Invoice], status: InvoiceStatus) -> float:
    return sum_by(invoices, lambda i: i.total, lambda i: i.status == status)


def billing_stats(invoices: Sequence[Invoice]) -> BillingStats:
    return BillingStats(
        invoice_count=len(invoices),
        total_revenue=invoice_total_by_status(invoices, InvoiceStatus.PAID),
        pending_amount=invoice_total_by_status(invoices, InvoiceStatus.PENDING),
        overdue_amount=invoice_total_by_status(invoices, InvoiceStatus.OVERDUE),
    )


def lab_stats(tests: Sequence[LabTest], orders: Sequence[LabOrder]) -> LabStats:
    def is_completed(order: LabOrder) -> bool:
        return order.status == LabOrderStatus.COMPLETED

    return LabStats(
        catalogue_size=len(tests),
        completed_orders=count_by(orders, is_completed),
        pending_orders=count_by(orders, lambda o: not is_completed(o)),
        revenue=sum_by(orders, lambda o: o.total_amount, is_completed),
    )


def ward_stats(wards: Sequence[Ward]) -> WardStats:
    total = sum(w.total_beds for w in wards)
    occupied = sum(w.occupied_beds for w in wards)
    return WardStats(
        total_beds=total,
        occupied_beds=occupied,
        available_beds=sum(w.available_beds for w in wards),
        maintenance_beds=sum(w.maintenance_beds for w in wards),
        occupancy_rate=occupancy_rate(occupied, total),
    )


def staff_stats(
    staff: Sequence[StaffMember],
    attendance: Sequence[Attendance],
    today: Optional[datetime.date] = None,
) -> StaffStats:
    today = today or datetime.date.today()
    return StaffStats(
        total=len(staff),
        active=count_by(staff, lambda s: s.status == StaffStatus.ACTIVE),
        present_today=count_by(
            attendance, lambda a: a.date == today and a.status == AttendanceStatus.PRESENT
        ),
        monthly_payroll=sum_by(staff, lambda s: s.salary),
    )


def dashboard_stats(snapshot) -> Dict[str, Any]:
    """Headline numbers for the dashboard landing page."""
    wards = ward_stats(snapshot.wards)
    return {
        "total_patients": len(snapshot.patients),
        "total_appointments": len(snapshot.appointments),
        "available_beds": wards.available_beds,
        "total_beds": wards.total_beds,
        "occupancy_rate": round(wards.occupancy_rate, 1),
        "revenue": invoice_total_by_status(snapshot.invoices, InvoiceStatus.PAID),
        "low_stock_medicines": len(low_stock_medicines(snapshot.medicines)),
    }
