"""
Report generation - tabular reports with summary and trend blocks.

A report is produced from a store snapshot and a template id. Rows keep the
iteration order of the source collection and every row of a report has the
same column names. Rendering to CSV/Excel/PDF happens outside this module.
"""
import datetime
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

from ..core.config import settings
from ..models.appointment import AppointmentStatus
from ..models.laboratory import OrderedTestStatus
from ..models.patient import PatientStatus
from ..models.pharmacy import StockStatus
from ..models.staff import AttendanceStatus
from ..store.store import StoreSnapshot
from .aggregation import (
    average_age,
    count_by,
    inventory_value,
    occupancy_rate,
    lab_stats,
    ward_stats,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportTemplate:
    id: str
    name: str
    description: str
    category: str  # "Financial", "Clinical", "Operational", "Administrative"
    fields: List[str]
    filters: List[str]


@dataclass
class Trend:
    label: str
    value: float
    change_percent: float = 0.0


@dataclass
class ReportSummary:
    total_records: int
    total_value: Optional[float] = None
    average_value: Optional[float] = None
    trends: Optional[List[Trend]] = None

    def trend(self, label: str) -> Optional[Trend]:
        return next((t for t in self.trends or [] if t.label == label), None)


@dataclass
class ReportResult:
    id: str
    title: str
    rows: List[Dict[str, Any]] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=lambda: ReportSummary(total_records=0))

    def to_dict(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = {"totalRecords": self.summary.total_records}
        if self.summary.total_value is not None:
            summary["totalValue"] = self.summary.total_value
        if self.summary.average_value is not None:
            summary["averageValue"] = self.summary.average_value
        if self.summary.trends is not None:
            summary["trends"] = [
                {"label": t.label, "value": t.value, "changePercent": t.change_percent}
                for t in self.summary.trends
            ]
        return {"id": self.id, "title": self.title, "rows": self.rows, "summary": summary}


REPORT_TEMPLATES: List[ReportTemplate] = [
    ReportTemplate(
        id="patient-summary",
        name="Patient Summary Report",
        description="Comprehensive overview of patient demographics and statistics",
        category="Clinical",
        fields=["Patient ID", "Name", "Age", "Gender", "Status", "Last Visit"],
        filters=["Date Range", "Status", "Age Group"],
    ),
    ReportTemplate(
        id="appointment-analytics",
        name="Appointment Analytics",
        description="Analysis of appointment trends, completion rates, and scheduling patterns",
        category="Operational",
        fields=["Date", "Patient", "Doctor", "Type", "Status", "Duration"],
        filters=["Date Range", "Doctor", "Status", "Type"],
    ),
    ReportTemplate(
        id="financial-summary",
        name="Financial Summary",
        description="Revenue analysis, payment tracking, and financial performance metrics",
        category="Financial",
        fields=["Invoice #", "Patient", "Amount", "Payment Method", "Status", "Date"],
        filters=["Date Range", "Payment Method", "Status"],
    ),
    ReportTemplate(
        id="bed-occupancy",
        name="Bed Occupancy Report",
        description="Ward utilization, bed turnover rates, and occupancy trends",
        category="Operational",
        fields=["Ward", "Total Beds", "Occupied", "Available", "Occupancy Rate"],
        filters=["Date Range", "Ward Type"],
    ),
    ReportTemplate(
        id="pharmacy-inventory",
        name="Pharmacy Inventory Report",
        description="Medicine stock levels, expiry tracking, and usage patterns",
        category="Operational",
        fields=["Medicine", "Category", "Stock", "Expiry Date", "Status"],
        filters=["Category", "Status", "Expiry Range"],
    ),
    ReportTemplate(
        id="lab-test-summary",
        name="Laboratory Test Summary",
        description="Test volume and completion rates",
        category="Clinical",
        fields=["Test Name", "Orders", "Completed", "Pending"],
        filters=["Date Range", "Test Category", "Status"],
    ),
    ReportTemplate(
        id="doctor-performance",
        name="Doctor Performance Report",
        description="Doctor productivity, patient load, and consultation revenue",
        category="Administrative",
        fields=["Doctor", "Specialization", "Patients Seen", "Appointments", "Revenue"],
        filters=["Date Range", "Specialization", "Department"],
    ),
    ReportTemplate(
        id="staff-attendance",
        name="Staff Attendance Report",
        description="Employee attendance patterns",
        category="Administrative",
        fields=["Employee", "Department", "Present Days", "Absent Days", "Late Days"],
        filters=["Date Range", "Department", "Role"],
    ),
]

TEMPLATES_BY_ID: Dict[str, ReportTemplate] = {t.id: t for t in REPORT_TEMPLATES}

# Example data set shown by the financial summary. It is fixed rather than
# read from the invoice collection.
FINANCIAL_SAMPLE_ROWS: List[Dict[str, Any]] = [
    {"Invoice #": "INV-2024-001", "Patient": "John Smith", "Amount": 1121,
     "Payment Method": "Cash", "Status": "Paid", "Date": "2024-01-20"},
    {"Invoice #": "INV-2024-002", "Patient": "Emma Johnson", "Amount": 21948,
     "Payment Method": "Credit Card", "Status": "Paid", "Date": "2024-01-18"},
    {"Invoice #": "INV-2024-003", "Patient": "Robert Davis", "Amount": 3894,
     "Payment Method": "UPI", "Status": "Pending", "Date": "2024-01-15"},
]


def _iso(value: Optional[datetime.date]) -> Optional[str]:
    return value.isoformat() if value else None


class ReportGenerator:
    """
    Builds ReportResult objects from store snapshots.
    Unknown template ids yield an empty report rather than an error.
    """

    def __init__(self):
        self._builders: Dict[str, Callable[[StoreSnapshot, datetime.date], ReportResult]] = {
            "patient-summary": self._patient_summary,
            "appointment-analytics": self._appointment_analytics,
            "financial-summary": self._financial_summary,
            "pharmacy-inventory": self._pharmacy_inventory,
            "bed-occupancy": self._bed_occupancy,
            "lab-test-summary": self._lab_test_summary,
            "doctor-performance": self._doctor_performance,
            "staff-attendance": self._staff_attendance,
        }

    def generate(
        self,
        template_id: str,
        snapshot: StoreSnapshot,
        today: Optional[datetime.date] = None,
    ) -> ReportResult:
        builder = self._builders.get(template_id)
        if builder is None:
            logger.info("Unknown report template %r, returning empty report", template_id)
            return ReportResult(id=template_id, title=template_id)

        result = builder(snapshot, today or datetime.date.today())
        logger.info("Generated report %s with %d rows", template_id, len(result.rows))
        return result

    @staticmethod
    def _title(template_id: str) -> str:
        return TEMPLATES_BY_ID[template_id].name

    def _patient_summary(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        patients = snapshot.patients
        rows = [
            {
                "Patient ID": p.patient_id,
                "Name": p.name,
                "Age": p.age,
                "Gender": p.gender.value,
                "Status": p.status.value,
                "Last Visit": today.isoformat(),
            }
            for p in patients
        ]
        summary = ReportSummary(
            total_records=len(patients),
            trends=[
                Trend("Active Patients", count_by(patients, lambda p: p.status == PatientStatus.ACTIVE), 12),
                Trend("Admitted Patients", count_by(patients, lambda p: p.status == PatientStatus.ADMITTED), -5),
                Trend("Average Age", average_age(patients), 2),
            ],
        )
        return ReportResult("patient-summary", self._title("patient-summary"), rows, summary)

    def _appointment_analytics(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        appointments = snapshot.appointments
        rows = [
            {
                "Date": _iso(a.date),
                "Patient": a.patient_name,
                "Doctor": a.doctor_name,
                "Type": a.type.value,
                "Status": a.status.value,
                "Duration": "30 min",
            }
            for a in appointments
        ]

        def with_status(status):
            return count_by(appointments, lambda a: a.status == status)

        summary = ReportSummary(
            total_records=len(appointments),
            trends=[
                Trend("Completed", with_status(AppointmentStatus.COMPLETED), 8),
                Trend("Confirmed", with_status(AppointmentStatus.CONFIRMED), 15),
                Trend("Pending", with_status(AppointmentStatus.SCHEDULED), -3),
            ],
        )
        return ReportResult("appointment-analytics", self._title("appointment-analytics"), rows, summary)

    def _financial_summary(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        rows = [dict(row) for row in FINANCIAL_SAMPLE_ROWS]
        total = sum(row["Amount"] for row in rows)
        paid = [row for row in rows if row["Status"] == "Paid"]
        pending_amount = sum(row["Amount"] for row in rows if row["Status"] == "Pending")
        summary = ReportSummary(
            total_records=len(rows),
            total_value=total,
            average_value=total / len(rows),
            trends=[
                Trend("Total Revenue", total, 18),
                Trend("Paid Invoices", len(paid), 12),
                Trend("Pending Amount", pending_amount, -5),
            ],
        )
        return ReportResult("financial-summary", self._title("financial-summary"), rows, summary)

    def _pharmacy_inventory(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        medicines = snapshot.medicines
        rows = [
            {
                "Medicine": m.name,
                "Category": m.category,
                "Stock": m.quantity,
                "Expiry Date": _iso(m.expiry_date),
                "Status": m.status.value,
            }
            for m in medicines
        ]

        def with_status(status):
            return count_by(medicines, lambda m: m.status == status)

        summary = ReportSummary(
            total_records=len(medicines),
            total_value=inventory_value(medicines),
            trends=[
                Trend("Available", with_status(StockStatus.AVAILABLE), 5),
                Trend("Low Stock", with_status(StockStatus.LOW_STOCK), -2),
                Trend("Out of Stock", with_status(StockStatus.OUT_OF_STOCK), -1),
            ],
        )
        return ReportResult("pharmacy-inventory", self._title("pharmacy-inventory"), rows, summary)

    def _bed_occupancy(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        wards = snapshot.wards
        rows = [
            {
                "Ward": w.name,
                "Total Beds": w.total_beds,
                "Occupied": w.occupied_beds,
                "Available": w.available_beds,
                "Occupancy Rate": round(occupancy_rate(w.occupied_beds, w.total_beds), 1),
            }
            for w in wards
        ]
        stats = ward_stats(wards)
        summary = ReportSummary(
            total_records=len(wards),
            total_value=stats.occupied_beds,
            average_value=round(stats.occupancy_rate, 1),
            trends=[
                Trend("Occupied Beds", stats.occupied_beds),
                Trend("Available Beds", stats.available_beds),
                Trend("Maintenance Beds", stats.maintenance_beds),
            ],
        )
        return ReportResult("bed-occupancy", self._title("bed-occupancy"), rows, summary)

    def _lab_test_summary(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        ordered = [t for order in snapshot.lab_orders for t in order.tests]
        rows = []
        for test in snapshot.lab_tests:
            lines = [t for t in ordered if t.test_id == test.id]
            completed = count_by(lines, lambda t: t.status == OrderedTestStatus.COMPLETED)
            rows.append({
                "Test Name": test.test_name,
                "Orders": len(lines),
                "Completed": completed,
                "Pending": len(lines) - completed,
            })
        total_completed = sum(row["Completed"] for row in rows)
        summary = ReportSummary(
            total_records=len(rows),
            total_value=lab_stats(snapshot.lab_tests, snapshot.lab_orders).revenue,
            trends=[
                Trend("Completed Tests", total_completed),
                Trend("Pending Tests", sum(row["Pending"] for row in rows)),
            ],
        )
        return ReportResult("lab-test-summary", self._title("lab-test-summary"), rows, summary)

    def _doctor_performance(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        rows = []
        for doctor in snapshot.doctors:
            booked = [a for a in snapshot.appointments if a.doctor_id == doctor.id]
            seen = [a for a in booked if a.status == AppointmentStatus.COMPLETED]
            rows.append({
                "Doctor": doctor.name,
                "Specialization": doctor.specialization,
                "Patients Seen": len({a.patient_id for a in seen}),
                "Appointments": len(booked),
                "Revenue": len(seen) * doctor.consultation_fee,
            })
        revenue = sum(row["Revenue"] for row in rows)
        summary = ReportSummary(
            total_records=len(rows),
            total_value=revenue,
            average_value=revenue / len(rows) if rows else 0.0,
        )
        return ReportResult("doctor-performance", self._title("doctor-performance"), rows, summary)

    def _staff_attendance(self, snapshot: StoreSnapshot, today: datetime.date) -> ReportResult:
        rows = []
        for member in snapshot.staff:
            records = [a for a in snapshot.attendance if a.employee_id == member.employee_id]
            rows.append({
                "Employee": member.name,
                "Department": member.department,
                "Present Days": count_by(records, lambda a: a.status == AttendanceStatus.PRESENT),
                "Absent Days": count_by(records, lambda a: a.status == AttendanceStatus.ABSENT),
                "Late Days": count_by(records, lambda a: a.status == AttendanceStatus.LATE),
            })
        summary = ReportSummary(
            total_records=len(rows),
            trends=[
                Trend("Present", sum(row["Present Days"] for row in rows)),
                Trend("Absent", sum(row["Absent Days"] for row in rows)),
                Trend("Late", sum(row["Late Days"] for row in rows)),
            ],
        )
        return ReportResult("staff-attendance", self._title("staff-attendance"), rows, summary)


@dataclass
class RecentReport:
    name: str
    category: str
    date: datetime.date
    records: int
    status: str = "Completed"


class ReportHistory:
    """Most recently generated reports, newest first."""

    def __init__(self, limit: Optional[int] = None):
        self._entries: Deque[RecentReport] = deque(maxlen=limit or settings.RECENT_REPORTS_LIMIT)

    def record(self, result: ReportResult, generated_on: Optional[datetime.date] = None) -> RecentReport:
        template = TEMPLATES_BY_ID.get(result.id)
        entry = RecentReport(
            name=template.name if template else result.title,
            category=template.category if template else "Uncategorized",
            date=generated_on or datetime.date.today(),
            records=len(result.rows),
        )
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[RecentReport]:
        return list(self._entries)


report_generator = ReportGenerator()


def generate_report(
    template_id: str,
    snapshot: StoreSnapshot,
    today: Optional[datetime.date] = None,
) -> ReportResult:
    return report_generator.generate(template_id, snapshot, today)
