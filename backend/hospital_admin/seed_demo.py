"""
Development fixtures for the administration dashboard.

Loads the sample patients, doctors, appointments, pharmacy stock, invoices,
lab orders, wards and staff roster used for demos and local development.

Fixtures are only loaded when DEV_FIXTURES_ENABLED is set (or force=True).
Only empty collections are filled, so calling this on every startup is safe;
a collection the user has emptied is left empty until the next explicit seed.
"""
from typing import Dict, List

from .core.config import settings
from .store.store import AppStore

DEMO_PATIENTS: List[Dict] = [
    {
        "id": "1", "patientId": "HMS-2024-001234", "name": "John Smith", "age": 45,
        "gender": "Male", "phone": "+91-9876543210", "email": "john.smith@email.com",
        "address": "123 Main Street, Mumbai, Maharashtra",
        "emergencyContact": "+91-9876543211", "bloodGroup": "O+", "status": "Active",
    },
    {
        "id": "2", "patientId": "HMS-2024-001235", "name": "Emma Johnson", "age": 32,
        "gender": "Female", "phone": "+91-9876543212", "email": "emma.johnson@email.com",
        "address": "456 Park Avenue, Delhi, Delhi",
        "emergencyContact": "+91-9876543213", "bloodGroup": "A+", "status": "Admitted",
    },
    {
        "id": "3", "patientId": "HMS-2024-001236", "name": "Robert Davis", "age": 67,
        "gender": "Male", "phone": "+91-9876543214", "email": "robert.davis@email.com",
        "address": "789 Oak Street, Bangalore, Karnataka",
        "emergencyContact": "+91-9876543215", "bloodGroup": "B+", "status": "Discharged",
    },
]

DEMO_DOCTORS: List[Dict] = [
    {"id": "1", "name": "Dr. Sarah Wilson", "specialization": "Cardiology",
     "phone": "+91-9876543220", "email": "sarah.wilson@hospital.com", "experience": 15,
     "consultationFee": 800, "status": "Active"},
    {"id": "2", "name": "Dr. Michael Brown", "specialization": "Neurology",
     "phone": "+91-9876543221", "email": "michael.brown@hospital.com", "experience": 12,
     "consultationFee": 700, "status": "Active"},
    {"id": "3", "name": "Dr. Lisa Anderson", "specialization": "Pediatrics",
     "phone": "+91-9876543222", "email": "lisa.anderson@hospital.com", "experience": 8,
     "consultationFee": 500, "status": "Active"},
]

DEMO_APPOINTMENTS: List[Dict] = [
    {"id": "1", "patientId": "1", "patientName": "John Smith", "doctorId": "1",
     "doctorName": "Dr. Sarah Wilson", "date": "2024-01-22", "time": "09:00 AM",
     "type": "Consultation", "status": "Confirmed", "notes": "Regular checkup"},
    {"id": "2", "patientId": "2", "patientName": "Emma Johnson", "doctorId": "2",
     "doctorName": "Dr. Michael Brown", "date": "2024-01-22", "time": "10:30 AM",
     "type": "Follow-up", "status": "Scheduled", "notes": "Post-surgery follow-up"},
    {"id": "3", "patientId": "3", "patientName": "Robert Davis", "doctorId": "3",
     "doctorName": "Dr. Lisa Anderson", "date": "2024-01-22", "time": "02:00 PM",
     "type": "Emergency", "status": "Urgent", "notes": "Chest pain complaint"},
]

DEMO_MEDICINES: List[Dict] = [
    {"id": "1", "name": "Paracetamol 500mg", "category": "Analgesic",
     "manufacturer": "Cipla Ltd", "batchNumber": "PCM001", "expiryDate": "2025-12-31",
     "quantity": 500, "unitPrice": 2.50, "minStockLevel": 100,
     "description": "Pain relief and fever reducer"},
    {"id": "2", "name": "Amoxicillin 250mg", "category": "Antibiotic",
     "manufacturer": "Sun Pharma", "batchNumber": "AMX002", "expiryDate": "2025-06-30",
     "quantity": 50, "unitPrice": 15.00, "minStockLevel": 100,
     "description": "Broad-spectrum antibiotic"},
    {"id": "3", "name": "Insulin Glargine", "category": "Antidiabetic",
     "manufacturer": "Novo Nordisk", "batchNumber": "INS003", "expiryDate": "2024-03-15",
     "quantity": 0, "unitPrice": 450.00, "minStockLevel": 20,
     "description": "Long-acting insulin"},
]

DEMO_PRESCRIPTIONS: List[Dict] = [
    {
        "id": "1", "patientId": "1", "patientName": "John Smith", "doctorId": "1",
        "doctorName": "Dr. Sarah Wilson",
        "medicines": [
            {"medicineId": "1", "medicineName": "Paracetamol 500mg", "dosage": "500mg",
             "frequency": "Twice daily", "duration": "5 days", "quantity": 10},
        ],
        "status": "Pending", "prescriptionDate": "2024-01-22", "totalAmount": 25.00,
    },
]

DEMO_INVOICES: List[Dict] = [
    {
        "id": "1", "invoiceNumber": "INV-2024-001", "patientId": "1", "patientName": "John Smith",
        "date": "2024-01-20", "dueDate": "2024-02-20",
        "items": [
            {"description": "Consultation Fee", "quantity": 1, "unitPrice": 500, "total": 500},
            {"description": "Blood Test", "quantity": 1, "unitPrice": 300, "total": 300},
            {"description": "Medicines", "quantity": 1, "unitPrice": 150, "total": 150},
        ],
        "subtotal": 950, "tax": 171, "total": 1121, "status": "Pending",
    },
    {
        "id": "2", "invoiceNumber": "INV-2024-002", "patientId": "2", "patientName": "Emma Johnson",
        "date": "2024-01-18", "dueDate": "2024-02-18",
        "items": [
            {"description": "Surgery Fee", "quantity": 1, "unitPrice": 15000, "total": 15000},
            {"description": "Room Charges (3 days)", "quantity": 3, "unitPrice": 1200, "total": 3600},
        ],
        "subtotal": 18600, "tax": 3348, "total": 21948, "status": "Paid",
        "paymentMethod": "Credit Card", "paidDate": "2024-01-22",
    },
    {
        "id": "3", "invoiceNumber": "INV-2024-003", "patientId": "3", "patientName": "Robert Davis",
        "date": "2024-01-15", "dueDate": "2024-02-15",
        "items": [
            {"description": "Emergency Treatment", "quantity": 1, "unitPrice": 2500, "total": 2500},
            {"description": "X-Ray", "quantity": 2, "unitPrice": 400, "total": 800},
        ],
        "subtotal": 3300, "tax": 594, "total": 3894, "status": "Overdue",
    },
]

DEMO_LAB_TESTS: List[Dict] = [
    {"id": "1", "testCode": "CBC", "testName": "Complete Blood Count", "category": "Hematology",
     "price": 300, "normalRange": "Various parameters", "unit": "Various",
     "description": "Complete blood count with differential"},
    {"id": "2", "testCode": "FBS", "testName": "Fasting Blood Sugar", "category": "Biochemistry",
     "price": 150, "normalRange": "70-100 mg/dL", "unit": "mg/dL",
     "description": "Fasting glucose level"},
    {"id": "3", "testCode": "LFT", "testName": "Liver Function Test", "category": "Biochemistry",
     "price": 500, "normalRange": "Various parameters", "unit": "Various",
     "description": "Complete liver function panel"},
    {"id": "4", "testCode": "XRAY", "testName": "Chest X-Ray", "category": "Radiology",
     "price": 400, "normalRange": "Normal anatomy", "unit": "Image",
     "description": "Chest radiograph"},
]

DEMO_LAB_ORDERS: List[Dict] = [
    {
        "id": "1", "orderNumber": "LAB-2024-001", "patientId": "1", "patientName": "John Smith",
        "doctorId": "1", "doctorName": "Dr. Sarah Wilson",
        "tests": [
            {"testId": "1", "testName": "Complete Blood Count", "status": "Completed", "result": "Normal"},
            {"testId": "2", "testName": "Fasting Blood Sugar", "status": "Completed", "result": "95 mg/dL"},
        ],
        "orderDate": "2024-01-22", "sampleCollected": True, "status": "Completed",
        "priority": "Normal", "totalAmount": 450,
    },
    {
        "id": "2", "orderNumber": "LAB-2024-002", "patientId": "2", "patientName": "Emma Johnson",
        "doctorId": "2", "doctorName": "Dr. Michael Brown",
        "tests": [{"testId": "3", "testName": "Liver Function Test", "status": "In Progress"}],
        "orderDate": "2024-01-22", "sampleCollected": True, "status": "In Progress",
        "priority": "Urgent", "totalAmount": 500,
    },
    {
        "id": "3", "orderNumber": "LAB-2024-003", "patientId": "3", "patientName": "Robert Davis",
        "doctorId": "3", "doctorName": "Dr. Lisa Anderson",
        "tests": [{"testId": "4", "testName": "Chest X-Ray", "status": "Pending"}],
        "orderDate": "2024-01-22", "sampleCollected": False, "status": "Ordered",
        "priority": "STAT", "totalAmount": 400,
    },
]

DEMO_STAFF: List[Dict] = [
    {"id": "1", "employeeId": "EMP001", "name": "Alice Johnson", "role": "Nurse",
     "department": "ICU", "phone": "+91-9876543230", "email": "alice.johnson@hospital.com",
     "joinDate": "2023-01-15", "salary": 45000, "status": "Active", "shift": "Morning"},
    {"id": "2", "employeeId": "EMP002", "name": "Bob Smith", "role": "Technician",
     "department": "Laboratory", "phone": "+91-9876543231", "email": "bob.smith@hospital.com",
     "joinDate": "2023-03-20", "salary": 35000, "status": "Active", "shift": "Evening"},
    {"id": "3", "employeeId": "EMP003", "name": "Carol Davis", "role": "Pharmacist",
     "department": "Pharmacy", "phone": "+91-9876543232", "email": "carol.davis@hospital.com",
     "joinDate": "2022-11-10", "salary": 50000, "status": "Active", "shift": "Morning"},
    {"id": "4", "employeeId": "EMP004", "name": "David Wilson", "role": "Security Guard",
     "department": "Security", "phone": "+91-9876543233", "email": "david.wilson@hospital.com",
     "joinDate": "2023-05-01", "salary": 25000, "status": "On Leave", "shift": "Night"},
]

DEMO_ATTENDANCE: List[Dict] = [
    {"id": "1", "employeeId": "EMP001", "employeeName": "Alice Johnson", "date": "2024-01-22",
     "checkIn": "08:00", "checkOut": "16:00", "hoursWorked": 8, "status": "Present"},
    {"id": "2", "employeeId": "EMP002", "employeeName": "Bob Smith", "date": "2024-01-22",
     "checkIn": "14:00", "checkOut": "22:00", "hoursWorked": 8, "status": "Present"},
    {"id": "3", "employeeId": "EMP003", "employeeName": "Carol Davis", "date": "2024-01-22",
     "checkIn": "08:30", "checkOut": "16:30", "hoursWorked": 8, "status": "Late"},
    {"id": "4", "employeeId": "EMP004", "employeeName": "David Wilson", "date": "2024-01-22",
     "checkIn": "", "status": "Absent"},
]

# (id, name, type, bed prefix, bed type, beds, occupied, maintenance, patient id prefix, patient label, admitted on)
DEMO_WARD_LAYOUT = [
    ("1", "General Ward A", "General", "A", "General", 20, 15, 1, "patient", "Patient", "2024-01-20"),
    ("2", "ICU", "ICU", "ICU", "ICU", 10, 8, 0, "icu-patient", "ICU Patient", "2024-01-21"),
    ("3", "Emergency Ward", "Emergency", "ER", "General", 15, 4, 0, "er-patient", "Emergency Patient", "2024-01-22"),
    ("4", "Private Rooms", "General", "PVT", "Private", 8, 6, 0, "pvt-patient", "Private Patient", "2024-01-19"),
]


def build_demo_wards() -> List[Dict]:
    """Occupied beds first, maintenance beds last, the rest available."""
    wards = []
    for (ward_id, name, ward_type, prefix, bed_type, count, occupied, maintenance,
         patient_prefix, label, admitted) in DEMO_WARD_LAYOUT:
        beds = []
        for i in range(count):
            bed = {
                "id": f"bed-{ward_id}-{i + 1}",
                "bedNumber": f"{prefix}{i + 1}",
                "wardId": ward_id,
                "bedType": bed_type,
                "status": "Available",
            }
            if i < occupied:
                bed.update(
                    status="Occupied",
                    patientId=f"{patient_prefix}-{i + 1}",
                    patientName=f"{label} {i + 1}",
                    admissionDate=admitted,
                )
            elif i >= count - maintenance:
                bed["status"] = "Maintenance"
            beds.append(bed)
        wards.append({"id": ward_id, "name": name, "type": ward_type, "beds": beds})
    return wards


DEMO_FIXTURES = {
    "patients": DEMO_PATIENTS,
    "doctors": DEMO_DOCTORS,
    "appointments": DEMO_APPOINTMENTS,
    "medicines": DEMO_MEDICINES,
    "prescriptions": DEMO_PRESCRIPTIONS,
    "invoices": DEMO_INVOICES,
    "lab_tests": DEMO_LAB_TESTS,
    "lab_orders": DEMO_LAB_ORDERS,
    "staff": DEMO_STAFF,
    "attendance": DEMO_ATTENDANCE,
}


def seed_demo_data(store: AppStore, force: bool = False) -> List[str]:
    """
    Fill empty collections with demo records.
    Returns the names of the collections that were seeded.
    """
    if not (force or settings.DEV_FIXTURES_ENABLED):
        return []

    seeded = []
    fixtures = dict(DEMO_FIXTURES, wards=build_demo_wards())
    for name, records in fixtures.items():
        if _seed_slice(store, name, records):
            seeded.append(name)
    return seeded


# ── helpers ──────────────────────────────────────────────────────────────────

def _seed_slice(store: AppStore, name: str, records: List[Dict]) -> bool:
    target = store.slice(name)
    if len(target):
        return False
    target.set_all(records)
    print(f"[seed] Loaded {len(records)} demo {name.replace('_', ' ')}")
    return True
