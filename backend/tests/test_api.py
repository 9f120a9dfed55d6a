"""API tests against a store seeded with the demo fixtures."""
import re

import pytest
from fastapi.testclient import TestClient

from hospital_admin.main import create_app
from hospital_admin.store.store import create_store


@pytest.fixture()
def client():
    app = create_app(store=create_store(seed=True))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestCollections:
    def test_list_patients(self, client):
        response = client.get("/api/patients/")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["John Smith", "Emma Johnson", "Robert Davis"]

    def test_search(self, client):
        response = client.get("/api/patients/", params={"q": "emma"})
        assert [p["patientId"] for p in response.json()] == ["HMS-2024-001235"]

    def test_get_missing_returns_404(self, client):
        assert client.get("/api/doctors/missing").status_code == 404

    def test_create_patient(self, client):
        response = client.post("/api/patients/", json={"name": "Priya Sharma", "age": 29, "gender": "Female"})
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Active"
        assert body["patientId"].startswith("HMS-")
        assert client.get(f"/api/patients/{body['id']}").json()["name"] == "Priya Sharma"

    def test_create_invalid_patient_returns_422(self, client):
        response = client.post("/api/patients/", json={"name": "Priya Sharma", "age": "old"})
        assert response.status_code == 422
        assert response.json()["errors"][0]["loc"] == ["age"]

    def test_create_staff_member_gets_next_employee_id(self, client):
        response = client.post("/api/staff/", json={"name": "Eve Martin", "role": "Nurse"})
        assert response.json()["employeeId"] == "EMP005"

    def test_update_medicine_recomputes_status(self, client):
        response = client.put("/api/medicines/1", json={"quantity": 0})
        assert response.status_code == 200
        assert response.json()["status"] == "Out of Stock"
        assert response.json()["name"] == "Paracetamol 500mg"

    def test_update_accepts_snake_case_fields(self, client):
        response = client.put("/api/medicines/1", json={"min_stock_level": 1000})
        assert response.status_code == 200
        assert response.json()["minStockLevel"] == 1000
        assert response.json()["status"] == "Low Stock"
        assert client.get("/api/medicines/1").json()["minStockLevel"] == 1000

    def test_create_accepts_snake_case_fields(self, client):
        response = client.post("/api/patients/", json={"name": "Priya Sharma", "blood_group": "B-"})
        assert response.json()["bloodGroup"] == "B-"

    def test_update_missing_returns_404(self, client):
        assert client.put("/api/medicines/missing", json={"quantity": 1}).status_code == 404

    def test_delete(self, client):
        assert client.delete("/api/invoices/3").status_code == 204
        assert client.delete("/api/invoices/3").status_code == 404
        assert len(client.get("/api/invoices/").json()) == 2


class TestServerComputedFields:
    def test_invoice_is_numbered_and_priced(self, client):
        response = client.post(
            "/api/invoices/",
            json={
                "patientId": "1",
                "patientName": "John Smith",
                "invoiceNumber": "CLIENT-1",
                "total": 1,
                "items": [
                    {"description": "Consultation Fee", "quantity": 1, "unitPrice": 500},
                    {"description": "Blood Test", "quantity": 1, "unitPrice": 300},
                    {"description": "Medicines", "quantity": 1, "unitPrice": 150},
                ],
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert re.match(r"^INV-\d{4}-\d{3}$", body["invoiceNumber"])
        assert (body["subtotal"], body["tax"], body["total"]) == (950, 171, 1121)
        assert body["status"] == "Pending"

    def test_invoice_line_without_description_returns_422(self, client):
        response = client.post(
            "/api/invoices/",
            json={"patientId": "1", "patientName": "John Smith", "items": [{"quantity": 1}]},
        )
        assert response.status_code == 422

    def test_invoice_without_patient_returns_422(self, client):
        assert client.post("/api/invoices/", json={"items": []}).status_code == 422

    def test_lab_order_is_numbered_and_priced(self, client):
        response = client.post(
            "/api/lab-orders/",
            json={
                "patientId": "2", "patientName": "Emma Johnson",
                "doctorId": "2", "doctorName": "Dr. Michael Brown",
                "totalAmount": 1,
                "tests": [
                    {"testId": "1", "testName": "Complete Blood Count"},
                    {"testId": "2", "testName": "Fasting Blood Sugar"},
                ],
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert re.match(r"^LAB-\d{4}-\d{3}$", body["orderNumber"])
        assert body["totalAmount"] == 450

    def test_prescription_is_priced_from_stock(self, client):
        response = client.post(
            "/api/prescriptions/",
            json={
                "patientId": "1", "patientName": "John Smith",
                "doctorId": "1", "doctorName": "Dr. Sarah Wilson",
                "medicines": [{"medicineId": "2", "medicineName": "Amoxicillin 250mg", "quantity": 4}],
            },
        )
        assert response.json()["totalAmount"] == 60

    def test_overdue_invoices(self, client):
        overdue = client.get("/api/invoices/overdue").json()
        assert [i["invoiceNumber"] for i in overdue] == ["INV-2024-003"]
        assert overdue[0]["daysOverdue"] > 0


class TestReferences:
    def test_consistent_demo_data(self, client):
        assert client.get("/api/references/dangling").json() == []
        assert client.get("/api/references/drift").json() == []

    def test_deleted_patient_is_reported(self, client):
        client.delete("/api/patients/3")
        issues = client.get("/api/references/dangling").json()
        assert {i["collection"] for i in issues} == {"appointments", "invoices", "lab_orders"}

    def test_renamed_doctor_is_reported(self, client):
        client.put("/api/doctors/1", json={"name": "Dr. Sarah Wilson-Grant"})
        issues = client.get("/api/references/drift").json()
        assert len(issues) == 3
        assert issues[0]["current_name"] == "Dr. Sarah Wilson-Grant"


class TestActions:
    def test_complete_appointment(self, client):
        response = client.post("/api/appointments/1/complete")
        assert response.json()["status"] == "Completed"
        assert client.post("/api/appointments/1/cancel").status_code == 409

    def test_dispense_prescription(self, client):
        response = client.post("/api/prescriptions/1/dispense")
        assert response.json()["status"] == "Dispensed"
        assert response.json()["dispensedDate"] is not None

    def test_pay_invoice(self, client):
        response = client.post("/api/invoices/1/pay", json={"paymentMethod": "UPI"})
        assert response.json()["status"] == "Paid"

    def test_lab_result(self, client):
        response = client.post("/api/lab-orders/3/results", json={"testId": "4", "result": "Clear"})
        assert response.json()["status"] == "Completed"
        bad = client.post("/api/lab-orders/3/results", json={"testId": "1", "result": "Clear"})
        assert bad.status_code == 409

    def test_mark_attendance(self, client):
        response = client.post("/api/staff/1/attendance", json={"status": "Late"})
        assert response.status_code == 201
        assert response.json()["checkIn"] == "08:30"

    def test_missing_record_returns_404(self, client):
        assert client.post("/api/appointments/missing/complete").status_code == 404


class TestWards:
    def test_admit_and_discharge(self, client):
        response = client.post(
            "/api/wards/1/beds/bed-1-16/admit",
            json={"patientId": "1", "patientName": "John Smith"},
        )
        assert response.status_code == 200
        assert response.json()["occupiedBeds"] == 16
        assert client.get("/api/patients/1").json()["status"] == "Admitted"

        response = client.post("/api/wards/1/beds/bed-1-16/discharge")
        assert response.json()["occupiedBeds"] == 15

    def test_admit_into_occupied_bed_returns_409(self, client):
        response = client.post(
            "/api/wards/1/beds/bed-1-1/admit",
            json={"patientId": "1", "patientName": "John Smith"},
        )
        assert response.status_code == 409

    def test_unknown_ward_or_bed_returns_404(self, client):
        body = {"patientId": "1", "patientName": "John Smith"}
        assert client.post("/api/wards/99/beds/bed-1-16/admit", json=body).status_code == 404
        assert client.post("/api/wards/1/beds/missing/admit", json=body).status_code == 404
        assert client.post("/api/wards/99/beds/bed-1-1/discharge").status_code == 404

    def test_ward_stats(self, client):
        assert client.get("/api/wards/stats").json()["total_beds"] == 53

    def test_missing_ward(self, client):
        assert client.get("/api/wards/99").status_code == 404


class TestDashboardAndReports:
    def test_dashboard_stats(self, client):
        stats = client.get("/api/dashboard/stats").json()
        assert stats["total_patients"] == 3
        assert stats["occupancy_rate"] == 62.3

    def test_domain_stats(self, client):
        assert client.get("/api/dashboard/stats/billing").json()["total_revenue"] == 21948
        assert client.get("/api/dashboard/stats/unknown").status_code == 404

    def test_templates(self, client):
        assert len(client.get("/api/reports/templates").json()) == 8

    def test_generate_records_history(self, client):
        response = client.post("/api/reports/patient-summary")
        assert response.json()["summary"]["totalRecords"] == 3
        client.post("/api/reports/unknown")

        recent = client.get("/api/reports/recent").json()
        assert [r["name"] for r in recent] == ["unknown", "Patient Summary Report"]
        assert recent[1]["records"] == 3
