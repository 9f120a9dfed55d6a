import datetime

from hospital_admin.seed_demo import seed_demo_data
from hospital_admin.services.report_generator import (
    REPORT_TEMPLATES,
    ReportHistory,
    ReportResult,
    generate_report,
)
from hospital_admin.store.store import AppStore

TODAY = datetime.date(2024, 1, 22)


def make_snapshot(seed=True, **collections):
    store = AppStore()
    if seed:
        seed_demo_data(store, force=True)
    for name, records in collections.items():
        store.slice(name).set_all(records)
    return store.snapshot()


class TestPatientSummary:
    def test_counts_and_trends(self):
        snapshot = make_snapshot(
            seed=False,
            patients=[
                {"id": "1", "name": "John Smith", "age": 40, "status": "Active"},
                {"id": "2", "name": "Emma Johnson", "age": 30, "status": "Admitted"},
            ],
        )
        result = generate_report("patient-summary", snapshot, TODAY)

        assert result.summary.total_records == 2
        assert result.summary.trend("Active Patients").value == 1
        assert result.summary.trend("Active Patients").change_percent == 12
        assert result.summary.trend("Admitted Patients").value == 1
        assert result.summary.trend("Average Age").value == 35
        assert [row["Name"] for row in result.rows] == ["John Smith", "Emma Johnson"]
        assert result.rows[0]["Last Visit"] == "2024-01-22"

    def test_average_age_rounds_half_up(self):
        snapshot = make_snapshot(
            seed=False,
            patients=[
                {"id": "1", "name": "John Smith", "age": 30},
                {"id": "2", "name": "Emma Johnson", "age": 31},
            ],
        )
        result = generate_report("patient-summary", snapshot, TODAY)
        assert result.summary.trend("Average Age").value == 31

    def test_average_age_of_empty_collection(self):
        result = generate_report("patient-summary", make_snapshot(seed=False), TODAY)
        assert result.summary.total_records == 0
        assert result.summary.trend("Average Age").value == 0


class TestTemplates:
    def test_every_template_produces_uniform_rows(self):
        snapshot = make_snapshot()
        for template in REPORT_TEMPLATES:
            result = generate_report(template.id, snapshot, TODAY)
            assert result.title == template.name
            assert result.rows, template.id
            columns = set(result.rows[0])
            assert all(set(row) == columns for row in result.rows), template.id
            assert result.summary.total_records == len(result.rows)

    def test_unknown_template_yields_empty_report(self):
        result = generate_report("no-such-report", make_snapshot(), TODAY)
        assert result.id == "no-such-report"
        assert result.rows == []
        assert result.summary.total_records == 0
        assert result.to_dict()["summary"] == {"totalRecords": 0}

    def test_financial_summary_uses_fixed_sample(self):
        result = generate_report("financial-summary", make_snapshot(seed=False), TODAY)
        assert result.summary.total_records == 3
        assert result.summary.total_value == 26963
        assert result.summary.trend("Pending Amount").value == 3894

    def test_pharmacy_inventory(self):
        result = generate_report("pharmacy-inventory", make_snapshot(), TODAY)
        assert result.summary.total_value == 2000
        assert result.summary.trend("Available").value == 1
        assert result.summary.trend("Low Stock").value == 1
        assert result.summary.trend("Out of Stock").value == 1
        assert result.rows[2]["Status"] == "Out of Stock"

    def test_bed_occupancy(self):
        result = generate_report("bed-occupancy", make_snapshot(), TODAY)
        icu = next(row for row in result.rows if row["Ward"] == "ICU")
        assert icu["Occupancy Rate"] == 80.0
        assert result.summary.total_value == 33

    def test_bed_occupancy_without_beds(self):
        snapshot = make_snapshot(seed=False, wards=[{"id": "w", "name": "New Wing"}])
        result = generate_report("bed-occupancy", snapshot, TODAY)
        assert result.rows[0]["Occupancy Rate"] == 0.0
        assert result.summary.average_value == 0.0

    def test_doctor_performance_revenue(self):
        snapshot = make_snapshot()
        appointments = [a.to_json() for a in snapshot.appointments]
        appointments[0]["status"] = "Completed"
        snapshot = make_snapshot(appointments=appointments)
        result = generate_report("doctor-performance", snapshot, TODAY)
        wilson = result.rows[0]
        assert wilson["Patients Seen"] == 1
        assert wilson["Revenue"] == 800
        assert result.summary.total_value == 800

    def test_staff_attendance(self):
        result = generate_report("staff-attendance", make_snapshot(), TODAY)
        assert result.summary.trend("Present").value == 2
        assert result.summary.trend("Late").value == 1
        assert result.summary.trend("Absent").value == 1

    def test_lab_test_summary(self):
        result = generate_report("lab-test-summary", make_snapshot(), TODAY)
        cbc = next(row for row in result.rows if row["Test Name"] == "Complete Blood Count")
        assert (cbc["Orders"], cbc["Completed"], cbc["Pending"]) == (1, 1, 0)
        assert result.summary.trend("Pending Tests").value == 2
        assert result.summary.total_value == 450

    def test_generation_does_not_touch_the_store(self):
        store = AppStore()
        seed_demo_data(store, force=True)
        before = store.snapshot()
        for template in REPORT_TEMPLATES:
            generate_report(template.id, store.snapshot(), TODAY)
        assert store.snapshot() == before

    def test_to_dict_uses_camel_case(self):
        data = generate_report("financial-summary", make_snapshot(seed=False), TODAY).to_dict()
        assert data["summary"]["totalValue"] == 26963
        assert data["summary"]["trends"][0]["changePercent"] == 18


class TestReportHistory:
    def test_newest_first(self):
        history = ReportHistory(limit=5)
        history.record(ReportResult("patient-summary", "Patient Summary Report"), TODAY)
        history.record(ReportResult("bed-occupancy", "Bed Occupancy Report"), TODAY)
        names = [entry.name for entry in history.entries()]
        assert names == ["Bed Occupancy Report", "Patient Summary Report"]
        assert history.entries()[0].category == "Operational"

    def test_capped(self):
        history = ReportHistory(limit=2)
        for _ in range(4):
            history.record(ReportResult("patient-summary", "Patient Summary Report"))
        assert len(history.entries()) == 2

    def test_unknown_template_is_uncategorized(self):
        entry = ReportHistory(limit=1).record(ReportResult("custom", "Custom"), TODAY)
        assert entry.category == "Uncategorized"
        assert entry.records == 0
