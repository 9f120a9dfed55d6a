from hospital_admin.seed_demo import seed_demo_data
from hospital_admin.services.references import dangling_references, find_by_id, name_drift
from hospital_admin.store.store import AppStore


def seeded_store():
    store = AppStore()
    seed_demo_data(store, force=True)
    return store


def test_demo_data_is_consistent():
    snapshot = seeded_store().snapshot()
    assert dangling_references(snapshot) == []
    assert name_drift(snapshot) == []


def test_deleted_patient_leaves_dangling_references():
    store = seeded_store()
    store.patients.delete("3")
    issues = dangling_references(store.snapshot())

    assert {(i.collection, i.record_id) for i in issues} == {
        ("appointments", "3"),
        ("invoices", "3"),
        ("lab_orders", "3"),
    }
    assert all(i.field == "patient_id" and i.copied_name == "Robert Davis" for i in issues)


def test_renamed_doctor_shows_name_drift():
    store = seeded_store()
    doctor = store.doctors.get("1")
    store.doctors.update(doctor.model_copy(update={"name": "Dr. Sarah Wilson-Grant"}))
    issues = name_drift(store.snapshot())

    assert {i.collection for i in issues} == {"appointments", "prescriptions", "lab_orders"}
    issue = issues[0]
    assert issue.field == "doctor_name"
    assert issue.copied_name == "Dr. Sarah Wilson"
    assert issue.current_name == "Dr. Sarah Wilson-Grant"


def test_renaming_does_not_rewrite_copies():
    store = seeded_store()
    patient = store.patients.get("1")
    store.patients.update(patient.model_copy(update={"name": "Jonathan Smith"}))
    assert store.appointments.get("1").patient_name == "John Smith"


def test_find_by_id():
    patients = seeded_store().patients.items
    assert find_by_id(patients, "2").name == "Emma Johnson"
    assert find_by_id(patients, "missing") is None
