import pytest

from hospital_admin.core.exceptions import InvalidEntityError
from hospital_admin.models.patient import Patient
from hospital_admin.models.pharmacy import Medicine
from hospital_admin.store import slice as reducers
from hospital_admin.store.slice import Slice


def make_patient(id="1", name="John Smith", status="Active", **extra):
    return Patient(id=id, name=name, status=status, **extra)


# ---------------------------------------------------------------------------
# Pure reducers
# ---------------------------------------------------------------------------

class TestReducers:
    def setup_method(self):
        self.base = (make_patient("1"), make_patient("2", "Emma Johnson", "Admitted"))

    def test_add_appends_and_leaves_input_untouched(self):
        new = make_patient("3", "Robert Davis")
        result = reducers.add(self.base, new)
        assert result[-1] is new
        assert len(result) == 3
        assert len(self.base) == 2
        assert result is not self.base

    def test_update_after_add_leaves_exactly_one_match(self):
        item = make_patient("9", "Before")
        replacement = make_patient("9", "After", "Discharged")
        result = reducers.update(reducers.add(self.base, item), replacement)
        matches = [p for p in result if p.id == "9"]
        assert len(matches) == 1
        assert matches[0] == replacement

    def test_update_preserves_position(self):
        replacement = make_patient("1", "John A. Smith")
        result = reducers.update(self.base, replacement)
        assert [p.id for p in result] == ["1", "2"]
        assert result[0].name == "John A. Smith"

    def test_update_unknown_id_keeps_contents(self):
        result = reducers.update(self.base, make_patient("404"))
        assert result == self.base

    def test_delete_after_add_round_trips(self):
        item = make_patient("3", "Robert Davis")
        assert reducers.delete(reducers.add(self.base, item), "3") == self.base

    def test_delete_removes_every_duplicate(self):
        dup = reducers.add(self.base, make_patient("1", "Duplicate"))
        assert [p.id for p in reducers.delete(dup, "1")] == ["2"]

    def test_set_all_replaces(self):
        assert reducers.set_all(self.base, []) == ()


# ---------------------------------------------------------------------------
# Slice state holder
# ---------------------------------------------------------------------------

class TestSlice:
    def setup_method(self):
        self.patients = Slice("patients", Patient)
        self.patients.set_all([
            {"id": "1", "name": "John Smith", "status": "Active"},
            {"id": "2", "name": "Emma Johnson", "status": "Admitted"},
        ])

    def test_set_all_validates_mappings(self):
        assert all(isinstance(p, Patient) for p in self.patients.items)
        assert self.patients.items[1].status == "Admitted"

    def test_previous_snapshot_survives_add(self):
        before = self.patients.items
        self.patients.add({"id": "3", "name": "Robert Davis"})
        assert len(before) == 2
        assert len(self.patients.items) == 3

    def test_delete_absent_id_is_silent(self):
        assert self.patients.delete("does-not-exist") is False
        assert len(self.patients) == 2

    def test_update_absent_id_is_silent(self):
        before = self.patients.items
        assert self.patients.update({"id": "404", "name": "Nobody"}) is False
        assert self.patients.items is before

    def test_update_existing(self):
        assert self.patients.update({"id": "2", "name": "Emma Johnson", "status": "Discharged"})
        assert self.patients.get("2").status == "Discharged"

    def test_duplicate_id_is_appended_with_warning(self, caplog):
        with caplog.at_level("WARNING"):
            self.patients.add({"id": "1", "name": "Second John"})
        assert len(self.patients) == 3
        assert "Duplicate id 1" in caplog.text

    def test_invalid_mapping_raises_and_keeps_state(self):
        before = self.patients.items
        with pytest.raises(InvalidEntityError) as info:
            self.patients.add({"id": "5", "name": "Bad Age", "age": "forty"})
        assert info.value.errors[0]["loc"] == ["age"]
        assert self.patients.items is before

    def test_wrong_entity_type_rejected(self):
        with pytest.raises(InvalidEntityError, match="expected Patient"):
            self.patients.add(Medicine(id="1", name="Paracetamol"))

    def test_invalid_entity_error_is_value_error(self):
        with pytest.raises(ValueError):
            self.patients.add({"id": "6", "name": ""})

    def test_loading_and_error_flags(self):
        self.patients.set_loading(True)
        self.patients.set_error("timeout")
        assert self.patients.loading is True
        assert self.patients.error == "timeout"
        self.patients.clear()
        assert len(self.patients) == 0
        assert self.patients.loading is False
        assert self.patients.error is None


def test_medicine_added_through_slice_derives_status():
    medicines = Slice("medicines", Medicine)
    medicines.add({"id": "m1", "name": "Amoxicillin 250mg", "quantity": 0, "minStockLevel": 100})
    medicines.add({"id": "m2", "name": "Paracetamol 500mg", "quantity": 50, "minStockLevel": 100})
    assert [m.status.value for m in medicines.items] == ["Out of Stock", "Low Stock"]
