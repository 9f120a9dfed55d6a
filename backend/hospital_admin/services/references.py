"""
Cross-collection reference checks.

Appointments, prescriptions, invoices and lab orders carry a copy of the
patient's (and doctor's) id and name taken when they were created. Nothing
keeps those copies in sync, so these helpers report ids that no longer
resolve and names that have drifted from the current record.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, TypeVar

from ..models.base import EntityModel
from ..store.store import StoreSnapshot

T = TypeVar("T", bound=EntityModel)


@dataclass(frozen=True)
class ReferenceIssue:
    collection: str
    record_id: str
    field: str
    referenced_id: str
    copied_name: Optional[str] = None
    current_name: Optional[str] = None


def find_by_id(items: Iterable[T], item_id: str) -> Optional[T]:
    return next((item for item in items if item.id == item_id), None)


def _referencing(snapshot: StoreSnapshot):
    """(collection name, records, has doctor reference)"""
    return [
        ("appointments", snapshot.appointments, True),
        ("prescriptions", snapshot.prescriptions, True),
        ("lab_orders", snapshot.lab_orders, True),
        ("invoices", snapshot.invoices, False),
    ]


def _check(
    collection: str,
    record,
    role: str,
    targets: Sequence[EntityModel],
    drift_only: bool,
) -> Optional[ReferenceIssue]:
    ref_id = getattr(record, f"{role}_id")
    copied = getattr(record, f"{role}_name")
    target = find_by_id(targets, ref_id)
    if target is None:
        if drift_only:
            return None
        return ReferenceIssue(collection, record.id, f"{role}_id", ref_id, copied)
    if drift_only and target.name != copied:
        return ReferenceIssue(collection, record.id, f"{role}_name", ref_id, copied, target.name)
    return None


def _scan(snapshot: StoreSnapshot, drift_only: bool) -> List[ReferenceIssue]:
    issues = []
    for collection, records, has_doctor in _referencing(snapshot):
        for record in records:
            roles = [("patient", snapshot.patients)]
            if has_doctor:
                roles.append(("doctor", snapshot.doctors))
            for role, targets in roles:
                issue = _check(collection, record, role, targets, drift_only)
                if issue is not None:
                    issues.append(issue)
    return issues


def dangling_references(snapshot: StoreSnapshot) -> List[ReferenceIssue]:
    """Records whose patient_id / doctor_id matches no current record."""
    return _scan(snapshot, drift_only=False)


def name_drift(snapshot: StoreSnapshot) -> List[ReferenceIssue]:
    """Records whose copied name differs from the referenced record's current name."""
    return _scan(snapshot, drift_only=True)
