"""
Application state container.

One ``AppStore`` is created per application (or per test) and handed to
whoever needs it; there is no module-level store instance.
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from ..core.exceptions import UnknownSliceError
from ..models.appointment import Appointment
from ..models.billing import Invoice
from ..models.doctor import Doctor
from ..models.laboratory import LabOrder, LabTest
from ..models.patient import Patient
from ..models.pharmacy import Medicine, Prescription
from ..models.staff import Attendance, StaffMember
from ..models.ward import Ward
from .slice import Slice

SLICE_MODELS = {
    "patients": Patient,
    "appointments": Appointment,
    "doctors": Doctor,
    "medicines": Medicine,
    "prescriptions": Prescription,
    "invoices": Invoice,
    "lab_tests": LabTest,
    "lab_orders": LabOrder,
    "wards": Ward,
    "staff": StaffMember,
    "attendance": Attendance,
}


class ActionType(str, Enum):
    SET_ALL = "set_all"
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    SET_LOADING = "set_loading"
    SET_ERROR = "set_error"


@dataclass(frozen=True)
class Action:
    slice: str
    type: ActionType
    payload: Any = None


@dataclass(frozen=True)
class StoreSnapshot:
    """Every collection as it was at one instant."""
    patients: Tuple[Patient, ...] = ()
    appointments: Tuple[Appointment, ...] = ()
    doctors: Tuple[Doctor, ...] = ()
    medicines: Tuple[Medicine, ...] = ()
    prescriptions: Tuple[Prescription, ...] = ()
    invoices: Tuple[Invoice, ...] = ()
    lab_tests: Tuple[LabTest, ...] = ()
    lab_orders: Tuple[LabOrder, ...] = ()
    wards: Tuple[Ward, ...] = ()
    staff: Tuple[StaffMember, ...] = ()
    attendance: Tuple[Attendance, ...] = ()


class AppStore:
    def __init__(self):
        self._slices: Dict[str, Slice] = {
            name: Slice(name, model) for name, model in SLICE_MODELS.items()
        }

    def __getattr__(self, name: str) -> Slice:
        slices = self.__dict__.get("_slices", {})
        if name in slices:
            return slices[name]
        raise AttributeError(name)

    def __iter__(self) -> Iterator[Slice]:
        return iter(self._slices.values())

    def slice(self, name: str) -> Slice:
        try:
            return self._slices[name]
        except KeyError:
            raise UnknownSliceError(name) from None

    def dispatch(self, action: Action) -> Any:
        """
        Apply one action to its slice and return the slice's result
        (the new entity for ADD, a bool for UPDATE/DELETE).
        """
        target = self.slice(action.slice)
        if action.type == ActionType.SET_ALL:
            return target.set_all(action.payload or ())
        if action.type == ActionType.ADD:
            return target.add(action.payload)
        if action.type == ActionType.UPDATE:
            return target.update(action.payload)
        if action.type == ActionType.DELETE:
            return target.delete(action.payload)
        if action.type == ActionType.SET_LOADING:
            return target.set_loading(action.payload)
        if action.type == ActionType.SET_ERROR:
            return target.set_error(action.payload)
        raise ValueError(f"Unsupported action type: {action.type}")

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(**{f.name: self._slices[f.name].items for f in fields(StoreSnapshot)})

    def is_empty(self) -> bool:
        return all(len(s) == 0 for s in self._slices.values())

    def reset(self) -> None:
        for s in self._slices.values():
            s.clear()


def create_store(seed: Optional[bool] = None) -> AppStore:
    """
    Build a fresh store. ``seed=None`` defers to settings.DEV_FIXTURES_ENABLED;
    True/False force fixtures on or off.
    """
    store = AppStore()
    if seed is None or seed:
        from ..seed_demo import seed_demo_data
        seed_demo_data(store, force=bool(seed))
    return store
