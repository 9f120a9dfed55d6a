"""
Generic collection endpoints: list/search, get, create, update, delete.

Each resource is backed by one store slice. Payloads are validated by the
slice's entity model; invalid payloads surface as 422 through the
InvalidEntityError handler registered in main.py.
"""
from typing import Any, Callable, Dict, List, Optional, Type

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import BaseModel, ValidationError

from ..core.exceptions import InvalidEntityError
from ..models.base import generate_patient_code, generate_uuid
from ..models.laboratory import OrderedTest
from ..models.pharmacy import PrescribedMedicine
from ..services.aggregation import search_collection
from ..services.billing import build_invoice, next_invoice_number
from ..services.laboratory import next_order_number, order_total
from ..services.pharmacy import prescription_total
from ..services.staff import next_employee_id
from ..store.store import SLICE_MODELS, AppStore
from .deps import get_store

Payload = Dict[str, Any]
CreateHook = Callable[[AppStore, Payload], Payload]


def to_aliases(model: Type[BaseModel], payload: Payload) -> Payload:
    """Rename snake_case field names to the camelCase aliases the model stores."""
    aliases = {name: field.alias or name for name, field in model.model_fields.items()}
    return {aliases.get(key, key): value for key, value in payload.items()}


def _validate_lines(entity: str, model: Type[BaseModel], lines) -> List[Any]:
    try:
        return [model.model_validate(line) for line in lines or []]
    except ValidationError as exc:
        raise InvalidEntityError.from_validation(entity, exc) from exc


def _new_patient(store: AppStore, payload: Payload) -> Payload:
    return {"patientId": generate_patient_code(), **payload, "status": "Active"}


def _new_appointment(store: AppStore, payload: Payload) -> Payload:
    return {**payload, "status": payload.get("status", "Scheduled")}


def _new_doctor(store: AppStore, payload: Payload) -> Payload:
    return {**payload, "status": "Active"}


def _new_prescription(store: AppStore, payload: Payload) -> Payload:
    lines = _validate_lines("Prescription", PrescribedMedicine, payload.get("medicines"))
    return {**payload, "totalAmount": prescription_total(lines, store.medicines.items)}


def _new_invoice(store: AppStore, payload: Payload) -> Payload:
    """Number and price the invoice server-side; client totals are ignored."""
    if not payload.get("patientId") or not payload.get("patientName"):
        raise InvalidEntityError("Invoice", "patientId and patientName are required")
    try:
        invoice = build_invoice(
            next_invoice_number(store.invoices.items),
            payload["patientId"],
            payload["patientName"],
            payload.get("items") or [],
        )
    except ValidationError as exc:
        raise InvalidEntityError.from_validation("Invoice", exc) from exc
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidEntityError("Invoice", f"malformed line item: {exc}") from exc
    return {**payload, **invoice.to_json()}


def _new_lab_order(store: AppStore, payload: Payload) -> Payload:
    tests = _validate_lines("LabOrder", OrderedTest, payload.get("tests"))
    return {
        **payload,
        "orderNumber": next_order_number(store.lab_orders.items),
        "totalAmount": order_total(tests, store.lab_tests.items),
    }


def _new_staff_member(store: AppStore, payload: Payload) -> Payload:
    return {"employeeId": next_employee_id(store.staff.items), **payload}


# (url segment, slice name, create hook)
RESOURCES = [
    ("patients", "patients", _new_patient),
    ("appointments", "appointments", _new_appointment),
    ("doctors", "doctors", _new_doctor),
    ("medicines", "medicines", None),
    ("prescriptions", "prescriptions", _new_prescription),
    ("invoices", "invoices", _new_invoice),
    ("lab-tests", "lab_tests", None),
    ("lab-orders", "lab_orders", _new_lab_order),
    ("staff", "staff", _new_staff_member),
    ("attendance", "attendance", None),
]


def build_resource_router(
    segment: str, slice_name: str, on_create: Optional[CreateHook] = None
) -> APIRouter:
    router = APIRouter(prefix=f"/{segment}", tags=[segment])
    model = SLICE_MODELS[slice_name]
    label = slice_name.replace("_", " ").rstrip("s").capitalize() or slice_name

    def _get_or_404(store: AppStore, item_id: str):
        item = store.slice(slice_name).get(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    @router.get("/", response_model=List[model])
    def list_items(q: Optional[str] = None, store: AppStore = Depends(get_store)):
        items = search_collection(slice_name, store.slice(slice_name).items, q)
        return [item.to_json() for item in items]

    @router.get("/{item_id}", response_model=model)
    def get_item(item_id: str, store: AppStore = Depends(get_store)):
        return _get_or_404(store, item_id).to_json()

    @router.post("/", response_model=model, status_code=status.HTTP_201_CREATED)
    def create_item(payload: Payload = Body(...), store: AppStore = Depends(get_store)):
        data = to_aliases(model, payload)
        if on_create:
            data = on_create(store, data)
        data["id"] = generate_uuid()
        return store.slice(slice_name).add(data).to_json()

    @router.put("/{item_id}", response_model=model)
    def update_item(item_id: str, payload: Payload = Body(...), store: AppStore = Depends(get_store)):
        existing = _get_or_404(store, item_id)
        merged = {**existing.to_json(), **to_aliases(model, payload), "id": item_id}
        target = store.slice(slice_name)
        target.update(merged)
        return target.get(item_id).to_json()

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_item(item_id: str, store: AppStore = Depends(get_store)):
        if not store.slice(slice_name).delete(item_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def build_resource_routers():
    return [build_resource_router(*resource) for resource in RESOURCES]
