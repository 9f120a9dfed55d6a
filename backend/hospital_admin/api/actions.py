"""
State-transition endpoints that sit beside the generic collection routes:
appointment completion, prescription dispensing, payments, lab results and
attendance marking.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..models.appointment import Appointment
from ..models.billing import Invoice, InvoiceStatus
from ..models.laboratory import LabOrder
from ..models.pharmacy import Prescription
from ..models.staff import Attendance
from ..services.billing import days_overdue, record_payment
from ..services.laboratory import record_result
from ..services.pharmacy import dispense_prescription
from ..services.scheduling import cancel_appointment, complete_appointment
from ..services.staff import mark_attendance
from ..store.store import AppStore
from .deps import get_store
from .schemas import AttendanceRequest, LabResultRequest, OverdueInvoice, PaymentRequest

router = APIRouter(tags=["actions"])


def _get_or_404(store: AppStore, slice_name: str, item_id: str, label: str):
    item = store.slice(slice_name).get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return item


def _apply(store: AppStore, slice_name: str, transition, *args):
    try:
        updated = transition(*args)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    store.slice(slice_name).update(updated)
    return updated.to_json()


@router.post("/appointments/{appointment_id}/complete", response_model=Appointment)
def complete(appointment_id: str, store: AppStore = Depends(get_store)):
    appointment = _get_or_404(store, "appointments", appointment_id, "Appointment")
    return _apply(store, "appointments", complete_appointment, appointment)


@router.post("/appointments/{appointment_id}/cancel", response_model=Appointment)
def cancel(appointment_id: str, store: AppStore = Depends(get_store)):
    appointment = _get_or_404(store, "appointments", appointment_id, "Appointment")
    return _apply(store, "appointments", cancel_appointment, appointment)


@router.post("/prescriptions/{prescription_id}/dispense", response_model=Prescription)
def dispense(prescription_id: str, store: AppStore = Depends(get_store)):
    """Mark a prescription dispensed. Medicine stock is not decremented."""
    prescription = _get_or_404(store, "prescriptions", prescription_id, "Prescription")
    return _apply(store, "prescriptions", dispense_prescription, prescription)


@router.post("/invoices/{invoice_id}/pay", response_model=Invoice)
def pay(invoice_id: str, body: PaymentRequest, store: AppStore = Depends(get_store)):
    invoice = _get_or_404(store, "invoices", invoice_id, "Invoice")
    return _apply(store, "invoices", record_payment, invoice, body.payment_method)


@router.post("/lab-orders/{order_id}/results", response_model=LabOrder)
def add_result(order_id: str, body: LabResultRequest, store: AppStore = Depends(get_store)):
    order = _get_or_404(store, "lab_orders", order_id, "Lab order")
    return _apply(store, "lab_orders", record_result, order, body.test_id, body.result)


@router.post("/staff/{member_id}/attendance", response_model=Attendance, status_code=201)
def add_attendance(member_id: str, body: AttendanceRequest, store: AppStore = Depends(get_store)):
    member = _get_or_404(store, "staff", member_id, "Staff member")
    return store.attendance.add(mark_attendance(member, body.status)).to_json()


@router.get("/invoices/overdue", response_model=List[OverdueInvoice])
def overdue_invoices(store: AppStore = Depends(get_store)):
    """Overdue invoices, longest outstanding first."""
    overdue = [
        OverdueInvoice(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            patient_id=invoice.patient_id,
            patient_name=invoice.patient_name,
            total=invoice.total,
            due_date=invoice.due_date,
            days_overdue=days_overdue(invoice),
        )
        for invoice in store.invoices.items
        if invoice.status == InvoiceStatus.OVERDUE
    ]
    return sorted(overdue, key=lambda item: item.days_overdue, reverse=True)
