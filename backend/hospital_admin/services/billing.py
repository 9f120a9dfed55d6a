"""
Invoice construction and payment recording.
"""
import datetime
import re
from typing import Iterable, List, Mapping, Optional

from ..core.config import settings
from ..models.base import generate_uuid
from ..models.billing import Invoice, InvoiceItem, InvoiceStatus
from .aggregation import round_half_up

PAYMENT_TERMS_DAYS = 30


def next_invoice_number(invoices: Iterable[Invoice], year: Optional[int] = None) -> str:
    """INV-<year>-NNN, one past the highest number already issued that year."""
    year = year or datetime.date.today().year
    pattern = re.compile(rf"^INV-{year}-(\d+)$")
    matches = [pattern.match(i.invoice_number) for i in invoices]
    issued = [int(m.group(1)) for m in matches if m]
    return f"INV-{year}-{max(issued, default=0) + 1:03d}"


def build_invoice(
    invoice_number: str,
    patient_id: str,
    patient_name: str,
    items: List[Mapping],
    issued_on: Optional[datetime.date] = None,
    tax_rate: Optional[float] = None,
) -> Invoice:
    """
    Price the line items and compute subtotal, tax and total.
    Each item mapping needs description, quantity and unit_price.
    """
    issued_on = issued_on or datetime.date.today()
    tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate

    lines = []
    for item in items:
        quantity = int(item.get("quantity", 1))
        unit_price = float(item.get("unit_price", item.get("unitPrice", 0.0)))
        lines.append(
            InvoiceItem(
                description=item["description"],
                quantity=quantity,
                unit_price=unit_price,
                total=round(quantity * unit_price, 2),
            )
        )
    subtotal = round(sum(line.total for line in lines), 2)
    tax = round_half_up(subtotal * tax_rate)
    return Invoice(
        id=generate_uuid(),
        invoice_number=invoice_number,
        patient_id=patient_id,
        patient_name=patient_name,
        date=issued_on,
        due_date=issued_on + datetime.timedelta(days=PAYMENT_TERMS_DAYS),
        items=tuple(lines),
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


def record_payment(
    invoice: Invoice, payment_method: str, on: Optional[datetime.date] = None
) -> Invoice:
    if invoice.status == InvoiceStatus.CANCELLED:
        raise ValueError(f"Invoice {invoice.invoice_number} is cancelled")
    return invoice.model_copy(
        update={
            "status": InvoiceStatus.PAID,
            "payment_method": payment_method,
            "paid_date": on or datetime.date.today(),
        }
    )


def days_overdue(invoice: Invoice, today: Optional[datetime.date] = None) -> int:
    if invoice.status != InvoiceStatus.OVERDUE or invoice.due_date is None:
        return 0
    return max(((today or datetime.date.today()) - invoice.due_date).days, 0)
