"""
Laboratory orders: pricing, numbering and result entry.
"""
import datetime
import re
from typing import Iterable, Optional

from ..models.laboratory import LabOrder, LabOrderStatus, LabTest, OrderedTest, OrderedTestStatus


def next_order_number(orders: Iterable[LabOrder], year: Optional[int] = None) -> str:
    year = year or datetime.date.today().year
    pattern = re.compile(rf"^LAB-{year}-(\d+)$")
    matches = [pattern.match(o.order_number) for o in orders]
    issued = [int(m.group(1)) for m in matches if m]
    return f"LAB-{year}-{max(issued, default=0) + 1:03d}"


def order_total(tests: Iterable[OrderedTest], catalogue: Iterable[LabTest]) -> float:
    prices = {t.id: t.price for t in catalogue}
    return sum(prices.get(t.test_id, 0.0) for t in tests)


def record_result(order: LabOrder, test_id: str, result: str) -> LabOrder:
    """
    Store a result for one test of the order. The order moves to In Progress,
    and to Completed once every test has a result.
    """
    if not any(t.test_id == test_id for t in order.tests):
        raise ValueError(f"Test {test_id} is not part of order {order.order_number}")

    tests = tuple(
        t.model_copy(update={"result": result, "status": OrderedTestStatus.COMPLETED})
        if t.test_id == test_id
        else t
        for t in order.tests
    )
    done = all(t.status == OrderedTestStatus.COMPLETED for t in tests)
    return order.model_copy(
        update={
            "tests": tests,
            "sample_collected": True,
            "status": LabOrderStatus.COMPLETED if done else LabOrderStatus.IN_PROGRESS,
        }
    )
