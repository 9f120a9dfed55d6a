import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import EntityModel


class OrderedTestStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class LabOrderStatus(str, Enum):
    ORDERED = "Ordered"
    SAMPLE_COLLECTED = "Sample Collected"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    REPORTED = "Reported"


class LabPriority(str, Enum):
    NORMAL = "Normal"
    URGENT = "Urgent"
    STAT = "STAT"


class LabTest(EntityModel):
    """Catalogue entry."""
    test_code: str = Field(min_length=1)
    test_name: str = Field(min_length=1)
    category: str = ""
    price: float = Field(default=0.0, ge=0)
    normal_range: str = ""
    unit: str = ""
    description: str = ""


class OrderedTest(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    test_id: str
    test_name: str
    result: Optional[str] = None
    status: OrderedTestStatus = OrderedTestStatus.PENDING


class LabOrder(EntityModel):
    order_number: str
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    tests: Tuple[OrderedTest, ...] = ()
    order_date: datetime.date = Field(default_factory=datetime.date.today)
    sample_collected: bool = False
    status: LabOrderStatus = LabOrderStatus.ORDERED
    priority: LabPriority = LabPriority.NORMAL
    total_amount: float = Field(default=0.0, ge=0)
