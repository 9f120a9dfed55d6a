import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import Field, computed_field

from .base import EntityModel


class BedStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    RESERVED = "Reserved"


class WardType:
    GENERAL = "General"
    ICU = "ICU"
    EMERGENCY = "Emergency"
    MATERNITY = "Maternity"
    PEDIATRIC = "Pediatric"
    SURGERY = "Surgery"

    ALL = [GENERAL, ICU, EMERGENCY, MATERNITY, PEDIATRIC, SURGERY]


class Bed(EntityModel):
    bed_number: str
    ward_id: str
    status: BedStatus = BedStatus.AVAILABLE
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    admission_date: Optional[datetime.date] = None
    bed_type: str = WardType.GENERAL


class Ward(EntityModel):
    name: str = Field(min_length=1)
    type: str = WardType.GENERAL
    beds: Tuple[Bed, ...] = ()

    # Bed counters are derived from the bed list so they cannot disagree
    # with it after an admission or discharge.
    @computed_field
    @property
    def total_beds(self) -> int:
        return len(self.beds)

    @computed_field
    @property
    def occupied_beds(self) -> int:
        return self._count(BedStatus.OCCUPIED)

    @computed_field
    @property
    def available_beds(self) -> int:
        return self._count(BedStatus.AVAILABLE)

    @computed_field
    @property
    def maintenance_beds(self) -> int:
        return self._count(BedStatus.MAINTENANCE)

    def _count(self, status: BedStatus) -> int:
        return sum(1 for bed in self.beds if bed.status == status)

    def find_bed(self, bed_id: str) -> Optional[Bed]:
        return next((bed for bed in self.beds if bed.id == bed_id), None)
