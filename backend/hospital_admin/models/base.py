import random
import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def generate_uuid() -> str:
    return str(uuid.uuid4())


def generate_patient_code(year: Optional[int] = None) -> str:
    """Human-readable patient code, e.g. HMS-2024-001234."""
    year = year or date.today().year
    return f"HMS-{year}-{random.randint(0, 999999):06d}"


class EntityModel(BaseModel):
    """
    Base for every stored record.

    Records are frozen so a published snapshot can never change under a
    reader; edits go through ``model_copy(update=...)``. JSON uses the
    camelCase names of the dashboard (patientId, minStockLevel, ...).
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    id: str

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
