"""
Error types raised by the administration core.
The REST layer maps them to HTTP status codes in main.py.
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError


class HMSError(Exception):
    """Base class for every error raised by the core."""


class InvalidEntityError(HMSError, ValueError):
    """A payload does not conform to the entity model of its collection."""

    def __init__(self, entity: str, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.entity = entity
        self.errors = errors or []
        super().__init__(f"Invalid {entity}: {message}")

    @classmethod
    def from_validation(cls, entity: str, exc: ValidationError) -> "InvalidEntityError":
        errors = [
            {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        return cls(entity, f"{exc.error_count()} field error(s)", errors)


class UnknownSliceError(HMSError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No slice named '{self.name}'"


class EntityNotFoundError(HMSError, LookupError):
    """A referenced ward, bed or record does not exist."""


class BedStateError(HMSError, ValueError):
    """Admit or discharge requested on a bed in the wrong state."""
