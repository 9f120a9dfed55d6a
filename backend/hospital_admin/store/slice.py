"""
Copy-on-write entity collections.

The module-level reducers are pure: they take a snapshot (a tuple) and
return a new tuple, leaving the input untouched. ``Slice`` holds the
current snapshot of one entity type and publishes each new snapshot in a
single assignment, so readers always see a complete collection.
"""
import logging
from typing import Any, Generic, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import ValidationError

from ..core.exceptions import InvalidEntityError
from ..models.base import EntityModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=EntityModel)

Snapshot = Tuple[T, ...]


# ── reducers ─────────────────────────────────────────────────────────────────

def set_all(items: Snapshot, new_items: Iterable[T]) -> Snapshot:
    return tuple(new_items)


def add(items: Snapshot, item: T) -> Snapshot:
    return items + (item,)


def update(items: Snapshot, item: T) -> Snapshot:
    """Replace the element with the same id. No match leaves the contents as they were."""
    return tuple(item if existing.id == item.id else existing for existing in items)


def delete(items: Snapshot, item_id: str) -> Snapshot:
    return tuple(existing for existing in items if existing.id != item_id)


# ── state holder ─────────────────────────────────────────────────────────────

class Slice(Generic[T]):
    """
    State for one entity type: the ordered snapshot plus loading/error flags.

    Mappings passed to add/update/set_all are validated into ``model``;
    anything that does not conform raises InvalidEntityError and the
    snapshot is left unchanged.
    """

    def __init__(self, name: str, model: Type[T]):
        self.name = name
        self.model = model
        self._items: Snapshot = ()
        self.loading: bool = False
        self.error: Optional[str] = None

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<Slice {self.name} items={len(self._items)}>"

    @property
    def items(self) -> Snapshot:
        return self._items

    def validate(self, payload: Union[T, Mapping[str, Any]]) -> T:
        if isinstance(payload, self.model):
            return payload
        if isinstance(payload, Mapping):
            try:
                return self.model.model_validate(dict(payload))
            except ValidationError as exc:
                raise InvalidEntityError.from_validation(self.model.__name__, exc) from exc
        raise InvalidEntityError(
            self.model.__name__, f"expected {self.model.__name__} or mapping, got {type(payload).__name__}"
        )

    def get(self, item_id: str) -> Optional[T]:
        return next((item for item in self._items if item.id == item_id), None)

    def set_all(self, items: Iterable[Union[T, Mapping[str, Any]]]) -> Snapshot:
        validated = [self.validate(item) for item in items]
        self._items = set_all(self._items, validated)
        return self._items

    def add(self, item: Union[T, Mapping[str, Any]]) -> T:
        entity = self.validate(item)
        if self.get(entity.id) is not None:
            logger.warning("Duplicate id %s added to %s", entity.id, self.name)
        self._items = add(self._items, entity)
        return entity

    def update(self, item: Union[T, Mapping[str, Any]]) -> bool:
        """Returns False (and changes nothing) when no element has the item's id."""
        entity = self.validate(item)
        if self.get(entity.id) is None:
            return False
        self._items = update(self._items, entity)
        return True

    def delete(self, item_id: str) -> bool:
        """Returns False (and changes nothing) when the id is absent."""
        remaining = delete(self._items, item_id)
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        return True

    def set_loading(self, loading: bool) -> None:
        self.loading = bool(loading)

    def set_error(self, error: Optional[str]) -> None:
        self.error = error

    def clear(self) -> None:
        self._items = ()
        self.loading = False
        self.error = None
