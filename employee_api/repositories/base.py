from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from employee_api.core.exceptions import ConflictError, NotFoundError, StoreError
from employee_api.db.models import Entity, utcnow
from employee_api.db.store import RecordStore

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)

# Never taken from a caller-supplied payload
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass
class Page(Generic[EntityT]):
    """One page of a filtered collection plus the counts needed to page through it."""

    items: List[EntityT]
    page: int
    per_page: int
    total: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = -(-self.total // self.per_page)


def _matches(entity: Entity, term: str, fields: Sequence[str]) -> bool:
    for name in fields:
        value = getattr(entity, name, None)
        if value is not None and term in str(value).lower():
            return True
    return False


def _next_timestamp(previous: datetime) -> datetime:
    now = utcnow()
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class BaseRepository(Generic[EntityT]):
    """
    Typed CRUD over a record store.

    Every operation loads the whole collection, works on it in memory and, for
    writes, saves it back wholesale. Nothing is cached between calls.

    Subclasses set:
      model: the Entity subclass stored in the collection
      unique_fields: attributes that must be unique across the collection
      search_fields: attributes scanned by the free-text search
    """

    model: Type[EntityT]
    entity_name: str = "Record"
    unique_fields: Tuple[str, ...] = ()
    search_fields: Tuple[str, ...] = ()

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    # Loading and saving

    def _load(self) -> List[EntityT]:
        records = self.store.load()
        try:
            return [self.model.model_validate(doc) for doc in records]
        except PydanticValidationError as exc:
            logger.error("Malformed %s record in store: %s", self.entity_name, exc)
            raise StoreError(f"Malformed {self.entity_name.lower()} record in store") from exc

    def _save(self, entities: Sequence[EntityT]) -> None:
        self.store.save([e.to_document() for e in entities])

    # Queries

    def find_all(
        self,
        *,
        search: str = "",
        page: int = 1,
        per_page: int = 10,
        predicate: Optional[Callable[[EntityT], bool]] = None,
    ) -> Page[EntityT]:
        """
        Filter by a case-insensitive substring across search_fields (any field
        may match) and an optional predicate, then return the requested page.
        """
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be >= 1")

        entities = self._load()
        if predicate is not None:
            entities = [e for e in entities if predicate(e)]
        if search:
            term = search.lower()
            entities = [e for e in entities if _matches(e, term, self.search_fields)]

        offset = (page - 1) * per_page
        return Page(
            items=entities[offset:offset + per_page],
            page=page,
            per_page=per_page,
            total=len(entities),
        )

    def find_by(self, field_name: str, value: Any) -> Optional[EntityT]:
        """First record whose attribute equals value exactly, or None."""
        for entity in self._load():
            if getattr(entity, field_name) == value:
                return entity
        return None

    def find_by_id(self, entity_id: str) -> Optional[EntityT]:
        return self.find_by("id", entity_id)

    def count(self) -> int:
        """Size of the full collection, ignoring any filter."""
        return len(self.store.load())

    # Writes

    def _check_unique(
        self,
        entities: Sequence[EntityT],
        values: Mapping[str, Any],
        exclude_id: Optional[str] = None,
    ) -> None:
        for name in self.unique_fields:
            value = values.get(name)
            if value is None:
                continue
            for other in entities:
                if other.id != exclude_id and getattr(other, name) == value:
                    raise ConflictError(
                        f"{name.replace('_', ' ').capitalize()} already exists", field=name
                    )

    def _new_id(self) -> str:
        return str(uuid4())

    def create(self, data: Mapping[str, Any]) -> EntityT:
        """
        Append a new record built from data.

        Raises:
            ConflictError: a unique field value is already taken.
        """
        entities = self._load()
        self._check_unique(entities, data)

        now = utcnow()
        values = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        entity = self.model.model_validate(
            {**values, "id": self._new_id(), "created_at": now, "updated_at": now}
        )
        entities.append(entity)
        self._save(entities)
        logger.info("Created %s %s", self.entity_name.lower(), entity.id)
        return entity

    def update(self, entity_id: str, changes: Mapping[str, Any]) -> EntityT:
        """
        Merge changes over an existing record and refresh updated_at.

        Raises:
            NotFoundError: no record has entity_id.
            ConflictError: a changed unique value belongs to a different record.
        """
        entities = self._load()
        index = next((i for i, e in enumerate(entities) if e.id == entity_id), None)
        if index is None:
            raise NotFoundError(f"{self.entity_name} not found")

        self._check_unique(entities, changes, exclude_id=entity_id)

        current = entities[index]
        merged = current.model_dump()
        merged.update({k: v for k, v in changes.items() if k not in PROTECTED_FIELDS})
        merged["updated_at"] = _next_timestamp(current.updated_at)
        entities[index] = self.model.model_validate(merged)
        self._save(entities)
        logger.info("Updated %s %s", self.entity_name.lower(), entity_id)
        return entities[index]

    def delete(self, entity_id: str) -> None:
        """
        Remove a record permanently.

        Raises:
            NotFoundError: no record has entity_id.
        """
        entities = self._load()
        remaining = [e for e in entities if e.id != entity_id]
        if len(remaining) == len(entities):
            raise NotFoundError(f"{self.entity_name} not found")
        self._save(remaining)
        logger.info("Deleted %s %s", self.entity_name.lower(), entity_id)
