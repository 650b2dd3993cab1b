"""Shared record-store data access helpers."""

from __future__ import annotations

import copy
import json
import threading
from collections.abc import Callable, Iterable
from typing import Any, Generic, Protocol, TypeVar

from postgrest import APIError
from pydantic import BaseModel

from app.utils.errors import ForbiddenError, InvalidInputError, NotFoundError
from app.utils.time import now_utc
from supabase import Client

ModelT = TypeVar("ModelT", bound=BaseModel)

ROLE_ORGANIZATION = "organization"
ROLE_RESIDENT = "resident"


class RecordStore(Protocol):
    """Namespace-keyed store holding one whole collection per namespace."""

    def load(self, namespace: str, defaults: Any) -> Any:
        """Return the persisted collection, or a copy of ``defaults`` when absent."""

    def save(self, namespace: str, collection: Any) -> None:
        """Replace the whole collection stored under ``namespace``."""


class MemoryRecordStore:
    """In-process store; collections are kept as JSON text so reads never alias."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def load(self, namespace: str, defaults: Any) -> Any:
        with self._lock:
            raw = self._data.get(namespace)
        if raw is None:
            return copy.deepcopy(defaults)
        return json.loads(raw)

    def save(self, namespace: str, collection: Any) -> None:
        encoded = json.dumps(collection, default=str)
        with self._lock:
            self._data[namespace] = encoded

    def has(self, namespace: str) -> bool:
        """Return True when ``namespace`` has been written."""
        with self._lock:
            return namespace in self._data

class SupabaseRecordStore:
    """Record store backed by one Supabase row per namespace."""

    def __init__(self, client: Client, table: str = "record_collections") -> None:
        self.client = client
        self.table = table

    def _execute(self, query) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as exc:
            message = getattr(exc, "message", "Database request failed")
            raise InvalidInputError(str(message)) from exc
        return response.data or []

    def load(self, namespace: str, defaults: Any) -> Any:
        rows = self._execute(
            self.client.table(self.table).select("payload").eq("namespace", namespace).limit(1)
        )
        if not rows or rows[0].get("payload") is None:
            return copy.deepcopy(defaults)
        return rows[0]["payload"]

    def save(self, namespace: str, collection: Any) -> None:
        payload = json.loads(json.dumps(collection, default=str))
        self._execute(
            self.client.table(self.table).upsert(
                {
                    "namespace": namespace,
                    "payload": payload,
                    "updated_at": now_utc().isoformat(),
                },
                on_conflict="namespace",
            )
        )


class Repository(Generic[ModelT]):
    """Typed view over one namespace holding a list of records."""

    def __init__(
        self,
        store: RecordStore,
        namespace: str,
        model: type[ModelT],
        defaults: Iterable[ModelT] | Callable[[], Iterable[ModelT]] = (),
        label: str | None = None,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.model = model
        self._defaults = defaults
        self.label = label or model.__name__

    def _default_rows(self) -> list[dict[str, Any]]:
        defaults = self._defaults() if callable(self._defaults) else self._defaults
        return [item.model_dump(mode="json") for item in defaults]

    def all(self) -> list[ModelT]:
        """Return every record in stored order."""
        rows = self.store.load(self.namespace, self._default_rows())
        return [self.model.model_validate(row) for row in rows]

    def save_all(self, items: Iterable[ModelT]) -> None:
        """Persist the full collection."""
        self.store.save(self.namespace, [item.model_dump(mode="json") for item in items])

    def ensure_seeded(self) -> list[ModelT]:
        """Return all records, writing the default seed if nothing is stored yet."""
        items = self.all()
        self.save_all(items)
        return items

    def find(self, record_id: str) -> ModelT | None:
        """Return one record by id or None."""
        for item in self.all():
            if getattr(item, "id") == record_id:
                return item
        return None

    def get(self, record_id: str) -> ModelT:
        """Return one record by id and raise NotFoundError when missing."""
        item = self.find(record_id)
        if item is None:
            raise NotFoundError(self.label)
        return item

    def insert_first(self, item: ModelT) -> ModelT:
        """Store a new record at the head of the collection."""
        self.save_all([item, *self.all()])
        return item

    def append(self, item: ModelT) -> ModelT:
        """Store a new record at the tail of the collection."""
        self.save_all([*self.all(), item])
        return item

    def replace(self, item: ModelT) -> ModelT:
        """Overwrite the record sharing ``item.id``."""
        items = self.all()
        for index, existing in enumerate(items):
            if getattr(existing, "id") == getattr(item, "id"):
                items[index] = item
                self.save_all(items)
                return item
        raise NotFoundError(self.label)

    def remove(self, record_id: str) -> None:
        """Physically delete one record."""
        items = self.all()
        kept = [item for item in items if getattr(item, "id") != record_id]
        if len(kept) == len(items):
            raise NotFoundError(self.label)
        self.save_all(kept)


def is_organization(user: Any) -> bool:
    """Return True for administrator accounts."""
    return getattr(user, "role", None) == ROLE_ORGANIZATION


def ensure_organization(user: Any, reason: str) -> None:
    """Raise ForbiddenError unless ``user`` is an administrator."""
    if not is_organization(user):
        raise ForbiddenError(reason)


def ensure_same_region(user: Any, region: str, reason: str) -> None:
    """Raise ForbiddenError when ``region`` is outside the actor's region."""
    if getattr(user, "region", None) != region:
        raise ForbiddenError(reason)
