"""In-process document backend.

Mirrors the MongoDB backend's semantics (filter subset, unique indexes, atomic
find-and-modify) without a server. Each operation runs to completion without
yielding to the event loop between its check and its write, which gives the same
per-operation atomicity MongoDB provides. Used for local development and tests.
"""

import copy
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Type

from beanie import PydanticObjectId
from bson import ObjectId

from clipnest.database.backends.odm_backend import ClipnestODMBackend, Query, SortSpec, T
from clipnest.database.exceptions import DocumentNotFoundError, DuplicateInsertError

_MISSING = object()


def _field_matches(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for op, arg in condition.items():
            if op == "$in":
                if isinstance(value, list):
                    if not any(item in arg for item in value):
                        return False
                elif value is _MISSING or value not in arg:
                    return False
            elif op == "$ne":
                if _field_matches(value, arg):
                    return False
            elif op == "$exists":
                if (value is not _MISSING) != bool(arg):
                    return False
            else:
                raise ValueError(f"Unsupported query operator: {op}")
        return True

    if value is _MISSING:
        return condition is None
    if isinstance(value, list) and not isinstance(condition, list):
        return condition in value
    return value == condition


def matches(doc: Dict[str, Any], query: Optional[Query]) -> bool:
    """Evaluate a MongoDB-style filter against a stored document."""
    for key, condition in (query or {}).items():
        if key == "$or":
            if not any(matches(doc, sub) for sub in condition):
                return False
            continue
        if not _field_matches(doc.get(key, _MISSING), condition):
            return False
    return True


def _sort_key(value: Any):
    # None sorts first, like MongoDB's ascending order for null/missing.
    return (value is not None, value)


class MemoryStore:
    """Holds the collections shared by every :class:`MemoryODMBackend` of one app."""

    def __init__(self) -> None:
        self.collections: Dict[str, "OrderedDict[ObjectId, Dict[str, Any]]"] = {}

    def collection(self, name: str) -> "OrderedDict[ObjectId, Dict[str, Any]]":
        return self.collections.setdefault(name, OrderedDict())

    def clear(self) -> None:
        self.collections.clear()


class MemoryODMBackend(ClipnestODMBackend[T]):
    """In-memory implementation of the clipnest ODM backend.

    Args:
        model_cls (Type[T]): The document model class to use for operations.
        store (MemoryStore): Store shared across the app's backends.
    """

    def __init__(self, model_cls: Type[T], store: Optional[MemoryStore] = None):
        super().__init__(model_cls)
        self.store = store or MemoryStore()

    @property
    def _docs(self) -> "OrderedDict[ObjectId, Dict[str, Any]]":
        return self.store.collection(self.model_cls.collection_name())

    async def initialize(self) -> None:
        self.store.collection(self.model_cls.collection_name())

    def _to_model(self, raw: Dict[str, Any]) -> T:
        return self.model_cls.from_storage(copy.deepcopy(raw))

    def _check_unique(self, candidate: Dict[str, Any], exclude_id: Optional[ObjectId] = None) -> None:
        for spec in self.model_cls.index_specs():
            if not spec.unique:
                continue
            key = tuple(candidate.get(field) for field in spec.fields)
            for doc_id, existing in self._docs.items():
                if doc_id == exclude_id:
                    continue
                if tuple(existing.get(field) for field in spec.fields) == key:
                    raise DuplicateInsertError(f"Duplicate key error: index {spec.name} dup key {key}")

    def _first_match(self, query: Optional[Query]) -> Optional[Dict[str, Any]]:
        for raw in self._docs.values():
            if matches(raw, query):
                return raw
        return None

    async def insert(self, obj: T) -> T:
        data = copy.deepcopy(obj.to_storage())
        doc_id = data.get("_id") or ObjectId()
        if doc_id in self._docs:
            raise DuplicateInsertError(f"Duplicate key error: _id {doc_id}")
        data["_id"] = doc_id
        self._check_unique(data)
        self._docs[doc_id] = data
        obj.id = PydanticObjectId(doc_id)
        return obj

    async def get(self, id: Any) -> T:
        raw = self._docs.get(id)
        if raw is None:
            raise DocumentNotFoundError(f"Object with id {id} not found")
        return self._to_model(raw)

    async def find_one(self, query: Query) -> Optional[T]:
        raw = self._first_match(query)
        return self._to_model(raw) if raw is not None else None

    async def find(
        self,
        query: Optional[Query] = None,
        *,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        docs = [raw for raw in self._docs.values() if matches(raw, query)]
        # Stable sorts applied from the least to the most significant key.
        for field, direction in reversed(list(sort or [])):
            docs.sort(key=lambda raw: _sort_key(raw.get(field)), reverse=direction < 0)
        docs = docs[skip:]
        if limit:
            docs = docs[:limit]
        return [self._to_model(raw) for raw in docs]

    async def count(self, query: Optional[Query] = None) -> int:
        return sum(1 for raw in self._docs.values() if matches(raw, query))

    async def update(self, query: Query, changes: Dict[str, Any]) -> Optional[T]:
        raw = self._first_match(query)
        if raw is None:
            return None
        updated = {**raw, **copy.deepcopy(changes)}
        self._check_unique(updated, exclude_id=raw["_id"])
        self._docs[raw["_id"]] = updated
        return self._to_model(updated)

    async def increment(self, query: Query, field: str, amount: int = 1) -> Optional[T]:
        raw = self._first_match(query)
        if raw is None:
            return None
        raw[field] = raw.get(field, 0) + amount
        return self._to_model(raw)

    async def delete(self, id: Any) -> None:
        if self._docs.pop(id, None) is None:
            raise DocumentNotFoundError(f"Object with id {id} not found")

    async def delete_one(self, query: Query) -> bool:
        raw = self._first_match(query)
        if raw is None:
            return False
        del self._docs[raw["_id"]]
        return True
