"""
Reelbase Backend — In-Memory Document Store
=============================================

What:  DocumentStore kept in process memory, with MongoDB-like semantics for
       the subset of the query dialect the services use.
Who:   Selected with STORE_BACKEND=memory; injected directly by the tests.

Semantics mirrored from MongoDB:
    - `_id` is a fresh bson ObjectId per insert
    - unique indexes reject inserts with an E11000-style message
    - a missing field never equals a value and never matches a regex
    - ascending sort puts documents missing the sort key first

Mutations contain no awaits, so each one completes atomically on the event
loop.
"""

import copy
import re
from typing import Any, Dict, List, Mapping, Optional, Set

from bson import ObjectId

from reelbase.exceptions import ConflictError
from reelbase.store.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    Filter,
    serialize_document,
)

_MISSING = object()


def _matches(document: Mapping[str, Any], query: Filter) -> bool:
    for field, condition in query.items():
        value = document.get(field, _MISSING)
        if isinstance(condition, Mapping) and "$regex" in condition:
            if not isinstance(value, str):
                return False
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if re.search(condition["$regex"], value, flags) is None:
                return False
        elif value is _MISSING or value != condition:
            return False
    return True


def _sort_key(field: str):
    def key(document: Mapping[str, Any]):
        value = document.get(field)
        return (value is not None, value)
    return key


class MemoryCollection(DocumentCollection):
    """A list of documents in insertion order plus declared unique fields."""

    def __init__(self, name: str):
        self.name = name
        self._documents: List[Dict[str, Any]] = []
        self._unique_fields: Set[str] = set()

    def __len__(self) -> int:
        return len(self._documents)

    def _first(self, query: Filter) -> Optional[Dict[str, Any]]:
        for document in self._documents:
            if _matches(document, query):
                return document
        return None

    def _check_unique(self, record: Mapping[str, Any]) -> None:
        for field in sorted(self._unique_fields):
            if field not in record:
                continue
            for existing in self._documents:
                if existing.get(field, _MISSING) == record[field]:
                    raise ConflictError(
                        detail=(
                            f"E11000 duplicate key error collection: {self.name} "
                            f"index: {field}_1 dup key: {{ {field}: {record[field]!r} }}"
                        ),
                        key={field: record[field]},
                        context={"collection": self.name},
                    )

    async def insert_one(self, document: Mapping[str, Any]) -> Document:
        record = copy.deepcopy(dict(document))
        record.setdefault("_id", ObjectId())
        self._check_unique(record)
        self._documents.append(record)
        return serialize_document(record)

    async def find_one(self, query: Filter) -> Optional[Document]:
        return serialize_document(copy.deepcopy(self._first(query)))

    async def find(
        self, query: Optional[Filter] = None, sort_key: Optional[str] = None
    ) -> List[Document]:
        documents = [doc for doc in self._documents if _matches(doc, query or {})]
        if sort_key:
            documents = sorted(documents, key=_sort_key(sort_key))
        return [serialize_document(copy.deepcopy(doc)) for doc in documents]

    async def find_one_and_update(
        self, query: Filter, fields: Mapping[str, Any]
    ) -> Optional[Document]:
        document = self._first(query)
        if document is None:
            return None
        document.update(copy.deepcopy(dict(fields)))
        return serialize_document(copy.deepcopy(document))

    async def find_one_and_delete(self, query: Filter) -> Optional[Document]:
        document = self._first(query)
        if document is None:
            return None
        self._documents.remove(document)
        return serialize_document(document)

    async def ensure_unique_index(self, field: str) -> None:
        self._unique_fields.add(field)


class MemoryDocumentStore(DocumentStore):
    """Process-local store; contents vanish when the process exits."""

    backend_name = "memory"

    def __init__(self, movies_collection: str = "movies", employees_collection: str = "emps"):
        self._movies = MemoryCollection(movies_collection)
        self._employees = MemoryCollection(employees_collection)
        # Movie_ID is unique from construction on, before prepare() runs
        self._movies._unique_fields.add("Movie_ID")

    @property
    def movies(self) -> MemoryCollection:
        return self._movies

    @property
    def employees(self) -> MemoryCollection:
        return self._employees

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
