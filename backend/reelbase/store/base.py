"""
Reelbase Backend — Abstract Document Store Interface
======================================================

What:  Abstract base classes for the persistence collaborator.
How:   A DocumentStore owns named DocumentCollections; each collection offers
       per-document create/find/update/delete. Concrete stores live in
       mongo.py (motor) and memory.py (dictionaries).
Who:   Built once at startup by `build_store()`, handed to services.

Contract:
    - Filters use the MongoDB query dialect, restricted to what the services
      need: field equality and {"$regex": pattern, "$options": "i"}.
    - Returned documents are plain dicts with `_id` rendered as a string
      (see `serialize_document`).
    - Unique key violations raise ConflictError; every other failure raises
      StoreError carrying the underlying message.
    - Each call touches a single document (or a read-only scan). There are no
      multi-document transactions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

Document = Dict[str, Any]
Filter = Mapping[str, Any]


def serialize_document(document: Optional[Mapping[str, Any]]) -> Optional[Document]:
    """Copy a raw store document into a JSON-friendly dict (`_id` as str)."""
    if document is None:
        return None
    result = dict(document)
    if "_id" in result and result["_id"] is not None:
        result["_id"] = str(result["_id"])
    return result


class DocumentCollection(ABC):
    """
    One named collection in a DocumentStore.

    Implementations:
        - MongoCollection: wraps a motor AsyncIOMotorCollection
        - MemoryCollection: list of dicts guarded by the event loop
    """

    name: str

    @abstractmethod
    async def insert_one(self, document: Mapping[str, Any]) -> Document:
        """
        Insert a new document and return it as stored (with `_id`).

        Raises:
            ConflictError: A unique key of the collection is already taken
            StoreError: Any other store failure
        """

    @abstractmethod
    async def find_one(self, query: Filter) -> Optional[Document]:
        """First document matching `query`, or None."""

    @abstractmethod
    async def find(
        self, query: Optional[Filter] = None, sort_key: Optional[str] = None
    ) -> List[Document]:
        """All documents matching `query`, ascending by `sort_key` if given."""

    @abstractmethod
    async def find_one_and_update(
        self, query: Filter, fields: Mapping[str, Any]
    ) -> Optional[Document]:
        """
        Set `fields` on the first document matching `query`.

        Only the given fields change. Returns the post-update document, or
        None when nothing matched.
        """

    @abstractmethod
    async def find_one_and_delete(self, query: Filter) -> Optional[Document]:
        """Delete the first match and return it, or None when nothing matched."""

    @abstractmethod
    async def ensure_unique_index(self, field: str) -> None:
        """Declare `field` as a unique key of this collection."""


class DocumentStore(ABC):
    """
    Collection-oriented persistence service.

    Lifecycle:
        store = build_store(settings)   # once, at process start
        await store.ping()              # startup probe (retried)
        await store.prepare()           # unique indexes
        ...                             # request handling
        await store.close()             # shutdown
    """

    backend_name: str = "abstract"

    @property
    @abstractmethod
    def movies(self) -> DocumentCollection:
        """The movies collection, unique on `Movie_ID`."""

    @property
    @abstractmethod
    def employees(self) -> DocumentCollection:
        """The employees collection, keyed by store-assigned `_id`."""

    @abstractmethod
    async def ping(self) -> None:
        """Round trip to the store. Raises StoreError when unreachable."""

    async def prepare(self) -> None:
        """Create the indexes the services rely on."""
        await self.movies.ensure_unique_index("Movie_ID")

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the store."""
