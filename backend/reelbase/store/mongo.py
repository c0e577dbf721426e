"""
Reelbase Backend — MongoDB Document Store
===========================================

What:  DocumentStore backed by MongoDB through the motor async driver.
How:   One AsyncIOMotorClient per process; collections are looked up by name
       on the configured database. Driver exceptions are translated into
       ConflictError / StoreError at this boundary so services never import
       pymongo.
When:  Built in the application lifespan when STORE_BACKEND=mongo.
"""

import logging
from typing import Any, List, Mapping, Optional

from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from reelbase.exceptions import ConflictError, StoreError
from reelbase.store.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    Filter,
    serialize_document,
)

logger = logging.getLogger(__name__)

# bson raises OverflowError and InvalidDocument while encoding, outside PyMongoError
DRIVER_ERRORS = (PyMongoError, OverflowError, InvalidDocument)


class MongoCollection(DocumentCollection):
    """DocumentCollection over an AsyncIOMotorCollection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection
        self.name = collection.name

    async def insert_one(self, document: Mapping[str, Any]) -> Document:
        record = dict(document)
        try:
            result = await self._collection.insert_one(record)
        except DuplicateKeyError as e:
            logger.warning("Duplicate key on %s: %s", self.name, e.details)
            key = (e.details or {}).get("keyValue")
            raise ConflictError(detail=str(e), key=key, context={"collection": self.name})
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "insert"})
        record["_id"] = result.inserted_id
        return serialize_document(record)

    async def find_one(self, query: Filter) -> Optional[Document]:
        try:
            document = await self._collection.find_one(dict(query))
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "find_one"})
        return serialize_document(document)

    async def find(
        self, query: Optional[Filter] = None, sort_key: Optional[str] = None
    ) -> List[Document]:
        cursor = self._collection.find(dict(query or {}))
        if sort_key:
            cursor = cursor.sort(sort_key, ASCENDING)
        try:
            documents = await cursor.to_list(length=None)
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "find"})
        return [serialize_document(doc) for doc in documents]

    async def find_one_and_update(
        self, query: Filter, fields: Mapping[str, Any]
    ) -> Optional[Document]:
        try:
            document = await self._collection.find_one_and_update(
                dict(query),
                {"$set": dict(fields)},
                return_document=ReturnDocument.AFTER,
            )
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "update"})
        return serialize_document(document)

    async def find_one_and_delete(self, query: Filter) -> Optional[Document]:
        try:
            document = await self._collection.find_one_and_delete(dict(query))
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "delete"})
        return serialize_document(document)

    async def ensure_unique_index(self, field: str) -> None:
        try:
            await self._collection.create_index([(field, ASCENDING)], unique=True)
        except DRIVER_ERRORS as e:
            raise StoreError(detail=str(e), context={"collection": self.name, "op": "index"})
        logger.info("Unique index ensured on %s.%s", self.name, field)


class MongoDocumentStore(DocumentStore):
    """
    MongoDB store: the `movies` and employee collections of one database.

    The motor client connects lazily; the first real round trip happens in
    `ping()` during startup.
    """

    backend_name = "mongo"

    def __init__(
        self,
        url: str,
        database: str,
        movies_collection: str = "movies",
        employees_collection: str = "emps",
        server_selection_timeout_ms: int = 5000,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self._client = client or AsyncIOMotorClient(
            url, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
        self._database = self._client[database]
        self._movies = MongoCollection(self._database[movies_collection])
        self._employees = MongoCollection(self._database[employees_collection])

    @property
    def movies(self) -> MongoCollection:
        return self._movies

    @property
    def employees(self) -> MongoCollection:
        return self._employees

    async def ping(self) -> None:
        try:
            await self._database.command("ping")
        except DRIVER_ERRORS as e:
            raise StoreError(message="MongoDB is unreachable", detail=str(e))

    async def close(self) -> None:
        self._client.close()
