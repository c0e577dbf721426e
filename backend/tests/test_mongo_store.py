"""
Reelbase Backend — MongoDB Store Unit Tests
=============================================

What:  Tests for the motor adapter: query shapes sent to the driver and
       translation of driver errors.
How:   Motor collections are replaced with mocks (no MongoDB server needed).
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from reelbase.exceptions import ConflictError, StoreError
from reelbase.store.mongo import MongoCollection, MongoDocumentStore


def make_motor_collection(name="movies"):
    collection = MagicMock()
    collection.name = name
    return collection


class TestMongoCollection:
    def setup_method(self):
        self.motor = make_motor_collection()
        self.collection = MongoCollection(self.motor)

    @pytest.mark.asyncio
    async def test_insert_returns_document_with_string_id(self):
        oid = ObjectId()
        self.motor.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))

        document = await self.collection.insert_one({"Movie_ID": 1, "Title": "Heat"})

        assert document == {"Movie_ID": 1, "Title": "Heat", "_id": str(oid)}

    @pytest.mark.asyncio
    async def test_duplicate_key_becomes_conflict(self):
        self.motor.insert_one = AsyncMock(
            side_effect=DuplicateKeyError(
                "E11000 duplicate key error collection: reelbase.movies index: Movie_ID_1",
                11000,
                {"keyValue": {"Movie_ID": 1}},
            )
        )

        with pytest.raises(ConflictError) as exc_info:
            await self.collection.insert_one({"Movie_ID": 1, "Title": "Heat"})

        assert exc_info.value.key == {"Movie_ID": 1}
        assert "E11000 duplicate key error" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_driver_failure_becomes_store_error(self):
        self.motor.find_one = AsyncMock(
            side_effect=ServerSelectionTimeoutError("localhost:27017: Connection refused")
        )

        with pytest.raises(StoreError) as exc_info:
            await self.collection.find_one({"Movie_ID": 1})

        assert not isinstance(exc_info.value, ConflictError)
        assert "Connection refused" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_find_sorts_ascending(self):
        oid = ObjectId()
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[{"_id": oid, "Movie_ID": 1}])
        self.motor.find = MagicMock(return_value=cursor)

        documents = await self.collection.find(sort_key="Movie_ID")

        self.motor.find.assert_called_once_with({})
        cursor.sort.assert_called_once_with("Movie_ID", ASCENDING)
        assert documents == [{"_id": str(oid), "Movie_ID": 1}]

    @pytest.mark.asyncio
    async def test_update_uses_set_and_returns_after(self):
        self.motor.find_one_and_update = AsyncMock(
            return_value={"_id": ObjectId(), "Movie_ID": 1, "Title": "New"}
        )

        document = await self.collection.find_one_and_update({"Movie_ID": 1}, {"Title": "New"})

        self.motor.find_one_and_update.assert_awaited_once_with(
            {"Movie_ID": 1},
            {"$set": {"Title": "New"}},
            return_document=ReturnDocument.AFTER,
        )
        assert document["Title"] == "New"

    @pytest.mark.asyncio
    async def test_missing_document_is_none(self):
        self.motor.find_one_and_delete = AsyncMock(return_value=None)
        assert await self.collection.find_one_and_delete({"Movie_ID": 9}) is None

    @pytest.mark.asyncio
    async def test_unique_index(self):
        self.motor.create_index = AsyncMock(return_value="Movie_ID_1")
        await self.collection.ensure_unique_index("Movie_ID")
        self.motor.create_index.assert_awaited_once_with([("Movie_ID", ASCENDING)], unique=True)


class TestMongoDocumentStore:
    def setup_method(self):
        self.collections = {
            "movies": make_motor_collection("movies"),
            "emps": make_motor_collection("emps"),
        }
        self.database = MagicMock()
        self.database.__getitem__.side_effect = lambda name: self.collections[name]
        self.client = MagicMock()
        self.client.__getitem__.return_value = self.database

        self.store = MongoDocumentStore(
            url="mongodb://unused", database="reelbase", client=self.client
        )

    def test_collections_by_name(self):
        self.client.__getitem__.assert_called_with("reelbase")
        assert self.store.movies.name == "movies"
        assert self.store.employees.name == "emps"
        assert self.store.backend_name == "mongo"

    @pytest.mark.asyncio
    async def test_ping(self):
        self.database.command = AsyncMock(return_value={"ok": 1})
        await self.store.ping()
        self.database.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_ping_failure(self):
        self.database.command = AsyncMock(side_effect=ServerSelectionTimeoutError("timed out"))
        with pytest.raises(StoreError) as exc_info:
            await self.store.ping()
        assert exc_info.value.message == "MongoDB is unreachable"

    @pytest.mark.asyncio
    async def test_prepare_indexes_movie_id(self):
        self.collections["movies"].create_index = AsyncMock()
        await self.store.prepare()
        self.collections["movies"].create_index.assert_awaited_once_with(
            [("Movie_ID", ASCENDING)], unique=True
        )

    @pytest.mark.asyncio
    async def test_close(self):
        await self.store.close()
        self.client.close.assert_called_once()


class TestEncodingErrors:
    """bson encoding failures surface as StoreError like any driver error."""

    def setup_method(self):
        self.motor = make_motor_collection()
        self.collection = MongoCollection(self.motor)

    @pytest.mark.asyncio
    async def test_oversized_integer_on_insert(self):
        self.motor.insert_one = AsyncMock(
            side_effect=OverflowError("MongoDB can only handle up to 8-byte ints")
        )

        with pytest.raises(StoreError) as exc_info:
            await self.collection.insert_one({"Movie_ID": 10 ** 20, "Title": "Too big"})

        assert "8-byte ints" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_oversized_integer_in_filter(self):
        self.motor.find_one_and_delete = AsyncMock(
            side_effect=OverflowError("MongoDB can only handle up to 8-byte ints")
        )
        with pytest.raises(StoreError):
            await self.collection.find_one_and_delete({"Movie_ID": 10 ** 20})

    @pytest.mark.asyncio
    async def test_unencodable_document(self):
        self.motor.find_one = AsyncMock(
            side_effect=InvalidDocument("cannot encode object: <object>")
        )
        with pytest.raises(StoreError) as exc_info:
            await self.collection.find_one({"Title": object()})
        assert "cannot encode object" in exc_info.value.detail
