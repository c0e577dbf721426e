"""
Reelbase Backend — Document Store Package
===========================================

Store Inventory:
    - DocumentStore / DocumentCollection (abstract): persistence contract
    - MongoDocumentStore: MongoDB through motor (default)
    - MemoryDocumentStore: in-process dictionaries

`build_store()` picks the implementation from settings; `connect_store()`
runs the startup probe with tenacity backoff.
"""

import logging

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from reelbase.config import Settings
from reelbase.exceptions import StoreError
from reelbase.store.base import DocumentCollection, DocumentStore, serialize_document
from reelbase.store.memory import MemoryDocumentStore
from reelbase.store.mongo import MongoDocumentStore

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentCollection",
    "DocumentStore",
    "MemoryDocumentStore",
    "MongoDocumentStore",
    "build_store",
    "connect_store",
    "serialize_document",
]


def build_store(config: Settings) -> DocumentStore:
    """Construct the configured DocumentStore. No I/O happens here."""
    if config.store_backend == "memory":
        logger.info("Using in-memory document store")
        return MemoryDocumentStore(
            movies_collection=config.movies_collection,
            employees_collection=config.employees_collection,
        )
    logger.info("Using MongoDB document store (database=%s)", config.mongodb_database)
    return MongoDocumentStore(
        url=config.mongodb_url,
        database=config.mongodb_database,
        movies_collection=config.movies_collection,
        employees_collection=config.employees_collection,
        server_selection_timeout_ms=config.mongodb_server_selection_timeout_ms,
    )


async def connect_store(store: DocumentStore, config: Settings) -> None:
    """
    Ping the store until it answers, then create the required indexes.

    Retries StoreError with exponential backoff and jitter, up to
    `store_connect_attempts` tries. Raises tenacity.RetryError when every
    attempt failed.
    """

    @retry(
        retry=retry_if_exception_type(StoreError),
        stop=stop_after_attempt(config.store_connect_attempts),
        wait=wait_exponential_jitter(
            initial=config.store_retry_min_wait,
            max=config.store_retry_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    async def _probe() -> None:
        await store.ping()
        await store.prepare()

    await _probe()
    logger.info("Document store ready (%s)", store.backend_name)
