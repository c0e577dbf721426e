"""
Reelbase Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a caller-facing message, an optional `detail`
       (the underlying error text) and a context dict for server-side logs.
       Global exception handlers (registered in main.py) turn them into JSON
       responses with the right HTTP status code.
Who:   Raised by the store adapters and services; caught by global handlers.

Exception Hierarchy:
    ReelbaseError (base)
    ├── ValidationError   → 400 Bad Request (body could not be coerced)
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error
        └── ConflictError → 409 Conflict (unique key violation)

Response bodies:
    {"message": "<operation summary>", "error": "<underlying error text>"}

    The `error` field carries the driver's message verbatim, unsanitized.
    Existing clients read it to tell a duplicate key from a lost connection.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class ReelbaseError(Exception):
    """
    Base exception for all Reelbase application errors.

    Attributes:
        message:  Caller-facing summary of what failed
        detail:   Underlying error text (returned as `error` in responses)
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.detail = detail
        self.context = context or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Body returned by the global exception handlers."""
        body: Dict[str, Any] = {"message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


class ValidationError(ReelbaseError):
    """
    Raised when a request body cannot be coerced into the expected record.

    When:  `Movie_ID` is not an integer, `Title` is missing, the JSON body is
           malformed, a numeric employee field holds text.
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        detail: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, detail=detail, context=ctx)
        self.field = field


class NotFoundError(ReelbaseError):
    """
    Raised when a requested document does not exist.

    The store returns None for missing documents; services convert that into
    this exception so routes never branch on None themselves.

    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(ReelbaseError):
    """
    Raised when the document store fails: connection lost, server selection
    timeout, write error, and so on.

    Store adapters raise it with the driver message in `detail`; services
    replace `message` with the name of the operation that failed.

    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Document store operation failed",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, detail=detail, context=context)


class ConflictError(StoreError):
    """
    Raised when an insert violates a unique key (duplicate `Movie_ID`).

    The existing document is left untouched. No deduplication happens: a
    double submit of the same insert is a hard error.

    HTTP:  409 Conflict
    """

    def __init__(
        self,
        message: str = "Duplicate key",
        detail: Optional[str] = None,
        key: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, detail=detail, context=ctx)
        self.key = key or {}


@contextmanager
def store_operation(message: str) -> Iterator[None]:
    """
    Label store failures raised inside the block with `message`.

    Usage:
        with store_operation("Error inserting movie data"):
            await movies.insert_one(document)

    The exception keeps its type (ConflictError stays ConflictError) and its
    `detail`; only the caller-facing `message` changes.
    """
    try:
        yield
    except StoreError as e:
        e.message = message
        logger.error("%s: %s | Context: %s", message, e.detail, e.context)
        raise
