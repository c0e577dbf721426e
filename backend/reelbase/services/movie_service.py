"""
Reelbase Backend — Movie Service (Query Policy)
=================================================

What:  Turns identifiers and payloads from the movie routes into store
       queries, and store results into documents or application errors.
How:   Holds the movies DocumentCollection it was constructed with; every
       operation is one store call.
Who:   Built per request by the `get_movie_service` dependency from the store
       on `app.state`; called by routes/movies.py and routes/views.py.

Lookup policy (GET /api/movies/{identifier}):
    identifier ──parse_movie_id──▶ int?   ──yes──▶ {"Movie_ID": n}
                                          ──no───▶ {"Title": /identifier/i}

Update policy:
    Only Title and Released are written (see MovieUpdate). Every other field
    of the stored document is preserved.

Error translation:
    store returns None  → NotFoundError("Movie")
    StoreError          → re-raised with `message` naming the operation;
                          the driver text stays in `detail`
"""

import logging
import re
from typing import Any, Dict, List, Optional

from reelbase.exceptions import NotFoundError, store_operation
from reelbase.schemas.movie import MOVIE_ID_MAX, MOVIE_ID_MIN, MovieCreate, MovieUpdate
from reelbase.store.base import DocumentCollection

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_DIGITS = len(str(MOVIE_ID_MAX))


def parse_movie_id(identifier: str) -> Optional[int]:
    """
    Try to read `identifier` as a Movie_ID.

    Accepts an optional sign and base-10 digits, with surrounding whitespace,
    within the int64 range a Movie_ID can be stored in. Anything else returns
    None: "12a", "1e3", "12.5", "0x10", "3 Idiots", "99999999999999999999".
    """
    candidate = identifier.strip()
    if not _INTEGER_PATTERN.fullmatch(candidate):
        return None
    if len(candidate.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        return None
    value = int(candidate)
    if not MOVIE_ID_MIN <= value <= MOVIE_ID_MAX:
        return None
    return value


def title_query(text: str) -> Dict[str, Any]:
    """Case-insensitive substring match of `text` against Title."""
    return {"Title": {"$regex": re.escape(text), "$options": "i"}}


def identifier_query(identifier: str) -> Dict[str, Any]:
    movie_id = parse_movie_id(identifier)
    is_numeric = movie_id is not None
    if is_numeric:
        return {"Movie_ID": movie_id}
    return title_query(identifier)


def build_movie_document(payload: MovieCreate) -> Dict[str, Any]:
    """
    Build the record stored for a new movie.

    Defaults: Genre is "" when absent or empty, Image is None. Fields not
    on MovieCreate are never written.
    """
    return {
        "Movie_ID": payload.Movie_ID,
        "Title": payload.Title,
        "Released": payload.Released,
        "Genre": payload.Genre or "",
        "Director": payload.Director,
        "Plot": payload.Plot,
        "Image": None,
    }


class MovieService:
    """
    Business logic for the movies collection.

    Responsibilities:
        - resolve():        numeric-or-title lookup
        - get_by_movie_id(): exact Movie_ID lookup for the HTML views
        - list_all():       full scan, ascending Movie_ID
        - insert():         default-filling + unique Movie_ID
        - partial_update(): Title/Released only
        - delete():         by Movie_ID
    """

    def __init__(self, movies: DocumentCollection):
        self.movies = movies

    async def resolve(self, identifier: str) -> Dict[str, Any]:
        """
        First movie matching `identifier` by Movie_ID or by Title.

        Raises:
            NotFoundError: Nothing matched (→ 404)
            StoreError: Store failure (→ 500, "Error retrieving movie")
        """
        query = identifier_query(identifier)
        with store_operation("Error retrieving movie"):
            movie = await self.movies.find_one(query)
        if movie is None:
            logger.info("No movie matches identifier %r", identifier)
            raise NotFoundError(resource="Movie", resource_id=identifier)
        return movie

    async def get_by_movie_id(self, identifier: str) -> Dict[str, Any]:
        """Exact Movie_ID lookup; a non-integer identifier matches nothing."""
        movie_id = parse_movie_id(identifier)
        if movie_id is None:
            raise NotFoundError(resource="Movie", resource_id=identifier)
        with store_operation("Error retrieving movie"):
            movie = await self.movies.find_one({"Movie_ID": movie_id})
        if movie is None:
            raise NotFoundError(resource="Movie", resource_id=identifier)
        return movie

    async def list_all(self) -> List[Dict[str, Any]]:
        with store_operation("Error retrieving movies"):
            movies = await self.movies.find(sort_key="Movie_ID")
        logger.info("Listed %d movies", len(movies))
        return movies

    async def insert(self, payload: MovieCreate) -> Dict[str, Any]:
        """
        Store a new movie.

        Raises:
            ConflictError: Movie_ID already taken (→ 409); nothing is written
            StoreError: Store failure (→ 500, "Error inserting movie data")
        """
        document = build_movie_document(payload)
        with store_operation("Error inserting movie data"):
            movie = await self.movies.insert_one(document)
        logger.info("Inserted movie %d: %s", movie["Movie_ID"], movie["Title"])
        return movie

    async def partial_update(self, identifier: str, payload: MovieUpdate) -> Dict[str, Any]:
        """
        Set Title and/or Released on the movie with this Movie_ID.

        A payload with neither field returns the movie unchanged.

        Raises:
            NotFoundError: No movie with this Movie_ID (→ 404)
            StoreError: Store failure (→ 500, "Error updating movie")
        """
        movie_id = parse_movie_id(identifier)
        if movie_id is None:
            raise NotFoundError(resource="Movie", resource_id=identifier)

        changes = payload.changes()
        query = {"Movie_ID": movie_id}
        with store_operation("Error updating movie"):
            if changes:
                movie = await self.movies.find_one_and_update(query, changes)
            else:
                movie = await self.movies.find_one(query)

        if movie is None:
            logger.warning("Attempt to update a non-existent movie ID %s", identifier)
            raise NotFoundError(resource="Movie", resource_id=identifier)
        logger.info("Updated movie %d fields=%s", movie_id, sorted(changes))
        return movie

    async def delete(self, identifier: str) -> Dict[str, Any]:
        """
        Remove the movie with this Movie_ID and return it.

        Raises:
            NotFoundError: No movie with this Movie_ID (→ 404); nothing removed
            StoreError: Store failure (→ 500, "Error deleting movie")
        """
        movie_id = parse_movie_id(identifier)
        if movie_id is None:
            raise NotFoundError(resource="Movie", resource_id=identifier)

        with store_operation("Error deleting movie"):
            movie = await self.movies.find_one_and_delete({"Movie_ID": movie_id})
        if movie is None:
            logger.warning("Attempt to delete a non-existent movie ID %s", identifier)
            raise NotFoundError(resource="Movie", resource_id=identifier)
        logger.info("Deleted movie %d: %s", movie_id, movie.get("Title"))
        return movie
