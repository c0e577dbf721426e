"""
Reelbase Backend — Movie Service Unit Tests
=============================================

What:  Tests for MovieService query policy against the in-memory store.
How:   The seeded_store fixture holds movies 1, 3, 5 and 7 inserted out of
       order; movie 7's title starts with "5".

What we test:
    ✅ Numeric identifiers match Movie_ID, never Title
    ✅ Text identifiers match Title case-insensitively as a substring
    ✅ Listing is ascending by Movie_ID whatever the insertion order
    ✅ Insert fills defaults and rejects duplicate Movie_IDs untouched
    ✅ Partial update writes Title/Released only
    ✅ Delete removes exactly one movie
    ✅ Store failures carry the operation name as message
"""

import pydantic
import pytest
from unittest.mock import AsyncMock

from reelbase.exceptions import ConflictError, NotFoundError, StoreError
from reelbase.schemas.movie import MovieCreate, MovieUpdate
from reelbase.services.movie_service import (
    build_movie_document,
    identifier_query,
    title_query,
)


class TestResolve:
    """Tests for numeric-or-title lookup."""

    @pytest.mark.asyncio
    async def test_numeric_identifier_matches_movie_id(self, movie_service):
        movie = await movie_service.resolve("5")
        assert movie["Movie_ID"] == 5
        assert movie["Title"] == "3 Idiots"

    @pytest.mark.asyncio
    async def test_numeric_identifier_ignores_titles(self, movie_service):
        """Movie 7 is found by ID; an unused ID raises NotFoundError."""
        movie = await movie_service.resolve("7")
        assert movie["Movie_ID"] == 7

        with pytest.raises(NotFoundError):
            await movie_service.resolve("42")

    @pytest.mark.asyncio
    async def test_title_substring_is_case_insensitive(self, movie_service):
        for text in ("matrix", "MATRIX", "atri", "The Matrix"):
            movie = await movie_service.resolve(text)
            assert movie["Movie_ID"] == 3

    @pytest.mark.asyncio
    async def test_title_starting_with_digit_is_title_search(self, movie_service):
        movie = await movie_service.resolve("3 Idiots")
        assert movie["Movie_ID"] == 5

    @pytest.mark.asyncio
    async def test_regex_metacharacters_are_literal(self, movie_service):
        with pytest.raises(NotFoundError):
            await movie_service.resolve(".*")

    @pytest.mark.asyncio
    async def test_unknown_title_raises_not_found(self, movie_service):
        with pytest.raises(NotFoundError) as exc_info:
            await movie_service.resolve("Casablanca")
        assert exc_info.value.message == "Movie not found"

    @pytest.mark.asyncio
    async def test_store_failure_names_the_operation(self, movie_service):
        movie_service.movies.find_one = AsyncMock(
            side_effect=StoreError(detail="connection refused")
        )
        with pytest.raises(StoreError) as exc_info:
            await movie_service.resolve("3")
        assert exc_info.value.message == "Error retrieving movie"
        assert exc_info.value.detail == "connection refused"


class TestQueries:
    def test_identifier_query_numeric(self):
        assert identifier_query(" 12 ") == {"Movie_ID": 12}

    def test_identifier_query_text(self):
        assert identifier_query("Matrix") == title_query("Matrix")

    def test_title_query_escapes(self):
        query = title_query("a.b")
        assert query["Title"]["$options"] == "i"
        assert query["Title"]["$regex"] == r"a\.b"


class TestListAll:
    @pytest.mark.asyncio
    async def test_sorted_by_movie_id(self, movie_service):
        movies = await movie_service.list_all()
        assert [m["Movie_ID"] for m in movies] == [1, 3, 5, 7]

    @pytest.mark.asyncio
    async def test_ids_are_strings(self, movie_service):
        movies = await movie_service.list_all()
        assert all(isinstance(m["_id"], str) for m in movies)

    @pytest.mark.asyncio
    async def test_empty_collection(self, memory_store):
        from reelbase.services.movie_service import MovieService

        assert await MovieService(memory_store.movies).list_all() == []


class TestInsert:
    """Tests for default filling and Movie_ID uniqueness."""

    def test_document_defaults(self):
        document = build_movie_document(MovieCreate(Movie_ID=9, Title="Heat"))
        assert document["Genre"] == ""
        assert document["Image"] is None
        assert document["Released"] is None

    def test_document_keeps_only_known_fields(self):
        payload = MovieCreate.model_validate(
            {"Movie_ID": "9", "Title": "Heat", "imdbRating": "8.3", "Genre": "Crime"}
        )
        document = build_movie_document(payload)
        assert document["Movie_ID"] == 9
        assert document["Genre"] == "Crime"
        assert "imdbRating" not in document

    @pytest.mark.asyncio
    async def test_insert_then_resolve(self, movie_service):
        created = await movie_service.insert(
            MovieCreate(Movie_ID=9, Title="Heat", Released="15 Dec 1995")
        )
        assert created["_id"]

        movie = await movie_service.resolve("9")
        assert movie["Title"] == "Heat"
        assert movie["Genre"] == ""
        assert movie["Image"] is None

    @pytest.mark.asyncio
    async def test_duplicate_movie_id_conflicts(self, movie_service):
        with pytest.raises(ConflictError) as exc_info:
            await movie_service.insert(MovieCreate(Movie_ID=3, Title="Impostor"))
        assert exc_info.value.message == "Error inserting movie data"
        assert "E11000" in exc_info.value.detail

        movie = await movie_service.resolve("3")
        assert movie["Title"] == "The Matrix"
        assert len(await movie_service.list_all()) == 4


class TestPartialUpdate:
    @pytest.mark.asyncio
    async def test_updates_title_and_released_only(self, movie_service):
        payload = MovieUpdate.model_validate(
            {"Title": "Matrix", "Released": "1999", "Plot": "changed", "Genre": "changed"}
        )
        movie = await movie_service.partial_update("3", payload)

        assert movie["Title"] == "Matrix"
        assert movie["Released"] == "1999"
        assert movie["Plot"] == "A hacker learns the world he lives in is a simulation."
        assert movie["Genre"] == "Action, Sci-Fi"
        assert movie["imdbRating"] == 8.7

    @pytest.mark.asyncio
    async def test_omitted_field_is_preserved(self, movie_service):
        movie = await movie_service.partial_update("3", MovieUpdate(Released="2000"))
        assert movie["Title"] == "The Matrix"
        assert movie["Released"] == "2000"

    @pytest.mark.asyncio
    async def test_empty_payload_returns_movie_unchanged(self, movie_service):
        movie = await movie_service.partial_update("1", MovieUpdate())
        assert movie["Title"] == "Inception"

    @pytest.mark.asyncio
    async def test_missing_movie(self, movie_service):
        with pytest.raises(NotFoundError):
            await movie_service.partial_update("99", MovieUpdate(Title="Ghost"))
        assert len(await movie_service.list_all()) == 4

    @pytest.mark.asyncio
    async def test_non_numeric_identifier(self, movie_service):
        with pytest.raises(NotFoundError):
            await movie_service.partial_update("Matrix", MovieUpdate(Title="Ghost"))


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_one(self, movie_service):
        deleted = await movie_service.delete("3")
        assert deleted["Title"] == "The Matrix"

        remaining = await movie_service.list_all()
        assert [m["Movie_ID"] for m in remaining] == [1, 5, 7]
        with pytest.raises(NotFoundError):
            await movie_service.resolve("3")

    @pytest.mark.asyncio
    async def test_delete_missing_leaves_collection(self, movie_service):
        with pytest.raises(NotFoundError):
            await movie_service.delete("99")
        assert len(await movie_service.list_all()) == 4

    @pytest.mark.asyncio
    async def test_delete_failure_message(self, movie_service):
        movie_service.movies.find_one_and_delete = AsyncMock(
            side_effect=StoreError(detail="not primary")
        )
        with pytest.raises(StoreError) as exc_info:
            await movie_service.delete("3")
        assert exc_info.value.message == "Error deleting movie"


class TestGetByMovieId:
    @pytest.mark.asyncio
    async def test_exact_lookup(self, movie_service):
        movie = await movie_service.get_by_movie_id("1")
        assert movie["Title"] == "Inception"

    @pytest.mark.asyncio
    async def test_title_is_not_accepted(self, movie_service):
        with pytest.raises(NotFoundError):
            await movie_service.get_by_movie_id("Inception")


class TestMovieCreateBounds:
    def test_movie_id_beyond_int64_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            MovieCreate(Movie_ID=2 ** 63, Title="Too big")

    def test_numbers_become_text(self):
        payload = MovieCreate.model_validate({"Movie_ID": "7", "Title": 1917, "Released": 2019})
        assert payload.Movie_ID == 7
        assert payload.Title == "1917"
        assert payload.Released == "2019"
