"""
Reelbase Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── memory_store: empty MemoryDocumentStore
    ├── sample_movies: four catalogue records, inserted out of order
    ├── seeded_store: memory_store with sample_movies inserted
    ├── movie_service: MovieService over seeded_store.movies
    └── test_client: HTTPX AsyncClient against create_app(store=seeded_store)
"""

import os

# Settings are read at import time; set them before any reelbase import
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STORE_CONNECT_ATTEMPTS"] = "1"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from reelbase.services.movie_service import MovieService
from reelbase.store.memory import MemoryDocumentStore


@pytest.fixture
def memory_store():
    """A fresh, empty in-memory store with Movie_ID declared unique."""
    return MemoryDocumentStore()


@pytest.fixture
def sample_movies():
    """
    Catalogue records in deliberately unsorted insertion order.

    Movie 7's title starts with "5" so that numeric lookups can be told apart
    from title matches.
    """
    return [
        {
            "Movie_ID": 3,
            "Title": "The Matrix",
            "Year": 1999,
            "Released": "31 Mar 1999",
            "Genre": "Action, Sci-Fi",
            "Director": "Lana Wachowski, Lilly Wachowski",
            "Plot": "A hacker learns the world he lives in is a simulation.",
            "imdbRating": 8.7,
        },
        {
            "Movie_ID": 7,
            "Title": "5 Centimeters per Second",
            "Released": "03 Mar 2007",
            "Genre": "Animation, Drama",
            "Director": "Makoto Shinkai",
            "Plot": "Three moments in the life of Takaki Tono.",
        },
        {
            "Movie_ID": 1,
            "Title": "Inception",
            "Released": "16 Jul 2010",
            "Genre": "Action, Adventure, Sci-Fi",
            "Director": "Christopher Nolan",
            "Plot": "A thief who steals corporate secrets through dream-sharing.",
        },
        {
            "Movie_ID": 5,
            "Title": "3 Idiots",
            "Released": "25 Dec 2009",
            "Genre": "Comedy, Drama",
            "Director": "Rajkumar Hirani",
            "Plot": "Two friends search for their long lost companion.",
        },
    ]


@pytest_asyncio.fixture
async def seeded_store(memory_store, sample_movies):
    for movie in sample_movies:
        await memory_store.movies.insert_one(movie)
    return memory_store


@pytest.fixture
def movie_service(seeded_store):
    return MovieService(seeded_store.movies)


@pytest_asyncio.fixture
async def test_client(seeded_store):
    """
    HTTPX AsyncClient wired to an app serving `seeded_store`.

    ASGITransport does not run the lifespan; the injected store is used as is.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/movies")
            assert response.status_code == 200
    """
    from reelbase.main import create_app

    app = create_app(store=seeded_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
