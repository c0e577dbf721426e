"""
Reelbase Backend — FastAPI Dependencies
=========================================

What:  Hands route handlers the services bound to the process-wide store.
How:   The store is constructed once (application lifespan, or passed to
       create_app) and kept on `app.state.store`; services are cheap
       wrappers built per request around its collections.

Example:
    @router.get("/movies")
    async def list_movies(service: MovieService = Depends(get_movie_service)):
        ...
"""

from fastapi import Depends, Request

from reelbase.exceptions import StoreError
from reelbase.services.employee_service import EmployeeService
from reelbase.services.movie_service import MovieService
from reelbase.store.base import DocumentStore


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError(
            message="Document store is not initialized",
            detail="The application started without a document store",
        )
    return store


def get_movie_service(store: DocumentStore = Depends(get_store)) -> MovieService:
    return MovieService(store.movies)


def get_employee_service(store: DocumentStore = Depends(get_store)) -> EmployeeService:
    return EmployeeService(store.employees)
