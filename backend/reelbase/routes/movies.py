"""
Reelbase Backend — Movie API Route Handlers
=============================================

What:  JSON API for the movies collection, plus the two form targets the
       HTML views post to (insert and update).
How:   Reads the body, delegates to MovieService, shapes the response.
       Errors raised by the service reach the global exception handlers,
       except on the update form target, which answers in plain text.

Routes:
    GET    /api/movies                  list, ascending Movie_ID
    GET    /api/movies/{identifier}     Movie_ID or title lookup
    POST   /api/movies                  insert (JSON → 201, form → redirect /)
    POST   /api/movies/update/{id}      Title/Released from the edit form
    PUT    /api/movies/{id}             Title/Released, JSON response
    DELETE /api/movies/{id}             delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from reelbase.dependencies import get_movie_service
from reelbase.exceptions import NotFoundError, StoreError
from reelbase.routes.payload import is_form_request, parse_model, read_payload
from reelbase.schemas.common import ErrorResponse, MessageResponse
from reelbase.schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from reelbase.services.movie_service import MovieService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Movies"])

NOT_FOUND = {"description": "Movie not found", "model": ErrorResponse}
STORE_FAILURE = {"description": "Document store failure", "model": ErrorResponse}


@router.get(
    "/movies",
    response_model=List[MovieResponse],
    response_model_exclude_unset=True,
    responses={500: STORE_FAILURE},
    summary="List all movies sorted by Movie_ID",
)
async def list_movies(
    service: MovieService = Depends(get_movie_service),
) -> List[MovieResponse]:
    movies = await service.list_all()
    return [MovieResponse.model_validate(movie) for movie in movies]


@router.get(
    "/movies/{identifier}",
    response_model=MovieResponse,
    response_model_exclude_unset=True,
    responses={404: NOT_FOUND, 500: STORE_FAILURE},
    summary="Get a movie by Movie_ID or title",
    description=(
        "An integer identifier is matched against Movie_ID. Anything else is "
        "matched case-insensitively as a substring of Title; the first match "
        "is returned."
    ),
)
async def get_movie(
    identifier: str,
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    movie = await service.resolve(identifier)
    return MovieResponse.model_validate(movie)


@router.post(
    "/movies",
    status_code=status.HTTP_201_CREATED,
    response_model=MovieResponse,
    response_model_exclude_unset=True,
    responses={
        303: {"description": "Form submission stored; redirect to the movie list"},
        400: {"description": "Body could not be coerced", "model": ErrorResponse},
        409: {"description": "Movie_ID already exists", "model": ErrorResponse},
        500: STORE_FAILURE,
    },
    summary="Add a movie",
    description=(
        "Accepts Movie_ID, Title, Released, Genre, Director and Plot as JSON or "
        "as form fields. Genre defaults to an empty string and Image to null."
    ),
)
async def create_movie(
    request: Request,
    service: MovieService = Depends(get_movie_service),
):
    payload = parse_model(MovieCreate, await read_payload(request), "Error inserting movie data")
    movie = await service.insert(payload)

    if is_form_request(request):
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    return MovieResponse.model_validate(movie)


@router.post(
    "/movies/update/{identifier}",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    responses={
        404: {"description": "Movie not found (plain text)"},
        500: {"description": "Update failed (plain text)"},
    },
    summary="Update Title and Released from the edit form",
)
async def update_movie_form(
    identifier: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
):
    payload = parse_model(MovieUpdate, await read_payload(request), "Error updating movie")
    try:
        movie = await service.partial_update(identifier, payload)
    except NotFoundError:
        return PlainTextResponse("Movie not found", status_code=status.HTTP_404_NOT_FOUND)
    except StoreError as e:
        return PlainTextResponse(
            f"Error updating movie: {e.detail}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse(
        url=f"/movie/{movie['Movie_ID']}", status_code=status.HTTP_303_SEE_OTHER
    )


@router.put(
    "/movies/{identifier}",
    response_model=MovieResponse,
    response_model_exclude_unset=True,
    responses={404: NOT_FOUND, 500: STORE_FAILURE},
    summary="Update Title and Released",
    description="Only Title and Released are written; other body fields are ignored.",
)
async def update_movie(
    identifier: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    payload = parse_model(MovieUpdate, await read_payload(request), "Error updating movie")
    movie = await service.partial_update(identifier, payload)
    return MovieResponse.model_validate(movie)


@router.delete(
    "/movies/{identifier}",
    response_model=MessageResponse,
    responses={404: NOT_FOUND, 500: STORE_FAILURE},
    summary="Delete a movie by Movie_ID",
)
async def delete_movie(
    identifier: str,
    service: MovieService = Depends(get_movie_service),
) -> MessageResponse:
    await service.delete(identifier)
    return MessageResponse(message="Movie deleted successfully")
