"""
Reelbase Backend — HTML View Routes
=====================================

What:  Server-rendered pages for browsing and editing the movie catalogue.
How:   Jinja2 templates from `settings.templates_dir`; data comes from the
       same MovieService the JSON API uses. Missing movies answer with a
       plain-text 404.

Pages:
    GET  /                 movie list, ascending Movie_ID
    GET  /movie/{id}       detail page
    GET  /add              add form (posts to /api/movies)
    GET  /edit/{id}        edit form (posts to /api/movies/update/{id})
    POST /delete/{id}      delete button target, redirects to /
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from reelbase.config import settings
from reelbase.dependencies import get_movie_service
from reelbase.exceptions import NotFoundError
from reelbase.services.movie_service import MovieService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Views"], include_in_schema=False)

templates = Jinja2Templates(directory=settings.templates_dir)


def movie_not_found() -> PlainTextResponse:
    return PlainTextResponse("Movie not found", status_code=status.HTTP_404_NOT_FOUND)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, service: MovieService = Depends(get_movie_service)):
    movies = await service.list_all()
    return templates.TemplateResponse(request, "index.html", {"movies": movies})


@router.get("/movie/{identifier}", response_class=HTMLResponse)
async def show_movie(
    identifier: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
):
    try:
        movie = await service.get_by_movie_id(identifier)
    except NotFoundError:
        return movie_not_found()
    return templates.TemplateResponse(request, "show.html", {"movie": movie})


@router.get("/add", response_class=HTMLResponse)
async def add_movie_form(request: Request):
    return templates.TemplateResponse(request, "add.html", {})


@router.get("/edit/{identifier}", response_class=HTMLResponse)
async def edit_movie_form(
    identifier: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
):
    try:
        movie = await service.get_by_movie_id(identifier)
    except NotFoundError:
        return movie_not_found()
    return templates.TemplateResponse(request, "update.html", {"movie": movie})


@router.post("/delete/{identifier}")
async def delete_movie_form(
    identifier: str,
    service: MovieService = Depends(get_movie_service),
):
    try:
        await service.delete(identifier)
    except NotFoundError:
        return movie_not_found()
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
