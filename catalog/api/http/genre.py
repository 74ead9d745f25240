"""Genre endpoints using Repository + Command + Dependency Injection."""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import Response

from catalog.commands.genre_commands import (
    CreateGenreCommand,
    DeleteGenreCommand,
    GetGenreDetailCommand,
    ListGenresCommand,
    PrepareCreateGenreCommand,
    PrepareDeleteGenreCommand,
    PrepareUpdateGenreCommand,
    UpdateGenreCommand,
    UpdateGenreInput,
)
from catalog.dependencies import BookRepoDep, GenreRepoDep
from catalog.settings import app_settings
from catalog.utils.error_handler import handle_http_errors
from catalog.utils.responses import to_response

router = APIRouter(prefix=app_settings.CATALOG_URL_PREFIX, tags=["genres"])

RawForm = Annotated[dict[str, Any], Body()]


@router.get("/genres", response_model=None, summary="List all genres")
@handle_http_errors
async def genre_list(repo: GenreRepoDep) -> Response:
    return to_response(await ListGenresCommand(repo).execute())


@router.get("/genre/create", response_model=None, summary="Genre create form")
async def genre_create_get() -> Response:
    return to_response(await PrepareCreateGenreCommand().execute())


@router.post("/genre/create", response_model=None, summary="Create a genre")
@handle_http_errors
async def genre_create_post(raw: RawForm, repo: GenreRepoDep) -> Response:
    """
    Handle genre create.

    Posting a name that already exists redirects to the existing genre
    instead of creating a duplicate.

    Example:
        POST /catalog/genre/create
        {
            "name": "Fantasy"
        }
    """
    return to_response(await CreateGenreCommand(repo).execute(raw))


@router.get("/genre/{genre_id}", response_model=None, summary="Genre detail")
@handle_http_errors
async def genre_detail(
    genre_id: int, repo: GenreRepoDep, books: BookRepoDep
) -> Response:
    command = GetGenreDetailCommand(repo, books)
    return to_response(await command.execute(genre_id))


@router.get(
    "/genre/{genre_id}/delete",
    response_model=None,
    summary="Genre delete confirmation",
)
@handle_http_errors
async def genre_delete_get(
    genre_id: int, repo: GenreRepoDep, books: BookRepoDep
) -> Response:
    command = PrepareDeleteGenreCommand(repo, books)
    return to_response(await command.execute(genre_id))


@router.post(
    "/genre/{genre_id}/delete", response_model=None, summary="Delete a genre"
)
@handle_http_errors
async def genre_delete_post(
    genre_id: int, repo: GenreRepoDep, books: BookRepoDep
) -> Response:
    command = DeleteGenreCommand(repo, books)
    return to_response(await command.execute(genre_id))


@router.get(
    "/genre/{genre_id}/update", response_model=None, summary="Genre update form"
)
@handle_http_errors
async def genre_update_get(
    genre_id: int, repo: GenreRepoDep, books: BookRepoDep
) -> Response:
    command = PrepareUpdateGenreCommand(repo, books)
    return to_response(await command.execute(genre_id))


@router.post(
    "/genre/{genre_id}/update", response_model=None, summary="Update a genre"
)
@handle_http_errors
async def genre_update_post(
    genre_id: int, raw: RawForm, repo: GenreRepoDep
) -> Response:
    command = UpdateGenreCommand(repo)
    input_data = UpdateGenreInput(id=genre_id, raw=raw)
    return to_response(await command.execute(input_data))
