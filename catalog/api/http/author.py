"""
Author endpoints using Repository + Command + Dependency Injection.

Each endpoint builds the matching command, executes it and hands the
outcome (view model or redirect) back to the client. Request bodies are
JSON objects of raw form fields; validation happens inside the commands.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import Response

from catalog.commands.author_commands import (
    CreateAuthorCommand,
    DeleteAuthorCommand,
    GetAuthorDetailCommand,
    ListAuthorsCommand,
    PrepareCreateAuthorCommand,
    PrepareDeleteAuthorCommand,
    PrepareUpdateAuthorCommand,
    UpdateAuthorCommand,
    UpdateAuthorInput,
)
from catalog.dependencies import AuthorRepoDep, BookRepoDep
from catalog.settings import app_settings
from catalog.utils.error_handler import handle_http_errors
from catalog.utils.responses import to_response

router = APIRouter(prefix=app_settings.CATALOG_URL_PREFIX, tags=["authors"])

RawForm = Annotated[dict[str, Any], Body()]


@router.get("/authors", response_model=None, summary="List all authors")
@handle_http_errors
async def author_list(repo: AuthorRepoDep) -> Response:
    """
    Display list of all authors, sorted by family name.

    Example:
        GET /catalog/authors
    """
    return to_response(await ListAuthorsCommand(repo).execute())


@router.get("/author/create", response_model=None, summary="Author create form")
async def author_create_get() -> Response:
    return to_response(await PrepareCreateAuthorCommand().execute())


@router.post("/author/create", response_model=None, summary="Create an author")
@handle_http_errors
async def author_create_post(raw: RawForm, repo: AuthorRepoDep) -> Response:
    """
    Handle author create.

    Example:
        POST /catalog/author/create
        {
            "first_name": "John",
            "family_name": "Doe",
            "date_of_birth": "1920-01-02"
        }
    """
    return to_response(await CreateAuthorCommand(repo).execute(raw))


@router.get("/author/{author_id}", response_model=None, summary="Author detail")
@handle_http_errors
async def author_detail(
    author_id: int, repo: AuthorRepoDep, books: BookRepoDep
) -> Response:
    """
    Display detail page for a specific author with their books.

    Raises:
        HTTPException: 404 if the author does not exist.
    """
    command = GetAuthorDetailCommand(repo, books)
    return to_response(await command.execute(author_id))


@router.get(
    "/author/{author_id}/delete",
    response_model=None,
    summary="Author delete confirmation",
)
@handle_http_errors
async def author_delete_get(
    author_id: int, repo: AuthorRepoDep, books: BookRepoDep
) -> Response:
    command = PrepareDeleteAuthorCommand(repo, books)
    return to_response(await command.execute(author_id))


@router.post(
    "/author/{author_id}/delete", response_model=None, summary="Delete an author"
)
@handle_http_errors
async def author_delete_post(
    author_id: int, repo: AuthorRepoDep, books: BookRepoDep
) -> Response:
    """
    Handle author delete.

    Redirects to the author list, or re-renders the confirmation view when
    books still reference the author.
    """
    command = DeleteAuthorCommand(repo, books)
    return to_response(await command.execute(author_id))


@router.get(
    "/author/{author_id}/update", response_model=None, summary="Author update form"
)
@handle_http_errors
async def author_update_get(author_id: int, repo: AuthorRepoDep) -> Response:
    return to_response(await PrepareUpdateAuthorCommand(repo).execute(author_id))


@router.post(
    "/author/{author_id}/update", response_model=None, summary="Update an author"
)
@handle_http_errors
async def author_update_post(
    author_id: int, raw: RawForm, repo: AuthorRepoDep
) -> Response:
    command = UpdateAuthorCommand(repo)
    input_data = UpdateAuthorInput(id=author_id, raw=raw)
    return to_response(await command.execute(input_data))
