"""
Commands for Genre operations.

Genres mirror authors with two differences: creating a genre whose
normalized name already exists is a no-op redirect to the existing genre,
and a successful update redirects to the genre list rather than the genre.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from catalog.commands.base import BaseCommand
from catalog.constants import (
    GENRE_DELETE_VIEW,
    GENRE_DETAIL_VIEW,
    GENRE_FORM_VIEW,
    GENRE_LIST_VIEW,
    GENRE_NAME_TAKEN,
)
from catalog.exceptions import NotFoundError
from catalog.logging import logger
from catalog.models.book import Book
from catalog.models.genre import Genre
from catalog.projections import catalog_url, project_book, project_genre
from catalog.protocols import BookReader, GuardedRepository, Repository
from catalog.repositories.genre_repository import GenreRepository
from catalog.schemas.outcomes import CommandOutcome, Redirect, ViewResponse
from catalog.settings import app_settings
from catalog.utils.concurrency import fan_out
from catalog.validation.forms import validate_genre_form
from catalog.validation.pipeline import FieldError


class UpdateGenreInput(BaseModel):  # type: ignore[misc]
    """Input model for updating a genre."""

    id: int = Field(..., description="Genre ID to update")
    raw: dict[str, Any] = Field(
        default_factory=dict, description="Raw, unvalidated form fields"
    )


def genre_list_url() -> str:
    return catalog_url("genres")


def _delete_view(genre: Genre, books: list[Book]) -> ViewResponse:
    return ViewResponse(
        view=GENRE_DELETE_VIEW,
        title="Delete genre",
        data={
            "genre": project_genre(genre),
            "books": [project_book(book) for book in books],
        },
    )


class ListGenresCommand(BaseCommand[None, ViewResponse]):
    """Command to list all genres ordered by name."""

    def __init__(self, repository: Repository[Genre]):
        self.repository = repository

    async def execute(self, input_data: None = None) -> ViewResponse:
        genres = await self.repository.get_all(order_by="name")
        return ViewResponse(
            view=GENRE_LIST_VIEW,
            title="List of genre",
            data={"genre_list": [project_genre(genre) for genre in genres]},
        )


class GetGenreDetailCommand(BaseCommand[int, ViewResponse]):
    """Command to show one genre with all of its books."""

    def __init__(self, repository: Repository[Genre], books: BookReader):
        self.repository = repository
        self.books = books

    async def execute(self, genre_id: int) -> ViewResponse:
        """
        Execute command to load the genre detail view.

        Raises:
            NotFoundError: If the genre does not exist.
        """
        genre, books = await fan_out(
            self.repository.get_by_id(genre_id),
            self.books.get_by_genre(genre_id),
        )
        if genre is None:
            raise NotFoundError("Genre not found")

        return ViewResponse(
            view=GENRE_DETAIL_VIEW,
            title="Genre detail",
            data={
                "genre": project_genre(genre),
                "genre_books": [project_book(book) for book in books],
            },
        )


class PrepareCreateGenreCommand(BaseCommand[None, ViewResponse]):
    """Command to show the empty genre form."""

    async def execute(self, input_data: None = None) -> ViewResponse:
        return ViewResponse(view=GENRE_FORM_VIEW, title="Create genre")


class CreateGenreCommand(BaseCommand[Mapping[str, Any], CommandOutcome]):
    """
    Command to create a genre, idempotent by name.

    Note: Uses concrete GenreRepository type because it requires the
    get_by_name() extension method.
    """

    def __init__(self, repository: GenreRepository):
        self.repository = repository

    async def execute(self, raw: Mapping[str, Any]) -> CommandOutcome:
        """
        Execute command to create a genre from raw form fields.

        Returns:
            The re-rendered form when validation fails, otherwise a
            redirect to the existing genre with that name or to the newly
            created one.
        """
        result = validate_genre_form(raw)
        if not result.ok:
            return ViewResponse(
                view=GENRE_FORM_VIEW,
                title="Create genre",
                data={"genre": result.fields},
                errors=result.errors,
            )

        name = result.fields["name"]
        existing = await self.repository.get_by_name(name)
        if existing is not None:
            logger.info(f"Genre {existing.id} already named {name!r}, not creating")
            return Redirect(url=existing.url)

        genre = await self.repository.create(Genre(name=name))
        logger.info(f"Created genre {genre.id}")
        return Redirect(url=genre.url)


class PrepareDeleteGenreCommand(BaseCommand[int, CommandOutcome]):
    """Command to show the delete confirmation for a genre."""

    def __init__(self, repository: Repository[Genre], books: BookReader):
        self.repository = repository
        self.books = books

    async def execute(self, genre_id: int) -> CommandOutcome:
        genre, books = await fan_out(
            self.repository.get_by_id(genre_id),
            self.books.get_by_genre(genre_id),
        )
        if genre is None:
            return Redirect(url=genre_list_url())

        return _delete_view(genre, books)


class DeleteGenreCommand(BaseCommand[int, CommandOutcome]):
    """
    Command to delete a genre unless books are still linked to it.

    Same guard as DeleteAuthorCommand: re-read before writing, optionally
    repeat the check inside the DELETE statement.
    """

    def __init__(
        self,
        repository: GuardedRepository[Genre],
        books: BookReader,
        atomic: bool | None = None,
    ):
        self.repository = repository
        self.books = books
        self.atomic = (
            app_settings.ATOMIC_DELETE_GUARD if atomic is None else atomic
        )

    async def execute(self, genre_id: int) -> CommandOutcome:
        genre, books = await fan_out(
            self.repository.get_by_id(genre_id),
            self.books.get_by_genre(genre_id),
        )
        if genre is None:
            return Redirect(url=genre_list_url())

        if books:
            logger.warning(
                f"Refusing to delete genre {genre_id}: {len(books)} book(s) linked"
            )
            return _delete_view(genre, books)

        if self.atomic:
            removed = await self.repository.remove_if_unreferenced(genre_id)
            if not removed:
                genre, books = await fan_out(
                    self.repository.get_by_id(genre_id),
                    self.books.get_by_genre(genre_id),
                )
                if genre is not None and books:
                    logger.warning(
                        f"Refusing to delete genre {genre_id}: book linked concurrently"
                    )
                    return _delete_view(genre, books)

                logger.info(f"Genre {genre_id} already absent, nothing deleted")
                return Redirect(url=genre_list_url())
        else:
            await self.repository.remove_by_id(genre_id)

        logger.info(f"Deleted genre {genre_id}")
        return Redirect(url=genre_list_url())


class PrepareUpdateGenreCommand(BaseCommand[int, CommandOutcome]):
    """Command to show the genre form prefilled, with the genre's books."""

    def __init__(self, repository: Repository[Genre], books: BookReader):
        self.repository = repository
        self.books = books

    async def execute(self, genre_id: int) -> CommandOutcome:
        genre, books = await fan_out(
            self.repository.get_by_id(genre_id),
            self.books.get_by_genre(genre_id),
        )
        if genre is None:
            return Redirect(url=genre_list_url())

        return ViewResponse(
            view=GENRE_FORM_VIEW,
            title="Update genre",
            data={
                "genre": project_genre(genre),
                "books": [project_book(book) for book in books],
            },
        )


class UpdateGenreCommand(BaseCommand[UpdateGenreInput, CommandOutcome]):
    """
    Command to rename a genre, keeping its id.

    Note: Uses concrete GenreRepository type because a name held by another
    genre is reported on the form through get_by_name().
    """

    def __init__(self, repository: GenreRepository):
        self.repository = repository

    async def execute(self, input_data: UpdateGenreInput) -> CommandOutcome:
        """
        Execute command to update a genre.

        Returns:
            The re-rendered form when validation fails or another genre
            already has the name, otherwise a redirect to the genre list.

        Raises:
            NotFoundError: If the genre disappeared before the write.
        """
        result = validate_genre_form(input_data.raw)
        errors = list(result.errors)

        if result.ok:
            name = result.fields["name"]
            holder = await self.repository.get_by_name(name)
            if holder is not None and holder.id != input_data.id:
                logger.info(f"Genre {holder.id} already named {name!r}, not renaming")
                errors.append(
                    FieldError(field="name", msg=GENRE_NAME_TAKEN, value=name)
                )

        if errors:
            return ViewResponse(
                view=GENRE_FORM_VIEW,
                title="Update genre",
                data={"genre": {**result.fields, "id": input_data.id}},
                errors=errors,
            )

        genre = await self.repository.replace_by_id(input_data.id, result.fields)
        if genre is None:
            raise NotFoundError(f"Genre with ID {input_data.id} not found")

        logger.info(f"Updated genre {genre.id}")
        return Redirect(url=genre_list_url())
