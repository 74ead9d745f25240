"""
Commands for Author operations.

Every write goes through the Author form pipeline first; invalid input
re-renders the form with sanitized values and all field errors. Deletes are
guarded: an author with books is never removed.

Example:
    ```python
    from catalog.commands.author_commands import CreateAuthorCommand

    outcome = await CreateAuthorCommand(repo).execute(
        {"first_name": " John ", "family_name": "Doe123"}
    )
    # Redirect(url="/catalog/author/1")
    ```
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from catalog.commands.base import BaseCommand
from catalog.constants import (
    AUTHOR_DELETE_VIEW,
    AUTHOR_DETAIL_VIEW,
    AUTHOR_FORM_VIEW,
    AUTHOR_LIST_VIEW,
)
from catalog.exceptions import NotFoundError
from catalog.logging import logger
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.projections import catalog_url, project_author, project_book
from catalog.protocols import BookReader, GuardedRepository, Repository
from catalog.schemas.outcomes import CommandOutcome, Redirect, ViewResponse
from catalog.settings import app_settings
from catalog.utils.concurrency import fan_out
from catalog.validation.forms import validate_author_form

# ============================================================================
# Input Models
# ============================================================================


class UpdateAuthorInput(BaseModel):  # type: ignore[misc]
    """Input model for updating an author."""

    id: int = Field(..., description="Author ID to update")
    raw: dict[str, Any] = Field(
        default_factory=dict, description="Raw, unvalidated form fields"
    )


def author_list_url() -> str:
    return catalog_url("authors")


def _delete_view(author: Author, books: list[Book]) -> ViewResponse:
    return ViewResponse(
        view=AUTHOR_DELETE_VIEW,
        title="Delete author",
        data={
            "author": project_author(author),
            "author_books": [project_book(book) for book in books],
        },
    )


# ============================================================================
# Commands
# ============================================================================


class ListAuthorsCommand(BaseCommand[None, ViewResponse]):
    """Command to list all authors ordered by family name."""

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: None = None) -> ViewResponse:
        authors = await self.repository.get_all(order_by="family_name")
        return ViewResponse(
            view=AUTHOR_LIST_VIEW,
            title="Authors list",
            data={"author_list": [project_author(author) for author in authors]},
        )


class GetAuthorDetailCommand(BaseCommand[int, ViewResponse]):
    """
    Command to show one author with the books they wrote.

    The author and their books are read concurrently.
    """

    def __init__(self, repository: Repository[Author], books: BookReader):
        """
        Initialize command with repositories.

        Args:
            repository: Author repository.
            books: Book reader, backed by a separate session.
        """
        self.repository = repository
        self.books = books

    async def execute(self, author_id: int) -> ViewResponse:
        """
        Execute command to load the author detail view.

        Raises:
            NotFoundError: If the author does not exist.
        """
        author, books = await fan_out(
            self.repository.get_by_id(author_id),
            self.books.get_by_author(author_id),
        )
        if author is None:
            raise NotFoundError("Author not found")

        return ViewResponse(
            view=AUTHOR_DETAIL_VIEW,
            title="Author Detail",
            data={
                "author": project_author(author),
                "author_books": [project_book(book) for book in books],
            },
        )


class PrepareCreateAuthorCommand(BaseCommand[None, ViewResponse]):
    """Command to show the empty author form."""

    async def execute(self, input_data: None = None) -> ViewResponse:
        return ViewResponse(view=AUTHOR_FORM_VIEW, title="Create author")


class CreateAuthorCommand(BaseCommand[Mapping[str, Any], CommandOutcome]):
    """
    Command to create a new author.

    Authors have no uniqueness rule: valid input is always inserted.
    """

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, raw: Mapping[str, Any]) -> CommandOutcome:
        """
        Execute command to create an author from raw form fields.

        Args:
            raw: Untrusted form fields.

        Returns:
            The re-rendered form when validation fails, otherwise a
            redirect to the new author's page.
        """
        result = validate_author_form(raw)
        if not result.ok:
            logger.info(
                f"Author form rejected with {len(result.errors)} error(s)"
            )
            return ViewResponse(
                view=AUTHOR_FORM_VIEW,
                title="Create author",
                data={"author": result.fields},
                errors=result.errors,
            )

        author = await self.repository.create(Author(**result.fields))
        logger.info(f"Created author {author.id}")
        return Redirect(url=author.url)


class PrepareDeleteAuthorCommand(BaseCommand[int, CommandOutcome]):
    """
    Command to show the delete confirmation for an author.

    A missing author is treated as already deleted.
    """

    def __init__(self, repository: Repository[Author], books: BookReader):
        self.repository = repository
        self.books = books

    async def execute(self, author_id: int) -> CommandOutcome:
        author, books = await fan_out(
            self.repository.get_by_id(author_id),
            self.books.get_by_author(author_id),
        )
        if author is None:
            return Redirect(url=author_list_url())

        return _delete_view(author, books)


class DeleteAuthorCommand(BaseCommand[int, CommandOutcome]):
    """
    Command to delete an author unless books still reference them.

    The author and their books are re-read right before the write; an
    earlier confirmation page is never trusted. With atomic=True the
    dependent check is repeated inside the DELETE statement itself.
    """

    def __init__(
        self,
        repository: GuardedRepository[Author],
        books: BookReader,
        atomic: bool | None = None,
    ):
        """
        Initialize command with repositories.

        Args:
            repository: Author repository.
            books: Book reader, backed by a separate session.
            atomic: Use the conditional delete. Defaults to
                app_settings.ATOMIC_DELETE_GUARD.
        """
        self.repository = repository
        self.books = books
        self.atomic = (
            app_settings.ATOMIC_DELETE_GUARD if atomic is None else atomic
        )

    async def execute(self, author_id: int) -> CommandOutcome:
        """
        Execute command to delete an author.

        Returns:
            The delete view when books reference the author, otherwise a
            redirect to the author list.
        """
        author, books = await fan_out(
            self.repository.get_by_id(author_id),
            self.books.get_by_author(author_id),
        )
        if author is None:
            return Redirect(url=author_list_url())

        if books:
            logger.warning(
                f"Refusing to delete author {author_id}: {len(books)} book(s) reference it"
            )
            return _delete_view(author, books)

        if self.atomic:
            removed = await self.repository.remove_if_unreferenced(author_id)
            if not removed:
                author, books = await fan_out(
                    self.repository.get_by_id(author_id),
                    self.books.get_by_author(author_id),
                )
                if author is not None and books:
                    logger.warning(
                        f"Refusing to delete author {author_id}: book added concurrently"
                    )
                    return _delete_view(author, books)

                logger.info(f"Author {author_id} already absent, nothing deleted")
                return Redirect(url=author_list_url())
        else:
            await self.repository.remove_by_id(author_id)

        logger.info(f"Deleted author {author_id}")
        return Redirect(url=author_list_url())


class PrepareUpdateAuthorCommand(BaseCommand[int, CommandOutcome]):
    """Command to show the author form prefilled for editing."""

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, author_id: int) -> CommandOutcome:
        author = await self.repository.get_by_id(author_id)
        if author is None:
            return Redirect(url=author_list_url())

        return ViewResponse(
            view=AUTHOR_FORM_VIEW,
            title="Update author",
            data={"author": project_author(author)},
        )


class UpdateAuthorCommand(BaseCommand[UpdateAuthorInput, CommandOutcome]):
    """
    Command to replace all fields of an existing author.

    The author keeps its id; the row is updated in place.
    """

    def __init__(self, repository: Repository[Author]):
        self.repository = repository

    async def execute(self, input_data: UpdateAuthorInput) -> CommandOutcome:
        """
        Execute command to update an author.

        Returns:
            The re-rendered form when validation fails, otherwise a
            redirect to the author's page.

        Raises:
            NotFoundError: If the author disappeared before the write.
        """
        result = validate_author_form(input_data.raw)
        if not result.ok:
            return ViewResponse(
                view=AUTHOR_FORM_VIEW,
                title="Update author",
                data={"author": {**result.fields, "id": input_data.id}},
                errors=result.errors,
            )

        author = await self.repository.replace_by_id(input_data.id, result.fields)
        if author is None:
            raise NotFoundError(f"Author with ID {input_data.id} not found")

        logger.info(f"Updated author {author.id}")
        return Redirect(url=author.url)
