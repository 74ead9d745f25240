"""
Protocol classes for structural subtyping (duck typing with type safety).

Commands depend on these protocols rather than on the SQLModel repositories,
so any object with the right async methods (an in-memory fake, an AsyncMock)
can stand in for the store.

Example:
    ```python
    from catalog.protocols import Repository
    from catalog.models.author import Author


    async def rename(repo: Repository[Author]) -> None:
        await repo.replace_by_id(1, {"first_name": "Jane"})
    ```
"""

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from catalog.models.book import Book

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """
    Protocol for the persistence collaborator of one entity kind.

    Type Parameters:
        T: The entity type this repository manages.
    """

    async def get_by_id(self, id: int) -> T | None:
        """Get entity by primary key ID, or None."""
        ...

    async def get_all(
        self, order_by: str | None = None, **filters: Any
    ) -> list[T]:
        """Get all entities matching the filters, optionally sorted."""
        ...

    async def create(self, entity: T) -> T:
        """Insert the entity and return it with its assigned id."""
        ...

    async def replace_by_id(
        self, id: int, fields: Mapping[str, Any]
    ) -> T | None:
        """Replace the entity's fields in place, or return None if absent."""
        ...

    async def remove_by_id(self, id: int) -> bool:
        """Delete the entity; False if it did not exist."""
        ...

    async def exists(self, **filters: Any) -> bool:
        """Check if an entity matching the filters exists."""
        ...


@runtime_checkable
class GuardedRepository(Repository[T], Protocol[T]):
    """Repository able to delete a parent only when it has no dependents."""

    async def remove_if_unreferenced(self, id: int) -> bool:
        """Delete the entity in one statement if nothing references it."""
        ...


@runtime_checkable
class BookReader(Protocol):
    """Read access to the dependents of authors and genres."""

    async def get_by_author(self, author_id: int) -> list[Book]:
        """Books referencing the author (title and summary only)."""
        ...

    async def get_by_genre(self, genre_id: int) -> list[Book]:
        """Full records of books linked to the genre."""
        ...
