"""
Dependency injection configuration for FastAPI.

This module provides dependency injection setup for database sessions and
repositories. Authors and genres are read and written through the request's
main session; books are read through a second session so the
entity-plus-dependents fan-out can run both reads at once.

Example:
    ```python
    from fastapi import APIRouter
    from catalog.dependencies import AuthorRepoDep, BookRepoDep

    router = APIRouter()

    @router.get("/author/{author_id}")
    async def author_detail(
        author_id: int, repo: AuthorRepoDep, books: BookRepoDep
    ) -> Response:
        ...
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.repositories.author_repository import AuthorRepository
from catalog.repositories.book_repository import BookRepository
from catalog.repositories.genre_repository import GenreRepository
from catalog.storage.db import get_read_session, get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]
ReadSessionDep = Annotated[AsyncSession, Depends(get_read_session)]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_author_repository(session: SessionDep) -> AuthorRepository:
    """
    Get author repository with injected database session.

    Args:
        session: Database session injected by FastAPI.

    Returns:
        AuthorRepository instance with session.
    """
    return AuthorRepository(session)


def get_genre_repository(session: SessionDep) -> GenreRepository:
    """Get genre repository with injected database session."""
    return GenreRepository(session)


def get_book_repository(session: ReadSessionDep) -> BookRepository:
    """Get book repository bound to the separate read session."""
    return BookRepository(session)


AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
GenreRepoDep = Annotated[GenreRepository, Depends(get_genre_repository)]
BookRepoDep = Annotated[BookRepository, Depends(get_book_repository)]
