"""
Read-only repository for Book, the dependent of Author and Genre.

Books are never written by the catalog core; these queries feed the
detail pages and the parent delete guard.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import load_only
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.logging import logger
from catalog.models.book import Book, BookGenreLink
from catalog.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Repository for Book dependent lookups."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Book)

    async def get_by_author(self, author_id: int) -> list[Book]:
        """
        Get the books written by an author.

        Only id, title and summary are loaded.

        Args:
            author_id: Author primary key.

        Returns:
            Books referencing the author, ordered by title.
        """
        stmt = (
            select(Book)
            .where(Book.author_id == author_id)
            .options(load_only(Book.title, Book.summary))  # type: ignore[arg-type]
            .order_by(Book.title)
        )
        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving books of Author {author_id}: {e}")
            raise

    async def get_by_genre(self, genre_id: int) -> list[Book]:
        """
        Get the full records of books linked to a genre.

        Args:
            genre_id: Genre primary key.

        Returns:
            Books linked to the genre, ordered by title.
        """
        stmt = (
            select(Book)
            .join(BookGenreLink, BookGenreLink.book_id == Book.id)  # type: ignore[arg-type]
            .where(BookGenreLink.genre_id == genre_id)
            .order_by(Book.title)
        )
        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving books of Genre {genre_id}: {e}")
            raise
