from sqlalchemy import delete, exists
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.logging import logger
from catalog.models.book import BookGenreLink
from catalog.models.genre import Genre
from catalog.repositories.base import BaseRepository


class GenreRepository(BaseRepository[Genre]):
    """
    Repository for Genre entity operations.

    Adds exact-name lookup (genre names are unique by value) and the
    conditional delete used by the atomic delete guard.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Genre)

    async def get_by_name(self, name: str) -> Genre | None:
        """
        Get genre by exact name match.

        Args:
            name: Normalized (trimmed, escaped) genre name.

        Returns:
            Genre if found, None otherwise.
        """
        stmt = select(Genre).where(Genre.name == name)
        try:
            result = await self.session.exec(stmt)
            return result.first()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving Genre by name: {e}")
            raise

    async def remove_if_unreferenced(self, id: int) -> bool:
        """Delete the genre only if no book links to it, in one statement."""
        stmt = delete(Genre).where(
            Genre.id == id,
            ~exists().where(BookGenreLink.genre_id == id),
        ).execution_options(synchronize_session=False)
        try:
            result = await self.session.exec(stmt)  # type: ignore[call-overload]
            await self.session.flush()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting Genre {id}: {e}")
            raise
