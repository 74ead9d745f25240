"""
Repository for Author entity.

Example:
    ```python
    from catalog.repositories.author_repository import AuthorRepository
    from catalog.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        authors = await repo.get_all(order_by="family_name")
    ```
"""

from sqlalchemy import delete, exists
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.logging import logger
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Provides CRUD operations inherited from BaseRepository plus the
    conditional delete used by the atomic delete guard.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Author repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Author)

    async def remove_if_unreferenced(self, id: int) -> bool:
        """
        Delete the author only if no book references it.

        The dependent check and the delete are one statement, so no book
        can be attached between them.

        Args:
            id: Author primary key.

        Returns:
            True if the author row was deleted.
        """
        stmt = delete(Author).where(
            Author.id == id,
            ~exists().where(Book.author_id == id),
        ).execution_options(synchronize_session=False)
        try:
            result = await self.session.exec(stmt)  # type: ignore[call-overload]
            await self.session.flush()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting Author {id}: {e}")
            raise
