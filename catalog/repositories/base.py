"""
Generic SQLModel repository.

A repository owns every statement issued for one table; commands only see
it through the protocols in catalog.protocols. Reads log and re-raise store
errors; writes also roll the session back before re-raising.

Subclasses add table-specific queries:

    class GenreRepository(BaseRepository[Genre]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Genre)

        async def get_by_name(self, name: str) -> Genre | None:
            result = await self.session.exec(select(Genre).where(Genre.name == name))
            return result.first()
"""

from typing import Any, Generic, Mapping, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar

from catalog.logging import logger

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    CRUD over a single SQLModel table.

    Attributes:
        session: Session every statement runs on.
        model: Table model class.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _select(self, filters: Mapping[str, Any]) -> SelectOfScalar[T]:
        """SELECT of the model with one equality clause per non-None filter."""
        stmt = select(self.model)
        for column, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(self.model, column) == value)
        return stmt

    async def _rollback(self, action: str, ex: SQLAlchemyError) -> None:
        await self.session.rollback()
        logger.error(f"Error {action}: {ex}")

    async def get_by_id(self, id: int) -> T | None:
        """Entity with primary key `id`, or None."""
        try:
            return await self.session.get(self.model, id)
        except SQLAlchemyError as ex:
            logger.error(f"Error retrieving {self._name} {id}: {ex}")
            raise

    async def get_all(
        self, order_by: str | None = None, **filters: Any
    ) -> list[T]:
        """
        Entities whose columns equal the given filters.

        Args:
            order_by: Column to sort ascending by; store order when None.
            **filters: Column name to required value; None values are
                ignored, e.g. get_all(name="Fantasy").

        Raises:
            SQLAlchemyError: If the query fails.
        """
        stmt = self._select(filters)
        if order_by is not None:
            stmt = stmt.order_by(getattr(self.model, order_by).asc())

        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as ex:
            logger.error(f"Error listing {self._name}: {ex}")
            raise

    async def exists(self, **filters: Any) -> bool:
        """True if at least one entity matches the filters."""
        try:
            result = await self.session.exec(self._select(filters))
            return result.first() is not None
        except SQLAlchemyError as ex:
            logger.error(f"Error checking existence of {self._name}: {ex}")
            raise

    async def create(self, entity: T) -> T:
        """
        Insert `entity` and return it with its store-assigned id.

        Raises:
            SQLAlchemyError: If the insert fails (e.g. a unique constraint).
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as ex:
            await self._rollback(f"creating {self._name}", ex)
            raise

    async def replace_by_id(
        self, id: int, fields: Mapping[str, Any]
    ) -> T | None:
        """
        Overwrite the given fields of entity `id` in place.

        The row keeps its primary key; nothing is re-inserted.

        Returns:
            The updated entity, or None if `id` does not resolve.

        Raises:
            SQLAlchemyError: If the update fails.
        """
        try:
            entity = await self.session.get(self.model, id)
            if entity is None:
                return None

            for column, value in fields.items():
                setattr(entity, column, value)

            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as ex:
            await self._rollback(f"updating {self._name} {id}", ex)
            raise

    async def remove_by_id(self, id: int) -> bool:
        """
        Delete entity `id`.

        Returns:
            False if `id` did not resolve, True otherwise.
        """
        try:
            entity = await self.session.get(self.model, id)
            if entity is None:
                return False

            await self.session.delete(entity)
            await self.session.flush()
            return True
        except SQLAlchemyError as ex:
            await self._rollback(f"deleting {self._name} {id}", ex)
            raise
