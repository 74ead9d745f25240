"""
Base model for all database tables with async relationship support.

All table models inherit from BaseModel, which mixes SQLAlchemy's AsyncAttrs
into SQLModel so lazy relationships can be awaited instead of raising
MissingGreenlet in async contexts.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all catalog tables.

    Example:
        class Genre(BaseModel, table=True):
            id: int | None = Field(default=None, primary_key=True)
            name: str
    """

    pass
