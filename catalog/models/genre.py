from sqlmodel import Field

from catalog.models.base import BaseModel
from catalog.projections import entity_url


class Genre(BaseModel, table=True):
    """
    SQLModel representing a book genre.

    Genre names are unique by value; the unique index backs the
    create-time lookup done by CreateGenreCommand.

    Attributes:
        id: Primary key identifier for the genre
        name: Genre name (escaped, trimmed)
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)

    @property
    def url(self) -> str:
        return entity_url("genre", self.id)
