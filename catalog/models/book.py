"""
Book tables.

Books are the dependents of Author and Genre: a Book references exactly one
Author and any number of Genres (through BookGenreLink). The catalog core
only reads them, to guard parent deletes and to list them on detail pages.
"""

from sqlmodel import Field

from catalog.models.base import BaseModel
from catalog.projections import entity_url


class BookGenreLink(BaseModel, table=True):
    __tablename__ = "book_genre"
    __table_args__ = {"extend_existing": True}

    book_id: int | None = Field(
        default=None, foreign_key="book.id", primary_key=True
    )
    genre_id: int | None = Field(
        default=None, foreign_key="genre.id", primary_key=True, index=True
    )


class Book(BaseModel, table=True):
    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    title: str
    summary: str
    isbn: str
    author_id: int = Field(foreign_key="author.id", index=True)

    @property
    def url(self) -> str:
        return entity_url("book", self.id)
