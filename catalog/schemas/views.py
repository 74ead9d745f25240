"""
Read-only view models handed to the view layer.

These are display projections built by catalog.projections; they carry the
stored fields plus derived attributes and are never written back.
"""

from datetime import date

from pydantic import BaseModel


class AuthorView(BaseModel):  # type: ignore[misc]
    id: int | None = None
    first_name: str | None = None
    family_name: str | None = None
    date_of_birth: date | None = None
    date_of_death: date | None = None
    full_name: str = ""
    lifespan: str
    url: str
    date_of_birth_formatted: str = ""
    date_of_death_formatted: str = ""


class GenreView(BaseModel):  # type: ignore[misc]
    id: int | None = None
    name: str | None = None
    url: str


class BookView(BaseModel):  # type: ignore[misc]
    id: int | None = None
    title: str | None = None
    summary: str | None = None
    url: str
