"""
View-model projector.

Pure functions deriving display-only attributes from stored entity fields.
Nothing here touches the database, caches, or raises: partially populated
records (missing names, missing dates) project to empty strings or the
"unknown" lifespan sentinel.

Example:
    ```python
    from catalog.projections import full_name, lifespan, project_author

    full_name("John", "Doe")  # "John Doe"
    full_name("John", None)  # ""
    lifespan(date(1900, 1, 1), None)  # "unknown"

    view = project_author(author)
    view.url  # "/catalog/author/1"
    ```
"""

from datetime import date
from typing import Any

from catalog.constants import DISPLAY_DATE_FORMAT, LIFESPAN_UNKNOWN
from catalog.schemas.views import AuthorView, BookView, GenreView
from catalog.settings import app_settings


def full_name(first_name: str | None, family_name: str | None) -> str:
    """
    Join first and family name with a single space.

    Returns an empty string when either part is missing or empty.
    """
    if not first_name or not family_name:
        return ""
    return f"{first_name} {family_name}"


def lifespan(date_of_birth: Any, date_of_death: Any) -> str:
    """
    Years between birth and death, as a string.

    Args:
        date_of_birth: Birth date, or None.
        date_of_death: Death date, or None.

    Returns:
        Death year minus birth year, or LIFESPAN_UNKNOWN unless both
        values are dates.
    """
    if isinstance(date_of_birth, date) and isinstance(date_of_death, date):
        return str(date_of_death.year - date_of_birth.year)
    return LIFESPAN_UNKNOWN


def format_date(value: Any) -> str:
    """Format a date as YYYY-MM-DD, or return "" when absent."""
    if not isinstance(value, date):
        return ""
    return value.strftime(DISPLAY_DATE_FORMAT)


def catalog_url(*parts: Any) -> str:
    """
    Build a catalog path under the configured URL prefix.

    Example:
        >>> catalog_url("author", 7)
        '/catalog/author/7'
    """
    prefix = app_settings.CATALOG_URL_PREFIX.rstrip("/")
    return "/".join([prefix, *(str(part) for part in parts)])


def entity_url(kind: str, entity_id: Any) -> str:
    """Canonical URL of an entity of the given kind."""
    return catalog_url(kind, entity_id)


def project_author(author: Any) -> AuthorView:
    """
    Build the read-only Author view model.

    Args:
        author: Author record (any object exposing the Author fields).

    Returns:
        AuthorView with stored fields plus derived attributes.
    """
    first = getattr(author, "first_name", None)
    family = getattr(author, "family_name", None)
    born = getattr(author, "date_of_birth", None)
    died = getattr(author, "date_of_death", None)
    author_id = getattr(author, "id", None)

    return AuthorView(
        id=author_id,
        first_name=first,
        family_name=family,
        date_of_birth=born if isinstance(born, date) else None,
        date_of_death=died if isinstance(died, date) else None,
        full_name=full_name(first, family),
        lifespan=lifespan(born, died),
        url=entity_url("author", author_id),
        date_of_birth_formatted=format_date(born),
        date_of_death_formatted=format_date(died),
    )


def project_genre(genre: Any) -> GenreView:
    """Build the read-only Genre view model."""
    genre_id = getattr(genre, "id", None)
    return GenreView(
        id=genre_id,
        name=getattr(genre, "name", None),
        url=entity_url("genre", genre_id),
    )


def project_book(book: Any) -> BookView:
    """Build the read-only Book view model (fields not loaded stay None)."""
    book_id = getattr(book, "id", None)
    return BookView(
        id=book_id,
        title=getattr(book, "title", None),
        summary=getattr(book, "summary", None),
        url=entity_url("book", book_id),
    )
