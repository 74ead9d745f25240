"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for repositories, sample entities,
and other common testing utilities.
"""

import os
from datetime import date

import pytest

# Set environment before importing catalog modules
os.environ.setdefault("LOG_FILE_PATH", os.devnull)
os.environ.setdefault("ENVIRONMENT", "test")

from tests.mocks.repository_mocks import (  # noqa: E402
    create_mock_author_repository,
    create_mock_book_repository,
    create_mock_genre_repository,
)


@pytest.fixture
def author_repo():
    """
    Provides a mocked AuthorRepository.

    Returns:
        AsyncMock: Author repository with empty defaults.
    """
    return create_mock_author_repository()


@pytest.fixture
def genre_repo():
    """
    Provides a mocked GenreRepository.

    Returns:
        AsyncMock: Genre repository with empty defaults.
    """
    return create_mock_genre_repository()


@pytest.fixture
def book_repo():
    """
    Provides a mocked BookRepository that finds no books.

    Returns:
        AsyncMock: Book repository returning empty lists.
    """
    return create_mock_book_repository()


@pytest.fixture
def sample_author():
    """Provides a fully populated Author."""
    from catalog.models.author import Author

    return Author(
        id=1,
        first_name="Isaac",
        family_name="Asimov",
        date_of_birth=date(1920, 1, 2),
        date_of_death=date(1992, 4, 6),
    )


@pytest.fixture
def sample_genre():
    """Provides a Genre."""
    from catalog.models.genre import Genre

    return Genre(id=3, name="Fantasy")


@pytest.fixture
def sample_books():
    """Provides two Books by the sample author."""
    from catalog.models.book import Book

    return [
        Book(id=10, title="Foundation", summary="Psychohistory", isbn="1", author_id=1),
        Book(id=11, title="I, Robot", summary="Three laws", isbn="2", author_id=1),
    ]
