"""
Tests for the derived-field projector.

Derived attributes must be total: partially populated records never raise.
"""

from datetime import date
from types import SimpleNamespace

import pytest

from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.genre import Genre
from catalog.projections import (
    catalog_url,
    entity_url,
    format_date,
    full_name,
    lifespan,
    project_author,
    project_book,
    project_genre,
)


class TestFullName:
    def test_joins_with_single_space(self):
        assert full_name("John", "Doe") == "John Doe"

    @pytest.mark.parametrize(
        "first, family", [("John", None), (None, "Doe"), ("", "Doe"), (None, None)]
    )
    def test_missing_part_is_empty(self, first, family):
        assert full_name(first, family) == ""


class TestLifespan:
    def test_year_difference(self):
        assert lifespan(date(1920, 1, 2), date(1992, 4, 6)) == "72"

    def test_same_year(self):
        assert lifespan(date(1900, 1, 1), date(1900, 12, 31)) == "0"

    @pytest.mark.parametrize(
        "born, died",
        [
            (date(1900, 1, 1), None),
            (None, date(1900, 1, 1)),
            (None, None),
            ("1900-01-01", date(1950, 1, 1)),
        ],
    )
    def test_unknown_when_a_date_is_missing(self, born, died):
        assert lifespan(born, died) == "unknown"


class TestUrls:
    def test_entity_urls(self):
        assert entity_url("author", 7) == "/catalog/author/7"
        assert entity_url("genre", 3) == "/catalog/genre/3"
        assert entity_url("book", 10) == "/catalog/book/10"

    def test_list_url(self):
        assert catalog_url("authors") == "/catalog/authors"

    def test_format_date(self):
        assert format_date(date(1920, 1, 2)) == "1920-01-02"
        assert format_date(None) == ""


class TestProjectAuthor:
    def test_full_record(self, sample_author):
        view = project_author(sample_author)

        assert view.id == 1
        assert view.full_name == "Isaac Asimov"
        assert view.lifespan == "72"
        assert view.url == "/catalog/author/1"
        assert view.date_of_birth_formatted == "1920-01-02"
        assert view.date_of_death_formatted == "1992-04-06"

    def test_partial_record_does_not_raise(self):
        view = project_author(SimpleNamespace(id=5, first_name="Jane"))

        assert view.full_name == ""
        assert view.lifespan == "unknown"
        assert view.url == "/catalog/author/5"
        assert view.date_of_birth_formatted == ""

    def test_model_properties_match_projection(self):
        author = Author(id=2, first_name="Ann", family_name="Lee")

        assert author.full_name == "Ann Lee"
        assert author.lifespan == "unknown"
        assert author.url == "/catalog/author/2"


class TestProjectGenreAndBook:
    def test_genre(self):
        view = project_genre(Genre(id=3, name="Fantasy"))

        assert view.name == "Fantasy"
        assert view.url == "/catalog/genre/3"

    def test_book_with_partial_fields(self):
        view = project_book(SimpleNamespace(id=10, title="Foundation"))

        assert view.title == "Foundation"
        assert view.summary is None
        assert view.url == "/catalog/book/10"

    def test_book_model_url(self):
        book = Book(id=11, title="T", summary="S", isbn="1", author_id=1)

        assert book.url == "/catalog/book/11"
