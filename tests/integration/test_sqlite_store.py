"""
Integration tests for the repositories against a real SQLite database.

Each test gets a fresh database file; both the main and the read session
come from the same engine, as they do in the application.
"""

from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.commands.author_commands import DeleteAuthorCommand, GetAuthorDetailCommand
from catalog.commands.genre_commands import (
    CreateGenreCommand,
    DeleteGenreCommand,
    UpdateGenreCommand,
    UpdateGenreInput,
)
from catalog.models.author import Author
from catalog.models.book import Book, BookGenreLink
from catalog.models.genre import Genre
from catalog.repositories.author_repository import AuthorRepository
from catalog.repositories.book_repository import BookRepository
from catalog.repositories.genre_repository import GenreRepository
from catalog.schemas.outcomes import Redirect
from catalog.storage.db import init_models


@pytest_asyncio.fixture
async def sessionmaker(tmp_path):
    """Provides a session factory bound to a fresh SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await init_models(engine)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(sessionmaker):
    """Two authors (one with a book) and two genres (one linked)."""
    async with sessionmaker() as session:
        asimov = Author(
            first_name="Isaac",
            family_name="Asimov",
            date_of_birth=date(1920, 1, 2),
            date_of_death=date(1992, 4, 6),
        )
        austen = Author(first_name="Jane", family_name="Austen")
        scifi = Genre(name="Science Fiction")
        poetry = Genre(name="Poetry")
        session.add_all([asimov, austen, scifi, poetry])
        await session.flush()

        book = Book(
            title="Foundation",
            summary="Psychohistory",
            isbn="9780553293357",
            author_id=asimov.id,
        )
        session.add(book)
        await session.flush()
        session.add(BookGenreLink(book_id=book.id, genre_id=scifi.id))
        await session.commit()

        return {
            "asimov": asimov.id,
            "austen": austen.id,
            "scifi": scifi.id,
            "poetry": poetry.id,
            "book": book.id,
        }


class TestRepositories:
    """CRUD and dependent queries on a real database."""

    @pytest.mark.asyncio
    async def test_list_sorted_by_family_name(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            authors = await AuthorRepository(session).get_all(order_by="family_name")

        assert [a.family_name for a in authors] == ["Asimov", "Austen"]

    @pytest.mark.asyncio
    async def test_books_by_author_and_genre(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            repo = BookRepository(session)
            by_author = await repo.get_by_author(seeded["asimov"])
            by_genre = await repo.get_by_genre(seeded["scifi"])
            none = await repo.get_by_genre(seeded["poetry"])

        assert [b.title for b in by_author] == ["Foundation"]
        assert [b.isbn for b in by_genre] == ["9780553293357"]
        assert none == []

    @pytest.mark.asyncio
    async def test_replace_keeps_identity(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            repo = AuthorRepository(session)
            updated = await repo.replace_by_id(
                seeded["austen"],
                {
                    "first_name": "Jane",
                    "family_name": "Austen",
                    "date_of_birth": date(1775, 12, 16),
                    "date_of_death": date(1817, 7, 18),
                },
            )
            await session.commit()

        assert updated.id == seeded["austen"]
        assert updated.lifespan == "42"

        async with sessionmaker() as session:
            assert len(await AuthorRepository(session).get_all()) == 2

    @pytest.mark.asyncio
    async def test_conditional_delete(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            repo = AuthorRepository(session)
            refused = await repo.remove_if_unreferenced(seeded["asimov"])
            removed = await repo.remove_if_unreferenced(seeded["austen"])
            await session.commit()

        assert refused is False
        assert removed is True

        async with sessionmaker() as session:
            repo = GenreRepository(session)
            assert await repo.remove_if_unreferenced(seeded["scifi"]) is False
            assert await repo.remove_if_unreferenced(seeded["poetry"]) is True

    @pytest.mark.asyncio
    async def test_duplicate_genre_name_violates_constraint(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            with pytest.raises(IntegrityError):
                await GenreRepository(session).create(Genre(name="Poetry"))


class TestCommandsOnStore:
    """Commands wired to real repositories with two sessions."""

    @pytest.mark.asyncio
    async def test_author_detail_fan_out(self, sessionmaker, seeded):
        async with sessionmaker() as session, sessionmaker() as read_session:
            command = GetAuthorDetailCommand(
                AuthorRepository(session), BookRepository(read_session)
            )
            outcome = await command.execute(seeded["asimov"])

        assert outcome.data["author"].full_name == "Isaac Asimov"
        assert outcome.data["author_books"][0].title == "Foundation"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("atomic", [False, True])
    async def test_author_with_books_survives_delete(self, sessionmaker, seeded, atomic):
        async with sessionmaker() as session, sessionmaker() as read_session:
            command = DeleteAuthorCommand(
                AuthorRepository(session), BookRepository(read_session), atomic=atomic
            )
            outcome = await command.execute(seeded["asimov"])
            await session.commit()

        assert outcome.view == "author_delete"
        async with sessionmaker() as session:
            assert await AuthorRepository(session).get_by_id(seeded["asimov"])

    @pytest.mark.asyncio
    async def test_unlinked_genre_is_deleted(self, sessionmaker, seeded):
        async with sessionmaker() as session, sessionmaker() as read_session:
            command = DeleteGenreCommand(
                GenreRepository(session), BookRepository(read_session), atomic=True
            )
            outcome = await command.execute(seeded["poetry"])
            await session.commit()

        assert outcome == Redirect(url="/catalog/genres")
        async with sessionmaker() as session:
            assert await GenreRepository(session).get_by_id(seeded["poetry"]) is None

    @pytest.mark.asyncio
    async def test_create_genre_twice_yields_one_row(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            command = CreateGenreCommand(GenreRepository(session))
            first = await command.execute({"name": " Drama "})
            second = await command.execute({"name": "Drama"})
            await session.commit()

        assert first == second
        async with sessionmaker() as session:
            assert len(await GenreRepository(session).get_all(name="Drama")) == 1

    @pytest.mark.asyncio
    async def test_rename_to_taken_genre_name_is_reported(self, sessionmaker, seeded):
        async with sessionmaker() as session:
            outcome = await UpdateGenreCommand(GenreRepository(session)).execute(
                UpdateGenreInput(id=seeded["poetry"], raw={"name": "Science Fiction"})
            )
            await session.commit()

        assert outcome.view == "genre_form"
        assert outcome.errors[0].field == "name"
        async with sessionmaker() as session:
            poetry = await GenreRepository(session).get_by_id(seeded["poetry"])
            assert poetry.name == "Poetry"
