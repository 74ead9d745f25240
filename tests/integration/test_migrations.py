"""Tests for the Alembic migrations against a SQLite file."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from catalog.settings import app_settings

MIGRATIONS_DIR = (
    Path(__file__).resolve().parents[2] / "catalog" / "storage" / "migrations"
)


@pytest.fixture
def alembic_config(tmp_path, monkeypatch):
    """Alembic config pointing at a fresh database file, without logging setup."""
    db_file = tmp_path / "migrated.db"
    monkeypatch.setattr(
        app_settings, "DATABASE_URL", f"sqlite+aiosqlite:///{db_file}"
    )

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config, f"sqlite:///{db_file}"


def test_upgrade_creates_catalog_tables(alembic_config):
    config, sync_url = alembic_config

    command.upgrade(config, "head")

    engine = create_engine(sync_url)
    inspector = inspect(engine)
    assert {"author", "genre", "book", "book_genre"} <= set(inspector.get_table_names())
    assert {c["name"] for c in inspector.get_columns("author")} == {
        "id",
        "first_name",
        "family_name",
        "date_of_birth",
        "date_of_death",
    }
    assert any(
        index["unique"] and index["column_names"] == ["name"]
        for index in inspector.get_indexes("genre")
    )
    engine.dispose()


def test_downgrade_drops_catalog_tables(alembic_config):
    config, sync_url = alembic_config

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(sync_url)
    assert "author" not in inspect(engine).get_table_names()
    engine.dispose()
