"""Tests for database startup and session dependencies."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from catalog.storage.db import get_read_session, get_session, wait_and_init_db


def _session_factory(session):
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


class TestWaitAndInitDb:
    """Tests for wait_and_init_db."""

    @pytest.mark.asyncio
    async def test_creates_tables_once_database_answers(self):
        mock_engine = MagicMock()
        mock_engine.connect.return_value.__aenter__.return_value = AsyncMock()

        with (
            patch("catalog.storage.db.engine", mock_engine),
            patch("catalog.storage.db.init_models", new_callable=AsyncMock) as init,
        ):
            await wait_and_init_db(retry_interval=0, max_retries=3)

        init.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        mock_engine = MagicMock()
        mock_engine.connect.return_value.__aenter__.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )

        with (
            patch("catalog.storage.db.engine", mock_engine),
            patch("catalog.storage.db.init_models", new_callable=AsyncMock) as init,
        ):
            with pytest.raises(RuntimeError):
                await wait_and_init_db(retry_interval=0, max_retries=2)

        assert mock_engine.connect.call_count == 2
        init.assert_not_awaited()


class TestSessions:
    """Tests for the request-scoped session dependencies."""

    @pytest.mark.asyncio
    async def test_get_session_commits_on_success(self):
        session = AsyncMock()

        with patch("catalog.storage.db.async_session", _session_factory(session)):
            sessions = get_session()
            assert await sessions.__anext__() is session
            with pytest.raises(StopAsyncIteration):
                await sessions.__anext__()

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_session_rolls_back_on_store_error(self):
        session = AsyncMock()
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with patch("catalog.storage.db.async_session", _session_factory(session)):
            sessions = get_session()
            await sessions.__anext__()
            with pytest.raises(IntegrityError):
                await sessions.athrow(error)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_read_session_never_commits(self):
        session = AsyncMock()

        with patch("catalog.storage.db.async_session", _session_factory(session)):
            sessions = get_read_session()
            assert await sessions.__anext__() is session
            with pytest.raises(StopAsyncIteration):
                await sessions.__anext__()

        session.commit.assert_not_awaited()
