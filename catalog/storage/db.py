import asyncio
from typing import AsyncIterator

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from catalog.logging import logger
from catalog.settings import app_settings

engine: AsyncEngine = create_async_engine(
    app_settings.DATABASE_URL,
    echo=app_settings.DB_ECHO,
    pool_pre_ping=True,
)
async_session = async_sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def init_models(bind: AsyncEngine | None = None) -> None:
    """
    Create all catalog tables that do not exist yet.

    Args:
        bind: Engine to create tables on. Defaults to the module engine.
    """
    # Register every table on SQLModel.metadata before create_all
    from catalog.models import author, book, genre  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
) -> None:
    """
    Block startup until the database answers, then create missing tables.

    Args:
        retry_interval: Seconds between attempts
            (default app_settings.DB_INIT_RETRY_INTERVAL).
        max_retries: Attempts before giving up
            (default app_settings.DB_INIT_MAX_RETRIES).

    Raises:
        RuntimeError: If no attempt reached the database.
    """
    interval = (
        app_settings.DB_INIT_RETRY_INTERVAL if retry_interval is None else retry_interval
    )
    attempts = app_settings.DB_INIT_MAX_RETRIES if max_retries is None else max_retries

    for attempt in range(1, attempts + 1):
        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
        except OperationalError as ex:
            logger.warning(
                f"Database unavailable ({ex.orig}), attempt {attempt}/{attempts}; "
                f"retrying in {interval}s"
            )
            await asyncio.sleep(interval)
            continue

        logger.info("Database is reachable")
        await init_models()
        return

    logger.error(f"Database still unavailable after {attempts} attempts")
    raise RuntimeError("Database connection could not be established.")


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Request-scoped read/write session.

    Commits after the endpoint returns; on a store error rolls back and
    re-raises.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Session rolled back: {ex}")
            raise


async def get_read_session() -> AsyncIterator[AsyncSession]:
    """
    Second request-scoped session, used only for reads.

    The fan-out reads an entity and its books at the same time and one
    AsyncSession cannot run two statements concurrently, so the books
    branch gets its own session. It is never committed.
    """
    async with async_session() as session:
        yield session
