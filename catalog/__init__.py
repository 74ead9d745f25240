# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog.logging import logger
from catalog.middlewares.correlation_id import CorrelationIDMiddleware
from catalog.middlewares.logging_context import LoggingContextMiddleware
from catalog.routing import collect_subrouters
from catalog.storage.db import engine, wait_and_init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup/shutdown lifecycle.

    Startup waits for the database and creates missing tables; shutdown
    disposes of the engine's connection pool.
    """
    logger.info("Application startup initiated")
    await wait_and_init_db()
    logger.info("Initialized database and tables")

    yield

    logger.info("Application shutdown initiated")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Includes the routers collected by `catalog.routing.collect_subrouters()`
    and adds the following middleware:
    - `LoggingContextMiddleware`: endpoint/method/status in log context.
    - `CorrelationIDMiddleware`: request correlation IDs.
    """
    app = FastAPI(
        title="Catalog",
        description="Author and genre catalog management",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CorrelationIDMiddleware → LoggingContextMiddleware
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app
