"""
Exception translation for HTTP endpoints.

Commands raise AppException subclasses and let store errors escape; the
decorator below turns both into HTTPException so route functions stay
free of try/except.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from catalog.exceptions import AppException, ValidationError
from catalog.logging import logger


def _detail(ex: AppException) -> Any:
    if isinstance(ex, ValidationError) and ex.errors:
        return {"message": ex.message, "errors": jsonable_encoder(ex.errors)}
    return ex.message


def handle_http_errors(func: Callable) -> Callable:
    """
    Map AppException to its http_status and store errors to 500.

    Validation errors that carry field errors return them in the detail
    next to the message. Any other exception propagates unchanged.

    Example:
        ```python
        @router.get("/genre/{genre_id}")
        @handle_http_errors
        async def genre_detail(genre_id: int, repo: GenreRepoDep, books: BookRepoDep):
            return to_response(await GetGenreDetailCommand(repo, books).execute(genre_id))
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            logger.warning(
                f"{func.__name__} answered {ex.http_status}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            raise HTTPException(status_code=ex.http_status, detail=_detail(ex))
        except SQLAlchemyError as ex:
            logger.error(f"Store failure in {func.__name__}: {ex}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Database error occurred",
            )

    return wrapper
