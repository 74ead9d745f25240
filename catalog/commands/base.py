"""
Base command for encapsulating catalog operations.

The Command pattern encapsulates business logic as objects, so each
catalog operation (list, detail, create, update, delete and their
"prepare" counterparts) can be exercised in isolation with fake
repositories and reused by any transport.

Example:
    ```python
    class ListGenresCommand(BaseCommand[None, ViewResponse]):
        def __init__(self, repository: Repository[Genre]):
            self.repository = repository

        async def execute(self, input_data: None = None) -> ViewResponse:
            genres = await self.repository.get_all(order_by="name")
            return ViewResponse(view="genre_list", title="List of genre", data=...)


    # Usage in HTTP handler
    @router.get("/genres")
    async def genre_list(repo: GenreRepoDep) -> Response:
        return to_response(await ListGenresCommand(repo).execute())
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for catalog operations.

    Commands depend on repositories (through the protocols in
    catalog.protocols) for data access and return view outcomes.

    Type Parameters:
        TInput: Input data type.
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            NotFoundError: When a required entity does not exist.
            SQLAlchemyError: When the store fails; never retried.
        """
        pass
