from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response

from catalog.schemas.outcomes import CommandOutcome, Redirect


def to_response(outcome: CommandOutcome) -> Response:
    """
    Turn a command outcome into an HTTP response.

    Redirects become 302 responses; view responses are returned as JSON
    for the view layer to render.
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=status.HTTP_302_FOUND)
    return JSONResponse(jsonable_encoder(outcome))
