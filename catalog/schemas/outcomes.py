"""
Outcomes returned by catalog commands to the HTTP layer.

A command either asks for a view to be rendered with a model, or for the
client to be redirected. Errors are raised, not returned.
"""

from typing import Any

from pydantic import BaseModel, Field

from catalog.validation.pipeline import FieldError


class ViewResponse(BaseModel):  # type: ignore[misc]
    """
    Render view `view` with the given model.

    Attributes:
        view: Template name the view layer should render.
        title: Page title.
        data: View model (entities, dependent books, form values).
        errors: Field errors to annotate a re-rendered form with.
    """

    view: str
    title: str
    data: dict[str, Any] = Field(default_factory=dict)
    errors: list[FieldError] = Field(default_factory=list)


class Redirect(BaseModel):  # type: ignore[misc]
    """Redirect the client to `url`."""

    url: str


CommandOutcome = ViewResponse | Redirect
