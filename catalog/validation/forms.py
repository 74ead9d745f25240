"""
Field chains for the Author and Genre forms.

Genre name uniqueness is not checked here: it needs a store read
and is enforced by CreateGenreCommand and UpdateGenreCommand.
"""

from typing import Any, Mapping

from catalog.constants import GENRE_NAME_MIN_LENGTH, NAME_MAX_LENGTH, NAME_MIN_LENGTH
from catalog.validation import rules
from catalog.validation.pipeline import FieldChain, PipelineResult, run_pipeline

AUTHOR_FORM: tuple[FieldChain, ...] = (
    FieldChain(
        name="first_name",
        checks=(
            rules.required("First name must be specified.", NAME_MIN_LENGTH),
            rules.max_length(
                f"First name must not exceed {NAME_MAX_LENGTH} characters.",
                NAME_MAX_LENGTH,
            ),
            rules.alphanumeric("First name has non-alphanumeric characters."),
        ),
        sanitizers=(rules.trim, rules.escape),
    ),
    FieldChain(
        name="family_name",
        checks=(
            rules.required("Family name must be specified.", NAME_MIN_LENGTH),
            rules.max_length(
                f"Family name must not exceed {NAME_MAX_LENGTH} characters.",
                NAME_MAX_LENGTH,
            ),
            rules.alphanumeric("Family name has non-alphanumeric characters."),
        ),
        sanitizers=(rules.trim, rules.escape),
    ),
    FieldChain(
        name="date_of_birth",
        checks=(rules.iso_date("Invalid date of birth."),),
        sanitizers=(rules.to_date,),
        optional=True,
    ),
    FieldChain(
        name="date_of_death",
        checks=(rules.iso_date("Invalid date of death."),),
        sanitizers=(rules.to_date,),
        optional=True,
    ),
)

GENRE_FORM: tuple[FieldChain, ...] = (
    FieldChain(
        name="name",
        checks=(rules.required("Genre name required", GENRE_NAME_MIN_LENGTH),),
        sanitizers=(rules.trim, rules.escape),
    ),
)


def validate_author_form(raw: Mapping[str, Any]) -> PipelineResult:
    """Run the Author form pipeline over raw request fields."""
    return run_pipeline(raw, AUTHOR_FORM)


def validate_genre_form(raw: Mapping[str, Any]) -> PipelineResult:
    """Run the Genre form pipeline over raw request fields."""
    return run_pipeline(raw, GENRE_FORM)
