"""
Declarative validation and sanitization pipeline.

A form is described as an ordered list of FieldChain objects. Running the
pipeline checks every field, collects ALL field errors (a form is
re-rendered fully annotated, not one error at a time) and always sanitizes
every field, so callers can redisplay sanitized input next to the errors.

Within a single field the chain stops at the first failing check, so a
field reports at most one error.

Example:
    ```python
    from catalog.validation.pipeline import FieldChain, run_pipeline
    from catalog.validation import rules

    chains = [
        FieldChain(
            name="name",
            checks=(rules.required("Genre name required"),),
            sanitizers=(rules.trim, rules.escape),
        ),
    ]
    result = run_pipeline({"name": "  Fantasy "}, chains)
    result.ok  # True
    result.fields  # {"name": "Fantasy"}
    ```
"""

from typing import Any, Callable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from catalog.exceptions import ValidationError


class FieldError(BaseModel):  # type: ignore[misc]
    """A single failed rule for one field."""

    field: str
    msg: str
    value: Any = None


class Check(BaseModel):  # type: ignore[misc]
    """
    A predicate over a raw field value plus the message reported on failure.

    Attributes:
        test: Returns True when the value passes.
        message: Human-readable error message.
    """

    model_config = ConfigDict(frozen=True)

    test: Callable[[Any], bool]
    message: str


class FieldChain(BaseModel):  # type: ignore[misc]
    """
    Ordered rules for one field.

    Attributes:
        name: Field name looked up in the raw input.
        checks: Validation checks run in order; the first failure wins.
        sanitizers: Normalizers applied in order, regardless of validity.
        optional: When True, a falsy raw value skips the checks entirely.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    checks: tuple[Check, ...] = ()
    sanitizers: tuple[Callable[[Any], Any], ...] = ()
    optional: bool = False

    def validate_value(self, value: Any) -> FieldError | None:
        """Return the first failing check as a FieldError, or None."""
        if self.optional and not value:
            return None

        for check in self.checks:
            if not check.test(value):
                return FieldError(field=self.name, msg=check.message, value=value)

        return None

    def sanitize_value(self, value: Any) -> Any:
        """Apply every sanitizer in order."""
        for sanitizer in self.sanitizers:
            value = sanitizer(value)
        return value


class PipelineResult(BaseModel):  # type: ignore[misc]
    """
    Outcome of running a pipeline.

    Attributes:
        fields: Sanitized value for every declared field.
        errors: Every field error collected, in chain order.
    """

    fields: dict[str, Any] = Field(default_factory=dict)
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_for(self, field: str) -> list[FieldError]:
        return [error for error in self.errors if error.field == field]

    def raise_for_errors(self) -> None:
        """
        Raise ValidationError carrying all field errors, if any.

        Raises:
            ValidationError: If at least one field failed validation.
        """
        if self.errors:
            fields = ", ".join(error.field for error in self.errors)
            raise ValidationError(
                f"Invalid value for: {fields}", errors=list(self.errors)
            )


def run_pipeline(
    raw: Mapping[str, Any], chains: Sequence[FieldChain]
) -> PipelineResult:
    """
    Validate and sanitize raw input against the given field chains.

    Args:
        raw: Field name to untrusted raw value. Missing fields are None.
        chains: Field chains, in the order errors should be reported.

    Returns:
        PipelineResult with sanitized fields and all collected errors.
    """
    fields: dict[str, Any] = {}
    errors: list[FieldError] = []

    for chain in chains:
        value = raw.get(chain.name)

        error = chain.validate_value(value)
        if error is not None:
            errors.append(error)

        fields[chain.name] = chain.sanitize_value(value)

    return PipelineResult(fields=fields, errors=errors)


def sanitize(
    raw: Mapping[str, Any], chains: Sequence[FieldChain]
) -> dict[str, Any]:
    """Sanitize raw input without validating it."""
    return {chain.name: chain.sanitize_value(raw.get(chain.name)) for chain in chains}
