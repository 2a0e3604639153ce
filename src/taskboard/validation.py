"""Field validation for project proposals.

``validate`` is a pure predicate: it never raises and never logs. Length
constraints only apply to text values and range constraints only apply to
numbers; a constraint that does not match the value's type is skipped and
counts as satisfied.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Validatable(BaseModel):
    """A labeled value together with the constraints it must satisfy.

    Attributes:
        value: Text or number to check
        required: Reject values that are blank once stripped
        min_length: Minimum length for text values (inclusive)
        max_length: Maximum length for text values (inclusive)
        min: Minimum for numeric values (inclusive)
        max: Maximum for numeric values (inclusive)
    """

    value: str | int | float
    required: bool = False
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    min: float | None = None
    max: float | None = None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate(validatable: Validatable) -> bool:
    """Return True if every applicable constraint holds.

    Args:
        validatable: Value and constraints to check.

    Returns:
        False as soon as one applicable constraint fails, True otherwise.
    """
    value = validatable.value

    if validatable.required and len(str(value).strip()) == 0:
        return False

    if isinstance(value, str):
        if validatable.min_length is not None and len(value) < validatable.min_length:
            return False
        if validatable.max_length is not None and len(value) > validatable.max_length:
            return False

    if _is_number(value):
        if validatable.min is not None and value < validatable.min:
            return False
        if validatable.max is not None and value > validatable.max:
            return False

    return True
