"""Base classes for validated value objects.

Value objects are frozen pydantic models wrapping a single ``value`` field.
Field validators raise ``RuleViolation`` to reject input; ``create()``
converts any validation failure into an ``Err(ValidationError)`` so callers
never have to catch pydantic exceptions themselves.

Example:
    >>> TaskTitle.create("   ")
    Err(error=ValidationError(field='TaskTitle', rule='empty', ...))
"""

from typing import Any, ClassVar, Self

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from .errors import InvalidIdentifier, ValidationError, ValidationRule
from .result import Err, Ok, Result


class RuleViolation(ValueError):
    """Raised inside validators to report which rule a value broke."""

    def __init__(self, rule: ValidationRule, detail: str) -> None:
        super().__init__(detail)
        self.rule = rule
        self.detail = detail


class ValueObject(BaseModel):
    """Immutable single-field wrapper compared and hashed by value."""

    model_config = ConfigDict(frozen=True)

    # Error kind reported by create(); identifiers override it.
    error_type: ClassVar[type[ValidationError]] = ValidationError

    @classmethod
    def create(cls, value: Any) -> Result[Self, ValidationError]:
        """Validate ``value`` and wrap it.

        Returns:
            Ok(instance) if every rule holds, otherwise Err(ValidationError)
            naming the violated rule.
        """
        try:
            return Ok(cls(value=value))
        except pydantic.ValidationError as e:
            return Err(cls._to_error(e))

    @classmethod
    def _to_error(cls, exc: pydantic.ValidationError) -> ValidationError:
        first = exc.errors()[0]
        cause = first.get("ctx", {}).get("error")
        error_type = cls.error_type
        if isinstance(cause, RuleViolation):
            return error_type(field=cls.__name__, rule=cause.rule, detail=cause.detail)
        return error_type(field=cls.__name__, rule="invalid_type", detail=first["msg"])

    def __str__(self) -> str:
        return str(self.value)


class Identifier(ValueObject):
    """Non-negative integer identifier assigned by persistence."""

    error_type: ClassVar[type[ValidationError]] = InvalidIdentifier

    value: int

    @field_validator("value")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise RuleViolation("negative", f"identifier must be 0 or greater, got {v}")
        return v

    def __int__(self) -> int:
        return self.value
