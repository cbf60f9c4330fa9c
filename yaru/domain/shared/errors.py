"""Domain error values.

Errors are plain immutable values carried inside ``Err``. They are never
raised by the domain core; each one describes the single operation that
produced it.

Kinds:
    ValidationError - a value object rule was violated
    InvalidIdentifier - an identifier was negative
    DuplicateTag - a tag identifier is already on the task
    TagNotFound - a tag identifier is not on the task
    AggregateNotFound - a repository has no record for an identifier
    DuplicateTagName - another tag already uses the name
    StorageError - a persistence adapter failed
"""

from dataclasses import dataclass
from typing import Literal

ValidationRule = Literal["empty", "too_long", "negative", "invalid_choice", "invalid_type"]


@dataclass(frozen=True)
class DomainError:
    """Base class for all domain error values."""

    @property
    def message(self) -> str:
        return self.__class__.__name__

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(DomainError):
    """A value object could not be constructed.

    Attributes:
        field: Name of the value object or field being validated.
        rule: The violated rule.
        detail: Human-readable explanation.
    """

    field: str
    rule: ValidationRule
    detail: str

    @property
    def message(self) -> str:
        return f"Invalid {self.field}: {self.detail}"


@dataclass(frozen=True)
class InvalidIdentifier(ValidationError):
    """An identifier was negative or not an integer."""


@dataclass(frozen=True)
class DuplicateTag(DomainError):
    task_id: int | None
    tag_id: int

    @property
    def message(self) -> str:
        return f"Tag {self.tag_id} is already attached to the task"


@dataclass(frozen=True)
class TagNotFound(DomainError):
    task_id: int | None
    tag_id: int

    @property
    def message(self) -> str:
        return f"Tag {self.tag_id} is not attached to the task"


@dataclass(frozen=True)
class AggregateNotFound(DomainError):
    """No stored aggregate matches the identifier.

    Attributes:
        kind: Aggregate kind, "task" or "tag".
        aggregate_id: The identifier that was looked up.
    """

    kind: Literal["task", "tag"]
    aggregate_id: int

    @property
    def message(self) -> str:
        return f"{self.kind.capitalize()} {self.aggregate_id} does not exist"


@dataclass(frozen=True)
class DuplicateTagName(DomainError):
    name: str

    @property
    def message(self) -> str:
        return f"A tag named '{self.name}' already exists"


@dataclass(frozen=True)
class StorageError(DomainError):
    detail: str

    @property
    def message(self) -> str:
        return f"Storage failure: {self.detail}"
