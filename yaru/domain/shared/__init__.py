"""Shared domain kernel for yaru.

Building blocks used by every domain module:

- Result values (``Ok``/``Err``) for explicit error handling
- Domain error values
- Base domain event
- Validated value object base classes
- UTC clock helpers

Example usage:
    >>> from yaru.domain.shared import Ok, Err
    >>> result = TagName.create("work")
    >>> if isinstance(result, Ok):
    ...     name = result.value
"""

from yaru.domain.shared.clock import as_utc, today_utc, utc_now
from yaru.domain.shared.errors import (
    AggregateNotFound,
    DomainError,
    DuplicateTag,
    DuplicateTagName,
    InvalidIdentifier,
    StorageError,
    TagNotFound,
    ValidationError,
)
from yaru.domain.shared.events import DomainEvent
from yaru.domain.shared.result import (
    Err,
    Ok,
    Result,
    collect,
    flat_map,
    map_result,
)
from yaru.domain.shared.value_object import Identifier, RuleViolation, ValueObject

__all__ = [
    # Result values
    "Ok",
    "Err",
    "Result",
    "map_result",
    "flat_map",
    "collect",
    # Errors
    "DomainError",
    "ValidationError",
    "InvalidIdentifier",
    "DuplicateTag",
    "TagNotFound",
    "AggregateNotFound",
    "DuplicateTagName",
    "StorageError",
    # Events
    "DomainEvent",
    # Value objects
    "ValueObject",
    "Identifier",
    "RuleViolation",
    # Clock
    "utc_now",
    "today_utc",
    "as_utc",
]
