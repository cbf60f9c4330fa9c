"""Result values for explicit error handling in domain operations.

Domain operations that can fail for an expected reason (a malformed title,
a duplicate tag, a missing record) return either ``Ok`` or ``Err`` instead of
raising. Callers branch with ``isinstance`` or chain steps with the helpers
below.

Example usage:
    >>> result = TaskTitle.create("Write report")
    >>> if isinstance(result, Ok):
    ...     print(result.value.value)
    Write report
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Apply ``fn`` to the value of an Ok result, passing Err through unchanged."""
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a Result-returning function onto an Ok result.

    Used to sequence steps that may each fail, such as parsing an identifier
    and then looking it up.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def collect(results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Turn an iterable of results into a result of a list.

    Stops at the first Err and returns it; otherwise returns Ok with every
    value in order.

    Args:
        results: Results to combine.

    Returns:
        Ok(list of values), or the first Err encountered.
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
