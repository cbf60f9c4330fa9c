"""Composable task selection predicates.

A specification wraps one filtering rule as a value. Specifications combine
with ``and_``/``or_`` (or the ``&``/``|`` operators) into new specifications;
nesting order is exactly the order of the calls, with no implicit precedence.
All predicates are pure.

Example:
    >>> urgent = ByPriority(Priority.HIGH) | Overdue()
    >>> open_urgent = ByStatus(Status.PENDING) & urgent
    >>> [t for t in tasks if open_urgent.is_satisfied_by(t)]
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import reduce

from yaru.domain.shared.clock import today_utc
from yaru.domain.tag.value_objects import TagId

from .aggregate import TaskAggregate
from .value_objects import Priority, Status, TaskId


class TaskSpecification(ABC):
    """A predicate over ``TaskAggregate``."""

    @abstractmethod
    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        """Return True if ``task`` matches."""

    def and_(self, other: "TaskSpecification") -> "TaskSpecification":
        return AndSpecification(self, other)

    def or_(self, other: "TaskSpecification") -> "TaskSpecification":
        return OrSpecification(self, other)

    def __and__(self, other: "TaskSpecification") -> "TaskSpecification":
        return self.and_(other)

    def __or__(self, other: "TaskSpecification") -> "TaskSpecification":
        return self.or_(other)


# =============================================================================
# Composites
# =============================================================================


@dataclass(frozen=True)
class AndSpecification(TaskSpecification):
    """Matches when both children match. ``right`` runs only if ``left`` matched."""

    left: TaskSpecification
    right: TaskSpecification

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return self.left.is_satisfied_by(task) and self.right.is_satisfied_by(task)


@dataclass(frozen=True)
class OrSpecification(TaskSpecification):
    """Matches when either child matches. ``right`` runs only if ``left`` did not."""

    left: TaskSpecification
    right: TaskSpecification

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return self.left.is_satisfied_by(task) or self.right.is_satisfied_by(task)


# =============================================================================
# Atomic specifications
# =============================================================================


@dataclass(frozen=True)
class AnyTask(TaskSpecification):
    """Matches every task."""

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return True


@dataclass(frozen=True)
class ByStatus(TaskSpecification):
    status: Status

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return task.status == self.status


@dataclass(frozen=True)
class ByPriority(TaskSpecification):
    priority: Priority

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return task.priority == self.priority


@dataclass(frozen=True)
class ByTag(TaskSpecification):
    """Matches tasks that carry the tag identifier."""

    tag_id: TagId

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return task.has_tag(self.tag_id)


@dataclass(frozen=True)
class ById(TaskSpecification):
    task_id: TaskId

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return task.id == self.task_id


@dataclass(frozen=True)
class Overdue(TaskSpecification):
    """Matches open tasks whose due date has passed.

    Attributes:
        clock: Returns the reference date; defaults to the current UTC date.
    """

    clock: Callable[[], date] = field(default=today_utc)

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        return task.is_overdue(self.clock())


class SearchField(str, Enum):
    """Which text fields a keyword search looks at."""

    TITLE = "title"
    DESCRIPTION = "description"
    ALL = "all"


@dataclass(frozen=True)
class ByKeyword(TaskSpecification):
    """Full-text match: every keyword must appear in some selected field.

    Matching is a case-insensitive substring test. Each keyword is checked on
    its own, so with ``SearchField.ALL`` one keyword may hit the title and
    another the description. An empty keyword list matches every task.
    """

    keywords: tuple[str, ...]
    search_field: SearchField = SearchField.ALL

    @classmethod
    def from_query(cls, query: str, search_field: SearchField = SearchField.ALL) -> "ByKeyword":
        """Split a whitespace-separated query into keywords."""
        return cls(keywords=tuple(query.split()), search_field=search_field)

    def is_satisfied_by(self, task: TaskAggregate) -> bool:
        haystacks = self._haystacks(task)
        return all(
            any(keyword.casefold() in text for text in haystacks)
            for keyword in self.keywords
        )

    def _haystacks(self, task: TaskAggregate) -> list[str]:
        texts = []
        if self.search_field in (SearchField.TITLE, SearchField.ALL):
            texts.append(task.title.value.casefold())
        if self.search_field in (SearchField.DESCRIPTION, SearchField.ALL):
            texts.append(task.description.value.casefold())
        return texts


def all_of(*specs: TaskSpecification) -> TaskSpecification:
    """AND together any number of specifications, left to right.

    With no arguments the result matches every task.
    """
    if not specs:
        return AnyTask()
    return reduce(lambda acc, spec: acc.and_(spec), specs)
