"""Task value objects.

Immutable, self-validating wrappers for every task field. Enumerations
accept several textual spellings on parse but always normalise to a single
member internally.
"""

from datetime import date, timedelta
from enum import Enum
from functools import total_ordering
from typing import Self

from pydantic import field_validator

from yaru.domain.shared.errors import ValidationError
from yaru.domain.shared.result import Err, Ok, Result
from yaru.domain.shared.value_object import Identifier, RuleViolation, ValueObject

TITLE_MAX_LENGTH = 100
DUE_SOON_DAYS = 7


class TaskId(Identifier):
    """Persistence-assigned task identifier."""


class TaskTitle(ValueObject):
    """Task title: non-blank, at most 100 characters.

    Length is measured in characters. The original string is kept as-is,
    surrounding whitespace included.
    """

    value: str

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if not v.strip():
            raise RuleViolation("empty", "title must not be empty")
        if len(v) > TITLE_MAX_LENGTH:
            raise RuleViolation(
                "too_long",
                f"title must be at most {TITLE_MAX_LENGTH} characters, got {len(v)}",
            )
        return v


class TaskDescription(ValueObject):
    """Free-form task description. Empty means "no description"."""

    value: str = ""

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    def as_optional(self) -> str | None:
        return None if self.is_empty else self.value


@total_ordering
class DueDate(ValueObject):
    """Calendar due date without a time component. Past dates are allowed."""

    value: date

    def is_before(self, other: date) -> bool:
        return self.value < other

    def is_after(self, other: date) -> bool:
        return self.value > other

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DueDate):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return self.value.isoformat()


def _invalid_choice(field: str, text: str, choices: list[str]) -> Err[ValidationError]:
    return Err(
        ValidationError(
            field=field,
            rule="invalid_choice",
            detail=f"'{text}' is not one of {', '.join(choices)}",
        )
    )


class Status(str, Enum):
    """Task progress state."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, text: str) -> Result[Self, ValidationError]:
        """Parse the canonical spelling ("Pending", "InProgress", "Completed")."""
        for member in cls:
            if member.value == text:
                return Ok(member)
        return _invalid_choice("Status", text, [m.value for m in cls])

    @classmethod
    def from_filter_value(cls, text: str) -> Result[Self, ValidationError]:
        """Parse the filter spelling, case-insensitively.

        Accepts "pending"/"todo", "in_progress"/"progress" and
        "completed"/"done".
        """
        member = _STATUS_FILTER_ALIASES.get(text.lower())
        if member is None:
            return _invalid_choice("Status", text, sorted(_STATUS_FILTER_ALIASES))
        return Ok(member)

    @classmethod
    def parse_any(cls, text: str) -> Result[Self, ValidationError]:
        """Try the canonical spelling first, then the filter spelling."""
        result = cls.parse(text)
        if isinstance(result, Ok):
            return result
        return cls.from_filter_value(text)

    @property
    def filter_value(self) -> str:
        """Lowercase snake_case spelling, e.g. "in_progress"."""
        return _STATUS_FILTER_VALUES[self]


_STATUS_FILTER_VALUES = {
    Status.PENDING: "pending",
    Status.IN_PROGRESS: "in_progress",
    Status.COMPLETED: "completed",
}

_STATUS_FILTER_ALIASES = {
    "pending": Status.PENDING,
    "todo": Status.PENDING,
    "in_progress": Status.IN_PROGRESS,
    "progress": Status.IN_PROGRESS,
    "completed": Status.COMPLETED,
    "done": Status.COMPLETED,
}


class Priority(str, Enum):
    """Task priority, ordered Low < Medium < High < Critical.

    Ordering is for sorting and reporting only.
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]

    @property
    def filter_value(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, text: str) -> Result[Self, ValidationError]:
        """Parse the canonical spelling ("Low", "Medium", "High", "Critical")."""
        for member in cls:
            if member.value == text:
                return Ok(member)
        return _invalid_choice("Priority", text, [m.value for m in cls])

    @classmethod
    def from_filter_value(cls, text: str) -> Result[Self, ValidationError]:
        """Parse any casing of the priority name."""
        for member in cls:
            if member.value.lower() == text.lower():
                return Ok(member)
        return _invalid_choice("Priority", text, [m.filter_value for m in cls])

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANKS = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.CRITICAL: 4,
}


class DueDateStatus(str, Enum):
    """Due-date bucket of an open task relative to a reference date.

    Derived on demand, never stored.
    """

    OVERDUE = "Overdue"
    DUE_TODAY = "DueToday"
    DUE_THIS_WEEK = "DueThisWeek"
    NO_DUE_DATE = "NoDueDate"

    @classmethod
    def classify(
        cls,
        due_date: DueDate | None,
        today: date,
        window_days: int = DUE_SOON_DAYS,
    ) -> "DueDateStatus | None":
        """Bucket a due date relative to ``today``.

        Dates more than ``window_days`` ahead are not yet actionable and
        belong to no bucket, so None is returned for them.
        """
        if due_date is None:
            return cls.NO_DUE_DATE
        due = due_date.value
        if due < today:
            return cls.OVERDUE
        if due == today:
            return cls.DUE_TODAY
        if due <= today + timedelta(days=window_days):
            return cls.DUE_THIS_WEEK
        return None

    @property
    def filter_value(self) -> str:
        return _DUE_DATE_FILTER_VALUES[self]


_DUE_DATE_FILTER_VALUES = {
    DueDateStatus.OVERDUE: "overdue",
    DueDateStatus.DUE_TODAY: "due_today",
    DueDateStatus.DUE_THIS_WEEK: "due_this_week",
    DueDateStatus.NO_DUE_DATE: "no_due_date",
}
