"""Listing filters and sort options.

Filters arrive as ``key:value`` strings ("status:done", "priority:high",
"tag:3") and are turned into task specifications. Several filters on one
listing are ANDed together.
"""

from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel

from yaru.config import SortKey, SortOrder
from yaru.domain.shared.errors import ValidationError
from yaru.domain.shared.result import Err, Ok, Result, collect
from yaru.domain.tag.value_objects import TagId
from yaru.domain.task.aggregate import TaskAggregate
from yaru.domain.task.specification import (
    ByPriority,
    ByStatus,
    ByTag,
    TaskSpecification,
    all_of,
)
from yaru.domain.task.value_objects import Priority, Status

FilterKey = Literal["status", "priority", "tag"]

FILTER_KEYS: tuple[str, ...] = ("status", "priority", "tag")


def _filter_error(detail: str) -> Err[ValidationError]:
    return Err(ValidationError(field="TaskFilter", rule="invalid_choice", detail=detail))


class TaskFilter(BaseModel):
    """One ``key:value`` listing filter."""

    key: FilterKey
    value: str

    @classmethod
    def parse(cls, text: str) -> Result["TaskFilter", ValidationError]:
        """Parse ``key:value``; the key is case-insensitive."""
        key, sep, value = text.partition(":")
        if not sep:
            return _filter_error(f"invalid filter format '{text}', expected 'key:value'")
        key = key.lower()
        if key not in FILTER_KEYS:
            return _filter_error(f"unknown filter key '{key}'")
        return Ok(cls(key=key, value=value))

    def to_specification(self) -> Result[TaskSpecification, ValidationError]:
        """Build the specification this filter stands for."""
        if self.key == "status":
            result = Status.parse_any(self.value)
            if isinstance(result, Err):
                return result
            return Ok(ByStatus(result.value))

        if self.key == "priority":
            result = Priority.from_filter_value(self.value)
            if isinstance(result, Err):
                return result
            return Ok(ByPriority(result.value))

        try:
            raw_id = int(self.value)
        except ValueError:
            return _filter_error(f"tag filter needs a numeric id, got '{self.value}'")
        tag_result = TagId.create(raw_id)
        if isinstance(tag_result, Err):
            return tag_result
        return Ok(ByTag(tag_result.value))


def build_specification(
    filters: Sequence[TaskFilter],
) -> Result[TaskSpecification, ValidationError]:
    """AND every filter together. No filters match every task."""
    specs = collect(f.to_specification() for f in filters)
    if isinstance(specs, Err):
        return specs
    return Ok(all_of(*specs.value))


def _sort_key(key: SortKey) -> Callable[[TaskAggregate], Any]:
    if key == "priority":
        return lambda task: task.priority.rank
    if key == "due_date":
        # Tasks without a due date go last in ascending order.
        return lambda task: (
            task.due_date is None,
            task.due_date.value if task.due_date else date.min,
        )
    return lambda task: task.created_at


def sort_tasks(
    tasks: Sequence[TaskAggregate],
    key: SortKey,
    order: SortOrder = "asc",
) -> list[TaskAggregate]:
    """Return ``tasks`` sorted by ``key``. The sort is stable."""
    return sorted(tasks, key=_sort_key(key), reverse=order == "desc")
