"""Task statistics.

Pure counting over a collection of tasks. The service performs no I/O and
knows nothing about tag names: tags are counted by identifier and names are
resolved later by whoever presents the numbers.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType

from yaru.domain.tag.value_objects import TagId
from yaru.domain.task.aggregate import TaskAggregate
from yaru.domain.task.value_objects import DUE_SOON_DAYS, DueDateStatus, Priority, Status

# Key of the tag table for tasks that carry no tag at all.
NO_TAG = None


@dataclass(frozen=True)
class TaskStats:
    """Immutable snapshot of task counts.

    Status, priority, due-date and priority x status tables always contain
    every key, zero-filled. Due-date counts cover open tasks only, and a task
    due more than a week ahead sits in none of the due-date buckets.

    Attributes:
        status_counts: Tasks per status.
        priority_counts: Tasks per priority.
        due_date_counts: Open tasks per due-date bucket.
        tag_counts: Tasks per tag identifier; ``NO_TAG`` counts untagged tasks.
        priority_status_counts: Tasks per (priority, status) pair.
        total: Number of tasks, completed and untagged ones included.
    """

    status_counts: Mapping[Status, int]
    priority_counts: Mapping[Priority, int]
    due_date_counts: Mapping[DueDateStatus, int]
    tag_counts: Mapping[TagId | None, int]
    priority_status_counts: Mapping[tuple[Priority, Status], int]
    total: int

    # Mapping fields are unhashable; snapshots compare by value only.
    __hash__ = None  # type: ignore[assignment]

    def status_count(self, status: Status) -> int:
        return self.status_counts[status]

    def priority_count(self, priority: Priority) -> int:
        return self.priority_counts[priority]

    def due_date_count(self, due_date_status: DueDateStatus) -> int:
        return self.due_date_counts[due_date_status]

    def priority_status_count(self, priority: Priority, status: Status) -> int:
        return self.priority_status_counts[(priority, status)]

    def tag_count(self, tag_id: TagId | None) -> int:
        """Tasks carrying ``tag_id``; pass ``NO_TAG`` for untagged tasks."""
        return self.tag_counts.get(tag_id, 0)

    @property
    def completion_rate(self) -> float:
        """Percentage of tasks that are completed, rounded to one decimal."""
        if self.total == 0:
            return 0.0
        return round(self.status_counts[Status.COMPLETED] / self.total * 100, 1)


def calculate_stats(
    tasks: Iterable[TaskAggregate],
    today: date,
    window_days: int = DUE_SOON_DAYS,
) -> TaskStats:
    """Count tasks along every reporting dimension.

    Args:
        tasks: Tasks to count.
        today: Reference date for the due-date buckets.
        window_days: How far ahead a due date still counts as "this week".

    Returns:
        TaskStats snapshot. Identical inputs give identical snapshots.
    """
    status_counts = dict.fromkeys(Status, 0)
    priority_counts = dict.fromkeys(Priority, 0)
    due_date_counts = dict.fromkeys(DueDateStatus, 0)
    priority_status_counts = {(p, s): 0 for p in Priority for s in Status}
    tag_counts: Counter[TagId | None] = Counter()
    total = 0

    for task in tasks:
        total += 1
        status_counts[task.status] += 1
        priority_counts[task.priority] += 1
        priority_status_counts[(task.priority, task.status)] += 1

        if task.status != Status.COMPLETED:
            bucket = DueDateStatus.classify(task.due_date, today, window_days)
            if bucket is not None:
                due_date_counts[bucket] += 1

        if task.tags:
            tag_counts.update(task.tags)
        else:
            tag_counts[NO_TAG] += 1

    return TaskStats(
        status_counts=MappingProxyType(status_counts),
        priority_counts=MappingProxyType(priority_counts),
        due_date_counts=MappingProxyType(due_date_counts),
        tag_counts=MappingProxyType(dict(tag_counts)),
        priority_status_counts=MappingProxyType(priority_status_counts),
        total=total,
    )
