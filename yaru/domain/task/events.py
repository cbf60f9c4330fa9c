"""Task domain events.

Recorded by ``TaskAggregate`` on each logical change and drained by the
caller after the change has been persisted. All events are pure data.
"""

from datetime import datetime

from yaru.domain.shared.events import DomainEvent


class TaskCompleted(DomainEvent):
    """Raised when a task transitions into the Completed status."""

    task_id: int | None
    completed_at: datetime


class TaskTitleChanged(DomainEvent):
    """Raised when a task's title is replaced."""

    task_id: int | None
    old_title: str
    new_title: str


class TaskTagAdded(DomainEvent):
    task_id: int | None
    tag_id: int


class TaskTagRemoved(DomainEvent):
    task_id: int | None
    tag_id: int
