"""Task aggregate root.

``TaskAggregate`` is the only way to change a task. Every mutation goes
through one of its methods, which keep these invariants:

- ``completed_at`` is set if and only if the status is Completed
- ``updated_at`` never moves backwards and is refreshed on every mutation
- the tag identifier list never contains duplicates

A new task has no identifier (``id is None``) until a repository saves it
and hands back a copy from ``with_id``.
"""

import copy
from collections.abc import Iterable
from datetime import date, datetime

from yaru.domain.shared.aggregate import AggregateRoot
from yaru.domain.shared.clock import as_utc, utc_now
from yaru.domain.shared.errors import DuplicateTag, TagNotFound
from yaru.domain.shared.result import Err, Ok, Result
from yaru.domain.tag.value_objects import TagId

from .events import TaskCompleted, TaskTagAdded, TaskTagRemoved, TaskTitleChanged
from .value_objects import (
    DueDate,
    DueDateStatus,
    Priority,
    Status,
    TaskDescription,
    TaskId,
    TaskTitle,
)


def _unique(tag_ids: Iterable[TagId]) -> list[TagId]:
    return list(dict.fromkeys(tag_ids))


class TaskAggregate(AggregateRoot):
    """A task and the rules that govern its changes.

    Build new tasks with ``TaskAggregate.new()`` and stored ones with
    ``TaskAggregate.reconstruct()``.
    """

    def __init__(
        self,
        *,
        id: TaskId | None,
        title: TaskTitle,
        description: TaskDescription,
        status: Status,
        priority: Priority,
        tags: list[TagId],
        created_at: datetime,
        updated_at: datetime,
        due_date: DueDate | None,
        completed_at: datetime | None,
    ) -> None:
        super().__init__()
        self._id = id
        self._title = title
        self._description = description
        self._status = status
        self._priority = priority
        self._tags = tags
        self._created_at = as_utc(created_at)
        self._updated_at = as_utc(updated_at)
        self._due_date = due_date
        self._completed_at = as_utc(completed_at) if completed_at is not None else None

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        title: TaskTitle,
        description: TaskDescription | None = None,
        status: Status = Status.PENDING,
        priority: Priority = Priority.MEDIUM,
        tags: Iterable[TagId] = (),
        due_date: DueDate | None = None,
    ) -> "TaskAggregate":
        """Create a task that has not been persisted yet.

        A task created directly in the Completed status is stamped as
        completed now. Repeated tag identifiers are collapsed.
        """
        now = utc_now()
        return cls(
            id=None,
            title=title,
            description=description or TaskDescription(),
            status=status,
            priority=priority,
            tags=_unique(tags),
            created_at=now,
            updated_at=now,
            due_date=due_date,
            completed_at=now if status == Status.COMPLETED else None,
        )

    @classmethod
    def reconstruct(
        cls,
        id: TaskId,
        title: TaskTitle,
        description: TaskDescription,
        status: Status,
        priority: Priority,
        tags: Iterable[TagId],
        created_at: datetime,
        updated_at: datetime,
        due_date: DueDate | None,
        completed_at: datetime | None,
    ) -> "TaskAggregate":
        """Rebuild a stored task. Fields are taken as already valid."""
        return cls(
            id=id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            tags=list(tags),
            created_at=created_at,
            updated_at=updated_at,
            due_date=due_date,
            completed_at=completed_at,
        )

    def with_id(self, task_id: TaskId) -> "TaskAggregate":
        """Return a copy carrying a persistence-assigned identifier."""
        clone = copy.copy(self)
        clone._id = task_id
        return clone

    def __copy__(self) -> "TaskAggregate":
        return TaskAggregate.reconstruct(
            id=self._id,
            title=self._title,
            description=self._description,
            status=self._status,
            priority=self._priority,
            tags=self._tags,
            created_at=self._created_at,
            updated_at=self._updated_at,
            due_date=self._due_date,
            completed_at=self._completed_at,
        )

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def complete(self) -> None:
        """Mark the task completed. Does nothing if it already is."""
        if self._status == Status.COMPLETED:
            return
        self._touch()
        self._mark_completed()

    def change_status(self, new_status: Status) -> None:
        """Set the status unconditionally.

        Entering Completed stamps ``completed_at`` unless the task was already
        completed; leaving Completed clears it.
        """
        self._touch()
        if new_status == Status.COMPLETED:
            if self._status != Status.COMPLETED:
                self._mark_completed()
        else:
            self._status = new_status
            self._completed_at = None

    def change_title(self, new_title: TaskTitle) -> None:
        old_title = self._title
        self._touch()
        self._title = new_title
        self._record(
            TaskTitleChanged(
                task_id=self._event_id(),
                old_title=old_title.value,
                new_title=new_title.value,
            )
        )

    def change_description(self, new_description: TaskDescription) -> None:
        self._touch()
        self._description = new_description

    def change_priority(self, new_priority: Priority) -> None:
        self._touch()
        self._priority = new_priority

    def change_due_date(self, new_due_date: DueDate | None) -> None:
        """Replace the due date; None removes it."""
        self._touch()
        self._due_date = new_due_date

    def replace_tags(self, new_tag_ids: Iterable[TagId]) -> None:
        """Replace the whole tag list. Repeated identifiers are collapsed."""
        tags = _unique(new_tag_ids)
        self._touch()
        self._tags = tags

    def add_tag(self, tag_id: TagId) -> Result[None, DuplicateTag]:
        """Attach a tag.

        Returns:
            Ok(None), or Err(DuplicateTag) if the tag is already attached, in
            which case the task is left unchanged.
        """
        if tag_id in self._tags:
            return Err(DuplicateTag(task_id=self._event_id(), tag_id=tag_id.value))
        self._touch()
        self._tags.append(tag_id)
        self._record(TaskTagAdded(task_id=self._event_id(), tag_id=tag_id.value))
        return Ok(None)

    def remove_tag(self, tag_id: TagId) -> Result[None, TagNotFound]:
        """Detach a tag.

        Returns:
            Ok(None), or Err(TagNotFound) if the tag is not attached, in which
            case the task is left unchanged.
        """
        if tag_id not in self._tags:
            return Err(TagNotFound(task_id=self._event_id(), tag_id=tag_id.value))
        self._touch()
        self._tags.remove(tag_id)
        self._record(TaskTagRemoved(task_id=self._event_id(), tag_id=tag_id.value))
        return Ok(None)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_overdue(self, today: date) -> bool:
        """True if the task is open and its due date is strictly before ``today``."""
        if self._status == Status.COMPLETED or self._due_date is None:
            return False
        return self._due_date.is_before(today)

    def due_date_status(self, today: date) -> DueDateStatus | None:
        """Due-date bucket relative to ``today``.

        Completed tasks and tasks due beyond the coming week have no bucket.
        """
        if self._status == Status.COMPLETED:
            return None
        return DueDateStatus.classify(self._due_date, today)

    def has_tag(self, tag_id: TagId) -> bool:
        return tag_id in self._tags

    @property
    def id(self) -> TaskId | None:
        return self._id

    @property
    def is_new(self) -> bool:
        """True until a repository has assigned an identifier."""
        return self._id is None

    @property
    def title(self) -> TaskTitle:
        return self._title

    @property
    def description(self) -> TaskDescription:
        return self._description

    @property
    def status(self) -> Status:
        return self._status

    @property
    def priority(self) -> Priority:
        return self._priority

    @property
    def tags(self) -> tuple[TagId, ...]:
        return tuple(self._tags)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def due_date(self) -> DueDate | None:
        return self._due_date

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _mark_completed(self) -> None:
        now = utc_now()
        self._status = Status.COMPLETED
        self._completed_at = now
        self._record(TaskCompleted(task_id=self._event_id(), completed_at=now))

    def _touch(self) -> None:
        self._updated_at = max(self._updated_at, utc_now())

    def _event_id(self) -> int | None:
        return self._id.value if self._id is not None else None

    def _state(self) -> tuple:
        return (
            self._id,
            self._title,
            self._description,
            self._status,
            self._priority,
            self._tags,
            self._created_at,
            self._updated_at,
            self._due_date,
            self._completed_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskAggregate):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"TaskAggregate(id={self._id!r}, title={self._title.value!r}, "
            f"status={self._status.value}, priority={self._priority.value})"
        )
