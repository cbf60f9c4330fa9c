"""Tests for TaskAggregate."""

import copy
from datetime import UTC, date, datetime, timedelta

from conftest import make_task, stored_task

from yaru.domain.shared import DuplicateTag, Err, Ok, TagNotFound
from yaru.domain.tag import TagId
from yaru.domain.task import (
    DueDate,
    DueDateStatus,
    Priority,
    Status,
    TaskAggregate,
    TaskCompleted,
    TaskDescription,
    TaskId,
    TaskTagAdded,
    TaskTagRemoved,
    TaskTitle,
    TaskTitleChanged,
)


class TestTaskCreation:
    """Tests for creating tasks."""

    def test_new_task_defaults(self):
        """Test a new task has no id, Pending status and Medium priority."""
        task = TaskAggregate.new(title=TaskTitle(value="Write report"))

        assert task.id is None
        assert task.is_new
        assert task.status == Status.PENDING
        assert task.priority == Priority.MEDIUM
        assert task.description.is_empty
        assert task.tags == ()
        assert task.due_date is None
        assert task.completed_at is None
        assert task.created_at == task.updated_at
        assert task.pending_events == ()

    def test_new_completed_task_is_stamped(self):
        """Test creating a task as Completed sets completed_at."""
        task = make_task(status=Status.COMPLETED)

        assert task.status == Status.COMPLETED
        assert task.completed_at is not None

    def test_new_collapses_duplicate_tags(self):
        """Test repeated tag ids are kept once, in first-seen order."""
        task = make_task(tags=(3, 1, 3, 2, 1))

        assert task.tags == (TagId(value=3), TagId(value=1), TagId(value=2))

    def test_with_id_returns_copy(self):
        """Test with_id leaves the original task untouched."""
        task = make_task()
        saved = task.with_id(TaskId(value=7))

        assert saved.id == TaskId(value=7)
        assert not saved.is_new
        assert task.id is None

    def test_reconstruct_preserves_fields(self, fixed_time):
        """Test reconstruct takes stored values as they are."""
        task = TaskAggregate.reconstruct(
            id=TaskId(value=4),
            title=TaskTitle(value="Stored"),
            description=TaskDescription(value="from disk"),
            status=Status.COMPLETED,
            priority=Priority.HIGH,
            tags=[TagId(value=1)],
            created_at=fixed_time,
            updated_at=fixed_time,
            due_date=DueDate(value=date(2026, 4, 1)),
            completed_at=fixed_time,
        )

        assert task.id == TaskId(value=4)
        assert task.completed_at == fixed_time
        assert task.pending_events == ()


class TestTaskStatus:
    """Tests for status transitions."""

    def test_complete_sets_status_and_timestamp(self):
        """Test complete() moves to Completed and records an event."""
        task = stored_task(1)

        task.complete()

        assert task.status == Status.COMPLETED
        assert task.completed_at is not None
        assert task.updated_at >= task.created_at
        events = task.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], TaskCompleted)
        assert events[0].task_id == 1
        assert events[0].completed_at == task.completed_at

    def test_complete_is_idempotent(self):
        """Test completing twice keeps the first completion time."""
        task = stored_task(1)
        task.complete()
        first = task.completed_at
        task.pull_events()

        task.complete()

        assert task.completed_at == first
        assert task.pending_events == ()

    def test_change_status_to_completed_from_in_progress(self):
        """Test changing status into Completed stamps completed_at."""
        task = stored_task(1, status=Status.IN_PROGRESS)

        task.change_status(Status.COMPLETED)

        assert task.status == Status.COMPLETED
        assert task.completed_at is not None
        assert isinstance(task.pending_events[0], TaskCompleted)

    def test_change_status_completed_to_completed_keeps_stamp(self):
        """Test re-setting Completed does not move completed_at."""
        task = stored_task(1, status=Status.COMPLETED)
        original = task.completed_at

        task.change_status(Status.COMPLETED)

        assert task.completed_at == original

    def test_leaving_completed_clears_timestamp(self):
        """Test moving out of Completed clears completed_at."""
        task = stored_task(1, status=Status.COMPLETED)

        task.change_status(Status.PENDING)

        assert task.status == Status.PENDING
        assert task.completed_at is None

    def test_completed_at_iff_completed(self):
        """Test the completed_at invariant across a transition chain."""
        task = stored_task(1)
        for status in [Status.IN_PROGRESS, Status.COMPLETED, Status.PENDING, Status.COMPLETED]:
            task.change_status(status)
            assert (task.completed_at is not None) == (task.status == Status.COMPLETED)


class TestTaskFields:
    """Tests for field changes."""

    def test_change_title_records_event(self):
        """Test a title change records old and new titles."""
        task = stored_task(2, title="Old")

        task.change_title(TaskTitle(value="New"))

        assert task.title.value == "New"
        event = task.pull_events()[0]
        assert isinstance(event, TaskTitleChanged)
        assert (event.task_id, event.old_title, event.new_title) == (2, "Old", "New")

    def test_unsaved_task_events_have_no_id(self):
        """Test events raised before saving carry task_id None."""
        task = make_task()
        task.change_title(TaskTitle(value="Renamed"))

        assert task.pending_events[0].task_id is None

    def test_change_description_priority_due_date(self):
        """Test plain field setters."""
        task = stored_task(1, due_date=date(2026, 3, 20))

        task.change_description(TaskDescription(value="details"))
        task.change_priority(Priority.CRITICAL)
        task.change_due_date(None)

        assert task.description.value == "details"
        assert task.priority == Priority.CRITICAL
        assert task.due_date is None
        assert task.pending_events == ()

    def test_updated_at_never_moves_backwards(self):
        """Test each mutation keeps updated_at monotonic."""
        task = stored_task(1)
        previous = task.updated_at

        for _ in range(5):
            task.change_priority(Priority.HIGH)
            assert task.updated_at >= previous
            previous = task.updated_at


class TestTaskTags:
    """Tests for tag membership."""

    def test_add_tag(self):
        """Test adding a new tag succeeds and records an event."""
        task = stored_task(1)

        result = task.add_tag(TagId(value=5))

        assert result == Ok(None)
        assert task.has_tag(TagId(value=5))
        event = task.pull_events()[0]
        assert isinstance(event, TaskTagAdded)
        assert event.tag_id == 5

    def test_add_duplicate_tag_fails_without_change(self):
        """Test adding an attached tag returns DuplicateTag and changes nothing."""
        task = stored_task(1, tags=(5,))
        before = copy.copy(task)

        result = task.add_tag(TagId(value=5))

        assert result == Err(DuplicateTag(task_id=1, tag_id=5))
        assert task == before
        assert task.pending_events == ()

    def test_remove_tag(self):
        """Test removing an attached tag succeeds and records an event."""
        task = stored_task(1, tags=(5, 6))

        result = task.remove_tag(TagId(value=5))

        assert isinstance(result, Ok)
        assert task.tags == (TagId(value=6),)
        assert isinstance(task.pull_events()[0], TaskTagRemoved)

    def test_remove_missing_tag_fails(self):
        """Test removing an unattached tag returns TagNotFound."""
        task = stored_task(1)

        result = task.remove_tag(TagId(value=9))

        assert result == Err(TagNotFound(task_id=1, tag_id=9))

    def test_replace_tags_dedupes(self):
        """Test replace_tags collapses repeated ids."""
        task = stored_task(1, tags=(1,))

        task.replace_tags([TagId(value=2), TagId(value=2), TagId(value=3)])

        assert task.tags == (TagId(value=2), TagId(value=3))

    def test_tags_view_is_read_only(self):
        """Test the exposed tags cannot alter the aggregate."""
        task = stored_task(1, tags=(1,))

        assert isinstance(task.tags, tuple)


class TestTaskQueries:
    """Tests for date-based queries."""

    def test_overdue_when_open_and_past_due(self, today):
        """Test an open task due yesterday is overdue."""
        task = stored_task(1, due_date=today - timedelta(days=1))
        assert task.is_overdue(today)

    def test_not_overdue_on_due_date(self, today):
        """Test a task due today is not overdue."""
        task = stored_task(1, due_date=today)
        assert not task.is_overdue(today)

    def test_completed_task_never_overdue(self, today):
        """Test completed tasks are not overdue."""
        task = stored_task(1, status=Status.COMPLETED, due_date=today - timedelta(days=30))
        assert not task.is_overdue(today)

    def test_no_due_date_never_overdue(self, today):
        """Test a task without a due date is not overdue."""
        assert not stored_task(1).is_overdue(today)

    def test_due_date_status(self, today):
        """Test bucket lookup through the aggregate."""
        assert stored_task(1, due_date=today).due_date_status(today) == DueDateStatus.DUE_TODAY
        assert stored_task(1).due_date_status(today) == DueDateStatus.NO_DUE_DATE
        assert stored_task(1, due_date=today + timedelta(days=8)).due_date_status(today) is None
        completed = stored_task(1, status=Status.COMPLETED, due_date=today)
        assert completed.due_date_status(today) is None


class TestTaskEquality:
    """Tests for equality and copying."""

    def test_copy_is_equal_and_independent(self):
        """Test copies compare equal but do not share tag lists."""
        task = stored_task(1, tags=(1,))
        clone = copy.copy(task)

        assert clone == task
        clone.add_tag(TagId(value=2))
        assert clone != task
        assert task.tags == (TagId(value=1),)

    def test_pending_events_do_not_affect_equality_or_copies(self):
        """Test events are excluded from equality and never copied."""
        task = stored_task(1)
        task.change_title(TaskTitle(value="Changed"))
        clone = copy.copy(task)

        assert clone == task
        assert clone.pending_events == ()
        assert len(task.pending_events) == 1

    def test_pull_events_drains(self):
        """Test pulling events empties the pending list."""
        task = stored_task(1)
        task.complete()

        assert len(task.pull_events()) == 1
        assert task.pull_events() == []


class TestStoredTimestamps:
    """Tests for tasks rebuilt from stored, timezone-less timestamps."""

    def _naive(self, status: Status = Status.PENDING) -> TaskAggregate:
        stamp = datetime(2024, 1, 1, 9, 0)
        return TaskAggregate.reconstruct(
            id=TaskId(value=1),
            title=TaskTitle(value="Imported"),
            description=TaskDescription(),
            status=status,
            priority=Priority.LOW,
            tags=[],
            created_at=stamp,
            updated_at=stamp,
            due_date=None,
            completed_at=stamp if status == Status.COMPLETED else None,
        )

    def test_naive_timestamps_are_read_as_utc(self):
        """Test naive stored timestamps come back as UTC."""
        task = self._naive(Status.COMPLETED)

        assert task.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
        assert task.updated_at.tzinfo is not None
        assert task.completed_at.tzinfo is not None

    def test_change_after_naive_reconstruct(self):
        """Test field changes work on a task rebuilt with naive timestamps."""
        task = self._naive()

        task.change_priority(Priority.HIGH)
        task.change_title(TaskTitle(value="Renamed"))
        task.add_tag(TagId(value=1))
        task.complete()

        assert task.priority == Priority.HIGH
        assert task.title.value == "Renamed"
        assert task.status == Status.COMPLETED
        assert task.updated_at > task.created_at

    def test_aware_timestamps_are_kept(self, fixed_time):
        """Test timezone-aware timestamps pass through unchanged."""
        task = stored_task(1)
        rebuilt = TaskAggregate.reconstruct(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            tags=task.tags,
            created_at=fixed_time,
            updated_at=fixed_time,
            due_date=None,
            completed_at=None,
        )

        assert rebuilt.created_at is fixed_time
