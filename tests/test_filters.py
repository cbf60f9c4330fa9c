"""Tests for listing filters, sorting and DTO rendering."""

from datetime import date, datetime, timedelta

import pytest
from conftest import TODAY, stored_task

from yaru.application import StatsDTO, TaskDTO, TaskFilter, build_specification, sort_tasks
from yaru.domain.services import calculate_stats
from yaru.domain.shared import Err, Ok
from yaru.domain.tag import TagId
from yaru.domain.task import (
    AnyTask,
    ByPriority,
    ByStatus,
    ByTag,
    Priority,
    Status,
    TaskAggregate,
    TaskDescription,
    TaskId,
    TaskTitle,
)


def _created(task_id: int, created_at: datetime) -> TaskAggregate:
    return TaskAggregate.reconstruct(
        id=TaskId(value=task_id),
        title=TaskTitle(value=f"task {task_id}"),
        description=TaskDescription(),
        status=Status.PENDING,
        priority=Priority.MEDIUM,
        tags=[],
        created_at=created_at,
        updated_at=created_at,
        due_date=None,
        completed_at=None,
    )


class TestTaskFilter:
    """Tests for TaskFilter parsing."""

    @pytest.mark.parametrize(
        "text, key, value",
        [
            ("status:done", "status", "done"),
            ("PRIORITY:high", "priority", "high"),
            ("tag:3", "tag", "3"),
        ],
    )
    def test_parse(self, text, key, value):
        """Test key:value strings parse with a case-insensitive key."""
        assert TaskFilter.parse(text) == Ok(TaskFilter(key=key, value=value))

    @pytest.mark.parametrize("text", ["status", "colour:red", ""])
    def test_parse_invalid(self, text):
        """Test malformed and unknown filters are rejected."""
        assert isinstance(TaskFilter.parse(text), Err)

    def test_status_specification(self):
        """Test both status vocabularies build the same specification."""
        done = TaskFilter(key="status", value="done").to_specification()
        canonical = TaskFilter(key="status", value="Completed").to_specification()

        assert done == Ok(ByStatus(Status.COMPLETED))
        assert canonical == done

    def test_priority_and_tag_specifications(self):
        """Test priority and tag filters."""
        priority = TaskFilter(key="priority", value="critical").to_specification()
        tag = TaskFilter(key="tag", value="4").to_specification()

        assert priority == Ok(ByPriority(Priority.CRITICAL))
        assert tag == Ok(ByTag(TagId(value=4)))

    @pytest.mark.parametrize(
        "key, value",
        [("status", "later"), ("priority", "urgent"), ("tag", "abc"), ("tag", "-1")],
    )
    def test_bad_values(self, key, value):
        """Test invalid filter values produce validation errors."""
        assert isinstance(TaskFilter(key=key, value=value).to_specification(), Err)

    def test_build_specification(self):
        """Test filters are ANDed and an empty list matches everything."""
        assert isinstance(build_specification([]).value, AnyTask)

        spec = build_specification(
            [TaskFilter(key="status", value="todo"), TaskFilter(key="priority", value="high")]
        ).value
        assert spec.is_satisfied_by(stored_task(1, priority=Priority.HIGH))
        assert not spec.is_satisfied_by(stored_task(1, priority=Priority.LOW))


class TestSortTasks:
    """Tests for sort_tasks()."""

    def test_sort_by_priority(self):
        """Test priority sorts by rank, not by name."""
        tasks = [
            stored_task(1, priority=Priority.HIGH),
            stored_task(2, priority=Priority.LOW),
            stored_task(3, priority=Priority.CRITICAL),
            stored_task(4, priority=Priority.MEDIUM),
        ]

        ascending = [t.id.value for t in sort_tasks(tasks, "priority")]
        descending = [t.id.value for t in sort_tasks(tasks, "priority", "desc")]

        assert ascending == [2, 4, 1, 3]
        assert descending == [3, 1, 4, 2]

    def test_sort_by_due_date_puts_missing_last(self):
        """Test tasks without a due date follow dated ones in ascending order."""
        tasks = [
            stored_task(1),
            stored_task(2, due_date=date(2026, 5, 1)),
            stored_task(3, due_date=date(2026, 4, 1)),
        ]

        assert [t.id.value for t in sort_tasks(tasks, "due_date")] == [3, 2, 1]
        assert [t.id.value for t in sort_tasks(tasks, "due_date", "desc")] == [1, 2, 3]

    def test_sort_by_created_at(self, fixed_time):
        """Test creation order sorting."""
        tasks = [
            _created(1, fixed_time + timedelta(hours=2)),
            _created(2, fixed_time),
            _created(3, fixed_time + timedelta(hours=1)),
        ]

        assert [t.id.value for t in sort_tasks(tasks, "created_at")] == [2, 3, 1]
        assert [t.id.value for t in sort_tasks(tasks, "created_at", "desc")] == [1, 3, 2]


class TestDtoRendering:
    """Tests for TaskDTO and StatsDTO."""

    def test_task_dto(self):
        """Test primitive rendering with lowercase enums and resolved tags."""
        task = stored_task(
            5,
            title="Ship it",
            status=Status.IN_PROGRESS,
            priority=Priority.HIGH,
            tags=(1, 2),
            due_date=date(2026, 4, 1),
        )

        dto = TaskDTO.from_aggregate(task, {TagId(value=1): "work"})

        assert dto.id == 5
        assert dto.status == "in_progress"
        assert dto.priority == "high"
        assert dto.description is None
        assert [(t.id, t.name) for t in dto.tags] == [(1, "work")]
        assert dto.due_date == date(2026, 4, 1)
        assert dto.completed_at is None

    def test_stats_dto(self):
        """Test zero counts are dropped and tags are labelled."""
        tasks = [
            stored_task(1, tags=(1,), due_date=TODAY - timedelta(days=1)),
            stored_task(2, tags=(7,), status=Status.COMPLETED),
            stored_task(3),
        ]
        stats = calculate_stats(tasks, TODAY)

        dto = StatsDTO.from_stats(stats, {TagId(value=1): "work"})

        assert dto.status_stats == {"pending": 2, "completed": 1}
        assert dto.priority_stats == {"medium": 3}
        assert dto.due_date_stats == {"overdue": 1, "no_due_date": 1}
        assert dto.tag_stats == {"work": 1, "Tag ID: 7": 1, "(no tag)": 1}
        assert dto.priority_status_matrix == {"medium:pending": 2, "medium:completed": 1}
        assert dto.total_count == 3
        assert dto.completion_rate == 33.3
