"""Shared fixtures for yaru tests."""

from datetime import UTC, date, datetime

import pytest

from yaru.application import TagService, TaskService
from yaru.domain.tag import TagId
from yaru.domain.task import (
    DueDate,
    Priority,
    Status,
    TaskAggregate,
    TaskDescription,
    TaskId,
    TaskTitle,
)
from yaru.infrastructure.storage import InMemoryTagRepository, InMemoryTaskRepository

TODAY = date(2026, 3, 15)


def make_task(
    title: str = "Test task",
    description: str = "",
    status: Status = Status.PENDING,
    priority: Priority = Priority.MEDIUM,
    tags: tuple[int, ...] = (),
    due_date: date | None = None,
) -> TaskAggregate:
    """Build a new (unsaved) task from primitives."""
    return TaskAggregate.new(
        title=TaskTitle(value=title),
        description=TaskDescription(value=description),
        status=status,
        priority=priority,
        tags=[TagId(value=t) for t in tags],
        due_date=DueDate(value=due_date) if due_date is not None else None,
    )


def stored_task(task_id: int = 1, **kwargs) -> TaskAggregate:
    """Build a task that looks like it came back from a repository."""
    return make_task(**kwargs).with_id(TaskId(value=task_id))


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def tag_repo() -> InMemoryTagRepository:
    return InMemoryTagRepository()


@pytest.fixture
def task_service(task_repo, tag_repo) -> TaskService:
    return TaskService(task_repo, tag_repo, clock=lambda: TODAY)


@pytest.fixture
def tag_service(tag_repo) -> TagService:
    return TagService(tag_repo)


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2026, 3, 15, 9, 30, tzinfo=UTC)
