"""In-memory repository implementations.

Keep aggregates in process memory, handing out copies so callers can only
change stored state through ``save``/``update``. A lock serialises writers
within the process. Identifiers are assigned from 1 upwards.
"""

import copy
import logging
import threading
from collections.abc import Sequence

from yaru.domain.shared.errors import AggregateNotFound, DomainError, StorageError
from yaru.domain.shared.result import Err, Ok, Result
from yaru.domain.tag.aggregate import TagAggregate
from yaru.domain.tag.repository import TagRepository
from yaru.domain.tag.value_objects import TagId
from yaru.domain.task.aggregate import TaskAggregate
from yaru.domain.task.repository import TaskRepository
from yaru.domain.task.specification import TaskSpecification
from yaru.domain.task.value_objects import TaskId

logger = logging.getLogger(__name__)


class InMemoryTaskRepository(TaskRepository):
    """Task repository backed by a dict keyed by identifier."""

    def __init__(self) -> None:
        self._tasks: dict[TaskId, TaskAggregate] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def find_by_id(self, task_id: TaskId) -> Result[TaskAggregate | None, DomainError]:
        with self._lock:
            task = self._tasks.get(task_id)
            return Ok(copy.copy(task) if task is not None else None)

    def find_all(self) -> Result[list[TaskAggregate], DomainError]:
        with self._lock:
            return Ok([copy.copy(task) for task in self._tasks.values()])

    def find_by_specification(
        self,
        spec: TaskSpecification,
    ) -> Result[list[TaskAggregate], DomainError]:
        with self._lock:
            return Ok(
                [copy.copy(task) for task in self._tasks.values() if spec.is_satisfied_by(task)]
            )

    def save(self, task: TaskAggregate) -> Result[TaskAggregate, DomainError]:
        with self._lock:
            if task.id is None:
                task = task.with_id(self._generate_id())
                logger.debug(f"Assigned task id {task.id}")
            else:
                self._next_id = max(self._next_id, task.id.value + 1)
            self._tasks[task.id] = copy.copy(task)
            return Ok(task)

    def update(self, task: TaskAggregate) -> Result[TaskAggregate, DomainError]:
        with self._lock:
            if task.id is None:
                return Err(StorageError(detail="cannot update a task that was never saved"))
            if task.id not in self._tasks:
                return Err(AggregateNotFound(kind="task", aggregate_id=task.id.value))
            self._tasks[task.id] = copy.copy(task)
            return Ok(copy.copy(task))

    def delete(self, task_id: TaskId) -> Result[bool, DomainError]:
        with self._lock:
            return Ok(self._tasks.pop(task_id, None) is not None)

    def _generate_id(self) -> TaskId:
        task_id = TaskId(value=self._next_id)
        self._next_id += 1
        return task_id


class InMemoryTagRepository(TagRepository):
    """Tag repository backed by a dict keyed by identifier."""

    def __init__(self) -> None:
        self._tags: dict[TagId, TagAggregate] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def find_by_id(self, tag_id: TagId) -> Result[TagAggregate | None, DomainError]:
        with self._lock:
            tag = self._tags.get(tag_id)
            return Ok(copy.copy(tag) if tag is not None else None)

    def find_all(self) -> Result[list[TagAggregate], DomainError]:
        with self._lock:
            return Ok([copy.copy(tag) for tag in self._tags.values()])

    def find_by_name(self, name: str) -> Result[TagAggregate | None, DomainError]:
        with self._lock:
            for tag in self._tags.values():
                if tag.name.value == name:
                    return Ok(copy.copy(tag))
            return Ok(None)

    def find_by_ids(self, tag_ids: Sequence[TagId]) -> Result[list[TagAggregate], DomainError]:
        with self._lock:
            wanted = dict.fromkeys(tag_ids)
            return Ok([copy.copy(self._tags[t]) for t in wanted if t in self._tags])

    def save(self, tag: TagAggregate) -> Result[TagAggregate, DomainError]:
        with self._lock:
            if tag.id is None:
                tag = tag.with_id(self._generate_id())
                logger.debug(f"Assigned tag id {tag.id}")
            else:
                self._next_id = max(self._next_id, tag.id.value + 1)
            self._tags[tag.id] = copy.copy(tag)
            return Ok(tag)

    def update(self, tag: TagAggregate) -> Result[TagAggregate, DomainError]:
        with self._lock:
            if tag.id is None:
                return Err(StorageError(detail="cannot update a tag that was never saved"))
            if tag.id not in self._tags:
                return Err(AggregateNotFound(kind="tag", aggregate_id=tag.id.value))
            self._tags[tag.id] = copy.copy(tag)
            return Ok(copy.copy(tag))

    def delete(self, tag_id: TagId) -> Result[bool, DomainError]:
        with self._lock:
            return Ok(self._tags.pop(tag_id, None) is not None)

    def _generate_id(self) -> TagId:
        tag_id = TagId(value=self._next_id)
        self._next_id += 1
        return tag_id
