"""Task repository contract.

Persistence adapters implement this interface; the domain and application
layers depend only on it. Implementations are responsible for allowing at
most one writer per task identifier at a time.
"""

from abc import ABC, abstractmethod

from yaru.domain.shared.errors import DomainError
from yaru.domain.shared.result import Result

from .aggregate import TaskAggregate
from .specification import TaskSpecification
from .value_objects import TaskId


class TaskRepository(ABC):
    """Abstract storage for ``TaskAggregate``."""

    @abstractmethod
    def find_by_id(self, task_id: TaskId) -> Result[TaskAggregate | None, DomainError]:
        """Return Ok(task), or Ok(None) if no task has this identifier."""

    @abstractmethod
    def find_all(self) -> Result[list[TaskAggregate], DomainError]:
        """Return every stored task."""

    @abstractmethod
    def find_by_specification(
        self,
        spec: TaskSpecification,
    ) -> Result[list[TaskAggregate], DomainError]:
        """Return every stored task that satisfies ``spec``."""

    @abstractmethod
    def save(self, task: TaskAggregate) -> Result[TaskAggregate, DomainError]:
        """Insert or replace a task.

        A task without an identifier is assigned a fresh one; the returned
        aggregate carries it. Identifiers handed out later never collide with
        one saved explicitly.
        """

    @abstractmethod
    def update(self, task: TaskAggregate) -> Result[TaskAggregate, DomainError]:
        """Replace an existing task.

        Returns Err(AggregateNotFound) if no stored task shares the identifier,
        or Err(StorageError) if the task was never saved.
        """

    @abstractmethod
    def delete(self, task_id: TaskId) -> Result[bool, DomainError]:
        """Remove a task. Returns Ok(True) if a record was removed."""
