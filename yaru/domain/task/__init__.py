"""Task domain - the task aggregate and everything that queries it.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskAggregate - Aggregate root for a task
    TaskId, TaskTitle, TaskDescription, DueDate - Value objects
    Status, Priority, DueDateStatus - Enumerations

Specifications:
    TaskSpecification - Predicate base with and_/or_ combinators
    ByStatus, ByPriority, ByTag, ById, Overdue, ByKeyword, AnyTask
    all_of - AND a list of specifications

Domain Events:
    TaskCompleted, TaskTitleChanged, TaskTagAdded, TaskTagRemoved

Repository:
    TaskRepository - Persistence contract
"""

from .aggregate import TaskAggregate
from .events import TaskCompleted, TaskTagAdded, TaskTagRemoved, TaskTitleChanged
from .repository import TaskRepository
from .specification import (
    AndSpecification,
    AnyTask,
    ById,
    ByKeyword,
    ByPriority,
    ByStatus,
    ByTag,
    OrSpecification,
    Overdue,
    SearchField,
    TaskSpecification,
    all_of,
)
from .value_objects import (
    DUE_SOON_DAYS,
    TITLE_MAX_LENGTH,
    DueDate,
    DueDateStatus,
    Priority,
    Status,
    TaskDescription,
    TaskId,
    TaskTitle,
)

__all__ = [
    # Aggregate
    "TaskAggregate",
    # Value objects
    "TaskId",
    "TaskTitle",
    "TaskDescription",
    "DueDate",
    "Status",
    "Priority",
    "DueDateStatus",
    "TITLE_MAX_LENGTH",
    "DUE_SOON_DAYS",
    # Specifications
    "TaskSpecification",
    "AndSpecification",
    "OrSpecification",
    "AnyTask",
    "ByStatus",
    "ByPriority",
    "ByTag",
    "ById",
    "Overdue",
    "ByKeyword",
    "SearchField",
    "all_of",
    # Events
    "TaskCompleted",
    "TaskTitleChanged",
    "TaskTagAdded",
    "TaskTagRemoved",
    # Repository
    "TaskRepository",
]
