"""Application service layer for yaru.

Use cases that orchestrate the domain through the repository contracts and
exchange DTOs with the outer layers.

Services:
    TaskService - add, edit, complete, tag, delete, show, list, search, stats
    TagService - add, edit, show, list, delete

Example usage:
    >>> from yaru.application import TaskService, CreateTaskDTO
    >>> from yaru.infrastructure.storage import InMemoryTaskRepository, InMemoryTagRepository
    >>>
    >>> service = TaskService(InMemoryTaskRepository(), InMemoryTagRepository())
    >>> result = service.add_task(CreateTaskDTO(title="Write report"))
"""

from yaru.application.dto import (
    CreateTagDTO,
    CreateTaskDTO,
    StatsDTO,
    TagDTO,
    TagInfo,
    TaskDTO,
    UpdateTagDTO,
    UpdateTaskDTO,
)
from yaru.application.filters import TaskFilter, build_specification, sort_tasks
from yaru.application.tag_service import TagService
from yaru.application.task_service import TaskService

__all__ = [
    # Services
    "TaskService",
    "TagService",
    # DTOs
    "TaskDTO",
    "TagInfo",
    "CreateTaskDTO",
    "UpdateTaskDTO",
    "TagDTO",
    "CreateTagDTO",
    "UpdateTagDTO",
    "StatsDTO",
    # Listing
    "TaskFilter",
    "build_specification",
    "sort_tasks",
]
