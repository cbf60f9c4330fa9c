"""Task application service.

Orchestrates task use cases over the repository contracts: validating raw
input into value objects, checking that referenced tags exist, applying the
change through the aggregate, persisting it, and returning DTOs. Every
operation returns a Result; nothing here raises for an expected failure.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date

from yaru.config import AppConfig, SortKey, SortOrder
from yaru.domain.services.statistics import calculate_stats
from yaru.domain.shared.clock import today_utc
from yaru.domain.shared.errors import AggregateNotFound, DomainError
from yaru.domain.shared.result import Err, Ok, Result, collect, flat_map, map_result
from yaru.domain.tag.repository import TagRepository
from yaru.domain.tag.value_objects import TagId
from yaru.domain.task.aggregate import TaskAggregate
from yaru.domain.task.repository import TaskRepository
from yaru.domain.task.specification import ByKeyword, SearchField
from yaru.domain.task.value_objects import (
    DueDate,
    Priority,
    Status,
    TaskDescription,
    TaskId,
    TaskTitle,
)

from .dto import CreateTaskDTO, StatsDTO, TaskDTO, UpdateTaskDTO
from .filters import TaskFilter, build_specification, sort_tasks

logger = logging.getLogger(__name__)


class TaskService:
    """Task use cases.

    Args:
        task_repository: Where tasks are stored.
        tag_repository: Used to verify and name the tags tasks refer to.
        config: Preferences for search and sorting defaults.
        clock: Returns "today" for statistics; defaults to the UTC date.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        tag_repository: TagRepository,
        config: AppConfig | None = None,
        clock: Callable[[], date] = today_utc,
    ) -> None:
        self._tasks = task_repository
        self._tags = tag_repository
        self._config = config or AppConfig()
        self._clock = clock

    # =========================================================================
    # Commands
    # =========================================================================

    def add_task(self, dto: CreateTaskDTO) -> Result[TaskDTO, DomainError]:
        """Create and persist a task.

        Status accepts both the canonical and the filter spelling; missing
        status and priority default to Pending and Medium.
        """
        title = TaskTitle.create(dto.title)
        if isinstance(title, Err):
            return title

        description = TaskDescription.create(dto.description or "")
        if isinstance(description, Err):
            return description

        status: Result[Status, DomainError] = Ok(Status.PENDING)
        if dto.status is not None:
            status = Status.parse_any(dto.status)
        if isinstance(status, Err):
            return status

        priority: Result[Priority, DomainError] = Ok(Priority.MEDIUM)
        if dto.priority is not None:
            priority = Priority.from_filter_value(dto.priority)
        if isinstance(priority, Err):
            return priority

        due_date: DueDate | None = None
        if dto.due_date is not None:
            due_result = DueDate.create(dto.due_date)
            if isinstance(due_result, Err):
                return due_result
            due_date = due_result.value

        tag_ids = self._resolve_tag_ids(dto.tags)
        if isinstance(tag_ids, Err):
            return tag_ids

        task = TaskAggregate.new(
            title=title.value,
            description=description.value,
            status=status.value,
            priority=priority.value,
            tags=tag_ids.value,
            due_date=due_date,
        )

        saved = self._tasks.save(task)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Created task {saved.value.id}: {saved.value.title.value!r}")
        self._publish(saved.value)
        return self._to_dto(saved.value)

    def edit_task(self, task_id: int, dto: UpdateTaskDTO) -> Result[TaskDTO, DomainError]:
        """Apply the fields set on ``dto`` to an existing task.

        Every field is validated before the task is touched, so a bad value
        leaves the stored task exactly as it was.
        """
        found = self._get(task_id)
        if isinstance(found, Err):
            return found
        task = found.value

        changes: list[Callable[[], None]] = []

        if dto.title is not None:
            title = TaskTitle.create(dto.title)
            if isinstance(title, Err):
                return title
            changes.append(lambda: task.change_title(title.value))

        if dto.description is not None:
            description = TaskDescription.create(dto.description)
            if isinstance(description, Err):
                return description
            changes.append(lambda: task.change_description(description.value))

        if dto.status is not None:
            status = Status.parse_any(dto.status)
            if isinstance(status, Err):
                return status
            changes.append(lambda: task.change_status(status.value))

        if dto.priority is not None:
            priority = Priority.from_filter_value(dto.priority)
            if isinstance(priority, Err):
                return priority
            changes.append(lambda: task.change_priority(priority.value))

        if dto.tags is not None:
            tag_ids = self._resolve_tag_ids(dto.tags)
            if isinstance(tag_ids, Err):
                return tag_ids
            changes.append(lambda: task.replace_tags(tag_ids.value))

        if dto.clear_due_date:
            changes.append(lambda: task.change_due_date(None))
        elif dto.due_date is not None:
            due_date = DueDate.create(dto.due_date)
            if isinstance(due_date, Err):
                return due_date
            changes.append(lambda: task.change_due_date(due_date.value))

        for change in changes:
            change()

        return self._update(task)

    def complete_task(self, task_id: int) -> Result[TaskDTO, DomainError]:
        """Mark a task completed. Completing a completed task is not an error."""
        found = self._get(task_id)
        if isinstance(found, Err):
            return found
        found.value.complete()
        return self._update(found.value)

    def attach_tag(self, task_id: int, tag_id: int) -> Result[TaskDTO, DomainError]:
        """Attach one existing tag to a task.

        Returns Err(DuplicateTag) if the task already carries it.
        """
        found = self._get(task_id)
        if isinstance(found, Err):
            return found
        tag_ids = self._resolve_tag_ids([tag_id])
        if isinstance(tag_ids, Err):
            return tag_ids

        added = found.value.add_tag(tag_ids.value[0])
        if isinstance(added, Err):
            return added
        return self._update(found.value)

    def detach_tag(self, task_id: int, tag_id: int) -> Result[TaskDTO, DomainError]:
        """Detach a tag from a task. Returns Err(TagNotFound) if it is not attached."""
        found = self._get(task_id)
        if isinstance(found, Err):
            return found
        tag = TagId.create(tag_id)
        if isinstance(tag, Err):
            return tag

        removed = found.value.remove_tag(tag.value)
        if isinstance(removed, Err):
            return removed
        return self._update(found.value)

    def delete_task(self, task_id: int) -> Result[None, DomainError]:
        """Delete a task, or return Err(AggregateNotFound) if it does not exist."""
        deleted = flat_map(TaskId.create(task_id), self._tasks.delete)
        if isinstance(deleted, Err):
            return deleted
        if not deleted.value:
            return Err(AggregateNotFound(kind="task", aggregate_id=task_id))

        logger.info(f"Deleted task {task_id}")
        return Ok(None)

    # =========================================================================
    # Queries
    # =========================================================================

    def show_task(self, task_id: int) -> Result[TaskDTO, DomainError]:
        return flat_map(self._get(task_id), self._to_dto)

    def list_tasks(
        self,
        filters: Sequence[TaskFilter] = (),
        sort_key: SortKey | None = None,
        order: SortOrder | None = None,
    ) -> Result[list[TaskDTO], DomainError]:
        """List tasks matching every filter, sorted.

        Sort key and order default to the configured preferences.
        """
        spec = build_specification(filters)
        if isinstance(spec, Err):
            return spec

        tasks = self._tasks.find_by_specification(spec.value)
        if isinstance(tasks, Err):
            return tasks

        ordered = sort_tasks(
            tasks.value,
            sort_key or self._config.default_sort,
            order or self._config.default_order,
        )
        logger.debug(f"Listing {len(ordered)} tasks with {len(filters)} filter(s)")
        return self._to_dtos(ordered)

    def search_tasks(
        self,
        query: str,
        search_field: SearchField | None = None,
    ) -> Result[list[TaskDTO], DomainError]:
        """Find tasks containing every whitespace-separated keyword in ``query``."""
        spec = ByKeyword.from_query(query, search_field or self._config.search_field)

        tasks = self._tasks.find_by_specification(spec)
        if isinstance(tasks, Err):
            return tasks

        logger.debug(
            f"Search {spec.keywords} in {spec.search_field.value}: {len(tasks.value)} hit(s)"
        )
        return self._to_dtos(tasks.value)

    def show_stats(self, today: date | None = None) -> Result[StatsDTO, DomainError]:
        """Compute statistics over every task, naming tags where possible."""
        tasks = self._tasks.find_all()
        if isinstance(tasks, Err):
            return tasks

        stats = calculate_stats(
            tasks.value,
            today or self._clock(),
            self._config.due_soon_days,
        )

        tags = self._tags.find_all()
        if isinstance(tags, Err):
            return tags
        tag_names = {tag.id: tag.name.value for tag in tags.value if tag.id is not None}

        return Ok(StatsDTO.from_stats(stats, tag_names))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get(self, task_id: int) -> Result[TaskAggregate, DomainError]:
        found = flat_map(TaskId.create(task_id), self._tasks.find_by_id)
        if isinstance(found, Ok) and found.value is None:
            return Err(AggregateNotFound(kind="task", aggregate_id=task_id))
        return found

    def _update(self, task: TaskAggregate) -> Result[TaskDTO, DomainError]:
        updated = self._tasks.update(task)
        if isinstance(updated, Err):
            return updated

        logger.info(f"Updated task {task.id}")
        self._publish(task)
        return self._to_dto(updated.value)

    def _resolve_tag_ids(self, raw_ids: Iterable[int]) -> Result[list[TagId], DomainError]:
        """Validate tag identifiers and make sure every one of them exists.

        The first identifier without a stored tag is reported as
        AggregateNotFound.
        """
        parsed = collect(TagId.create(raw) for raw in raw_ids)
        if isinstance(parsed, Err):
            return parsed
        tag_ids = list(dict.fromkeys(parsed.value))
        if not tag_ids:
            return Ok([])

        found = self._tags.find_by_ids(tag_ids)
        if isinstance(found, Err):
            return found

        if len(found.value) != len(tag_ids):
            found_ids = {tag.id for tag in found.value}
            for tag_id in tag_ids:
                if tag_id not in found_ids:
                    return Err(AggregateNotFound(kind="tag", aggregate_id=tag_id.value))

        return Ok(tag_ids)

    def _tag_names(self, tasks: Iterable[TaskAggregate]) -> Result[dict[TagId, str], DomainError]:
        wanted = list(dict.fromkeys(tag_id for task in tasks for tag_id in task.tags))
        if not wanted:
            return Ok({})

        found = self._tags.find_by_ids(wanted)
        if isinstance(found, Err):
            return found
        return Ok({tag.id: tag.name.value for tag in found.value if tag.id is not None})

    def _to_dto(self, task: TaskAggregate) -> Result[TaskDTO, DomainError]:
        return map_result(
            self._tag_names([task]),
            lambda names: TaskDTO.from_aggregate(task, names),
        )

    def _to_dtos(self, tasks: list[TaskAggregate]) -> Result[list[TaskDTO], DomainError]:
        return map_result(
            self._tag_names(tasks),
            lambda names: [TaskDTO.from_aggregate(task, names) for task in tasks],
        )

    def _publish(self, task: TaskAggregate) -> None:
        for event in task.pull_events():
            details = event.model_dump(exclude={"event_id"})
            logger.debug(f"Task {task.id}: {type(event).__name__} {details}")
