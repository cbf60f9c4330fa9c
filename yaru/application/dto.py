"""Data transfer objects for the application layer.

These Pydantic models are what the outer layers (CLI, TUI, storage
adapters) exchange with the use cases. They hold primitives only and are
separate from the domain aggregates.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from yaru.domain.services.statistics import NO_TAG, TaskStats
from yaru.domain.tag.aggregate import TagAggregate
from yaru.domain.tag.value_objects import TagId
from yaru.domain.task.aggregate import TaskAggregate
from yaru.domain.task.value_objects import DueDateStatus, Priority, Status

NO_TAG_LABEL = "(no tag)"


def tag_label(tag_id: TagId, tag_names: Mapping[TagId, str]) -> str:
    """Display name for a tag, falling back to its identifier."""
    return tag_names.get(tag_id, f"Tag ID: {tag_id.value}")


# =============================================================================
# Task DTOs
# =============================================================================


class TagInfo(BaseModel):
    """Identifier and name of a tag attached to a task."""

    id: int
    name: str


class TaskDTO(BaseModel):
    """Read model of a task with its tag names resolved."""

    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    tags: list[TagInfo] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_aggregate(
        cls,
        task: TaskAggregate,
        tag_names: Mapping[TagId, str] | None = None,
    ) -> "TaskDTO":
        """Build the read model for a persisted task.

        Tags missing from ``tag_names`` are left out of ``tags``.
        """
        tag_names = tag_names or {}
        return cls(
            id=task.id.value if task.id is not None else 0,
            title=task.title.value,
            description=task.description.as_optional(),
            status=task.status.filter_value,
            priority=task.priority.filter_value,
            tags=[
                TagInfo(id=tag_id.value, name=tag_names[tag_id])
                for tag_id in task.tags
                if tag_id in tag_names
            ],
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date.value if task.due_date is not None else None,
            completed_at=task.completed_at,
        )


class CreateTaskDTO(BaseModel):
    """Input for creating a task."""

    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    tags: list[int] = Field(default_factory=list)
    due_date: Optional[date] = None


class UpdateTaskDTO(BaseModel):
    """Input for editing a task. Fields left as None are not changed."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    tags: Optional[list[int]] = None
    due_date: Optional[date] = None
    clear_due_date: bool = False


# =============================================================================
# Tag DTOs
# =============================================================================


class TagDTO(BaseModel):
    """Read model of a tag."""

    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_aggregate(cls, tag: TagAggregate) -> "TagDTO":
        return cls(
            id=tag.id.value if tag.id is not None else 0,
            name=tag.name.value,
            description=tag.description.as_optional(),
            created_at=tag.created_at,
            updated_at=tag.updated_at,
        )


class CreateTagDTO(BaseModel):
    name: str
    description: Optional[str] = None


class UpdateTagDTO(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


# =============================================================================
# Statistics DTO
# =============================================================================


class StatsDTO(BaseModel):
    """Statistics keyed by display strings.

    Keys use the lowercase filter spellings ("in_progress", "due_today"),
    the matrix uses "priority:status" keys, and tag counts are keyed by tag
    name. Zero counts are omitted.
    """

    status_stats: dict[str, int] = Field(default_factory=dict)
    priority_stats: dict[str, int] = Field(default_factory=dict)
    due_date_stats: dict[str, int] = Field(default_factory=dict)
    tag_stats: dict[str, int] = Field(default_factory=dict)
    priority_status_matrix: dict[str, int] = Field(default_factory=dict)
    total_count: int = 0
    completion_rate: float = 0.0

    @classmethod
    def from_stats(
        cls,
        stats: TaskStats,
        tag_names: Mapping[TagId, str] | None = None,
    ) -> "StatsDTO":
        """Render a snapshot, resolving tag identifiers through ``tag_names``."""
        tag_names = tag_names or {}

        tag_stats: dict[str, int] = {}
        for tag_id, count in stats.tag_counts.items():
            label = NO_TAG_LABEL if tag_id is NO_TAG else tag_label(tag_id, tag_names)
            tag_stats[label] = tag_stats.get(label, 0) + count

        return cls(
            status_stats={
                s.filter_value: stats.status_count(s) for s in Status if stats.status_count(s)
            },
            priority_stats={
                p.filter_value: stats.priority_count(p)
                for p in Priority
                if stats.priority_count(p)
            },
            due_date_stats={
                d.filter_value: stats.due_date_count(d)
                for d in DueDateStatus
                if stats.due_date_count(d)
            },
            tag_stats=tag_stats,
            priority_status_matrix={
                f"{p.filter_value}:{s.filter_value}": stats.priority_status_count(p, s)
                for p in Priority
                for s in Status
                if stats.priority_status_count(p, s)
            },
            total_count=stats.total,
            completion_rate=stats.completion_rate,
        )
