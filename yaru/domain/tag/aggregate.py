"""Tag aggregate root.

A tag has a name and an optional description. Whether a tag is still
referenced by tasks is a storage concern, not something the tag checks.
"""

import copy
from datetime import datetime

from yaru.domain.shared.aggregate import AggregateRoot
from yaru.domain.shared.clock import as_utc, utc_now

from .events import TagRenamed
from .value_objects import TagDescription, TagId, TagName


class TagAggregate(AggregateRoot):
    """A tag that tasks refer to by identifier."""

    def __init__(
        self,
        *,
        id: TagId | None,
        name: TagName,
        description: TagDescription,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        super().__init__()
        self._id = id
        self._name = name
        self._description = description
        self._created_at = as_utc(created_at)
        self._updated_at = as_utc(updated_at)

    @classmethod
    def new(cls, name: TagName, description: TagDescription | None = None) -> "TagAggregate":
        """Create a tag that has not been persisted yet."""
        now = utc_now()
        return cls(
            id=None,
            name=name,
            description=description or TagDescription(),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        id: TagId,
        name: TagName,
        description: TagDescription,
        created_at: datetime,
        updated_at: datetime,
    ) -> "TagAggregate":
        """Rebuild a stored tag. Fields are taken as already valid."""
        return cls(
            id=id,
            name=name,
            description=description,
            created_at=created_at,
            updated_at=updated_at,
        )

    def with_id(self, tag_id: TagId) -> "TagAggregate":
        """Return a copy carrying a persistence-assigned identifier."""
        clone = copy.copy(self)
        clone._id = tag_id
        return clone

    def __copy__(self) -> "TagAggregate":
        return TagAggregate.reconstruct(
            id=self._id,
            name=self._name,
            description=self._description,
            created_at=self._created_at,
            updated_at=self._updated_at,
        )

    def change_name(self, new_name: TagName) -> None:
        old_name = self._name
        self._touch()
        self._name = new_name
        if old_name != new_name:
            self._record(
                TagRenamed(
                    tag_id=self._id.value if self._id is not None else None,
                    old_name=old_name.value,
                    new_name=new_name.value,
                )
            )

    def change_description(self, new_description: TagDescription) -> None:
        self._touch()
        self._description = new_description

    @property
    def id(self) -> TagId | None:
        return self._id

    @property
    def is_new(self) -> bool:
        return self._id is None

    @property
    def name(self) -> TagName:
        return self._name

    @property
    def description(self) -> TagDescription:
        return self._description

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = max(self._updated_at, utc_now())

    def _state(self) -> tuple:
        return (self._id, self._name, self._description, self._created_at, self._updated_at)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagAggregate):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TagAggregate(id={self._id!r}, name={self._name.value!r})"
