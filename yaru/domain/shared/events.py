"""Base domain event infrastructure.

Domain events are immutable records of a change that happened to an
aggregate. Aggregates append them to a pending list; the caller drains the
list once the change has been persisted.

Example usage:
    >>> task.complete()
    >>> for event in task.pull_events():
    ...     print(f"{type(event).__name__} at {event.occurred_at}")
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and the UTC timestamp at which it occurred.
    Subclasses add the fields that describe the change.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
