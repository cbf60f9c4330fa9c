"""Aggregate root base class.

Holds the pending-event list shared by every aggregate. The list is a local
change log: it is not part of equality and is never carried over to copies.
"""

from collections.abc import Sequence

from .events import DomainEvent


class AggregateRoot:
    """Base class providing pending-event bookkeeping."""

    def __init__(self) -> None:
        self._pending_events: list[DomainEvent] = []

    @property
    def pending_events(self) -> Sequence[DomainEvent]:
        """Events recorded since the last drain, oldest first."""
        return tuple(self._pending_events)

    def pull_events(self) -> list[DomainEvent]:
        """Return and clear the pending events.

        Call this only after the aggregate has been persisted.
        """
        events = self._pending_events
        self._pending_events = []
        return events

    def _record(self, event: DomainEvent) -> None:
        self._pending_events.append(event)
