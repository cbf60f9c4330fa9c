"""Tag domain events."""

from yaru.domain.shared.events import DomainEvent


class TagRenamed(DomainEvent):
    """Raised when a tag's name changes to a different value."""

    tag_id: int | None
    old_name: str
    new_name: str
