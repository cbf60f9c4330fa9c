"""Tag repository contract."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from yaru.domain.shared.errors import DomainError
from yaru.domain.shared.result import Result

from .aggregate import TagAggregate
from .value_objects import TagId


class TagRepository(ABC):
    """Abstract storage for ``TagAggregate``."""

    @abstractmethod
    def find_by_id(self, tag_id: TagId) -> Result[TagAggregate | None, DomainError]:
        """Return Ok(tag), or Ok(None) if no tag has this identifier."""

    @abstractmethod
    def find_all(self) -> Result[list[TagAggregate], DomainError]:
        """Return every stored tag."""

    @abstractmethod
    def find_by_name(self, name: str) -> Result[TagAggregate | None, DomainError]:
        """Return the tag whose name equals ``name`` exactly, if any."""

    @abstractmethod
    def find_by_ids(self, tag_ids: Sequence[TagId]) -> Result[list[TagAggregate], DomainError]:
        """Return the stored tags among ``tag_ids``.

        Identifiers with no record are silently left out. Callers that need
        every identifier to exist compare the result size with the request.
        """

    @abstractmethod
    def save(self, tag: TagAggregate) -> Result[TagAggregate, DomainError]:
        """Insert or replace a tag, assigning an identifier to a new one.

        Identifiers handed out later never collide with one saved explicitly.
        """

    @abstractmethod
    def update(self, tag: TagAggregate) -> Result[TagAggregate, DomainError]:
        """Replace an existing tag.

        Returns Err(AggregateNotFound) for an unknown identifier and
        Err(StorageError) for a tag that was never saved.
        """

    @abstractmethod
    def delete(self, tag_id: TagId) -> Result[bool, DomainError]:
        """Remove a tag. Returns Ok(True) if a record was removed."""
