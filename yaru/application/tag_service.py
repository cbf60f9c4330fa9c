"""Tag application service.

Tag use cases over the tag repository contract. Tag names are unique
across the store.
"""

import logging

from yaru.domain.shared.errors import AggregateNotFound, DomainError, DuplicateTagName
from yaru.domain.shared.result import Err, Ok, Result, flat_map, map_result
from yaru.domain.tag.aggregate import TagAggregate
from yaru.domain.tag.repository import TagRepository
from yaru.domain.tag.value_objects import TagDescription, TagId, TagName

from .dto import CreateTagDTO, TagDTO, UpdateTagDTO

logger = logging.getLogger(__name__)


class TagService:
    """Tag use cases."""

    def __init__(self, tag_repository: TagRepository) -> None:
        self._tags = tag_repository

    def add_tag(self, dto: CreateTagDTO) -> Result[TagDTO, DomainError]:
        """Create a tag. Returns Err(DuplicateTagName) if the name is taken."""
        name = TagName.create(dto.name)
        if isinstance(name, Err):
            return name
        description = TagDescription.create(dto.description or "")
        if isinstance(description, Err):
            return description

        taken = self._ensure_name_free(name.value, None)
        if isinstance(taken, Err):
            return taken

        saved = self._tags.save(TagAggregate.new(name.value, description.value))
        if isinstance(saved, Err):
            return saved

        logger.info(f"Created tag {saved.value.id}: {name.value.value!r}")
        return Ok(TagDTO.from_aggregate(saved.value))

    def edit_tag(self, tag_id: int, dto: UpdateTagDTO) -> Result[TagDTO, DomainError]:
        """Rename a tag and/or replace its description."""
        found = self._get(tag_id)
        if isinstance(found, Err):
            return found
        tag = found.value

        name = None
        if dto.name is not None:
            parsed_name = TagName.create(dto.name)
            if isinstance(parsed_name, Err):
                return parsed_name
            name = parsed_name.value
            taken = self._ensure_name_free(name, tag.id)
            if isinstance(taken, Err):
                return taken

        description = None
        if dto.description is not None:
            parsed_description = TagDescription.create(dto.description)
            if isinstance(parsed_description, Err):
                return parsed_description
            description = parsed_description.value

        if name is not None:
            tag.change_name(name)
        if description is not None:
            tag.change_description(description)

        updated = self._tags.update(tag)
        if isinstance(updated, Err):
            return updated

        for event in tag.pull_events():
            logger.debug(f"Tag {tag.id}: {type(event).__name__}")
        logger.info(f"Updated tag {tag.id}")
        return Ok(TagDTO.from_aggregate(updated.value))

    def show_tag(self, tag_id: int) -> Result[TagDTO, DomainError]:
        return map_result(self._get(tag_id), TagDTO.from_aggregate)

    def list_tags(self) -> Result[list[TagDTO], DomainError]:
        """All tags, ordered by identifier."""
        return map_result(
            self._tags.find_all(),
            lambda tags: [
                TagDTO.from_aggregate(tag)
                for tag in sorted(tags, key=lambda tag: tag.id.value if tag.id else 0)
            ],
        )

    def delete_tag(self, tag_id: int) -> Result[None, DomainError]:
        """Delete a tag, or return Err(AggregateNotFound) if it does not exist.

        Whether tasks still refer to the tag is left to the storage layer.
        """
        deleted = flat_map(TagId.create(tag_id), self._tags.delete)
        if isinstance(deleted, Err):
            return deleted
        if not deleted.value:
            return Err(AggregateNotFound(kind="tag", aggregate_id=tag_id))

        logger.info(f"Deleted tag {tag_id}")
        return Ok(None)

    def _get(self, tag_id: int) -> Result[TagAggregate, DomainError]:
        found = flat_map(TagId.create(tag_id), self._tags.find_by_id)
        if isinstance(found, Ok) and found.value is None:
            return Err(AggregateNotFound(kind="tag", aggregate_id=tag_id))
        return found

    def _ensure_name_free(self, name: TagName, owner: TagId | None) -> Result[None, DomainError]:
        existing = self._tags.find_by_name(name.value)
        if isinstance(existing, Err):
            return existing
        if existing.value is not None and existing.value.id != owner:
            return Err(DuplicateTagName(name=name.value))
        return Ok(None)
