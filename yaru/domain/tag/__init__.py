"""Tag domain package.

Contains the tag aggregate, its value objects and events, and the
repository contract.
"""

from .aggregate import TagAggregate
from .events import TagRenamed
from .repository import TagRepository
from .value_objects import TAG_NAME_MAX_LENGTH, TagDescription, TagId, TagName

__all__ = [
    "TagAggregate",
    "TagId",
    "TagName",
    "TagDescription",
    "TAG_NAME_MAX_LENGTH",
    "TagRenamed",
    "TagRepository",
]
