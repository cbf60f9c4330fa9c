"""Infrastructure layer for yaru.

Adapters implementing the domain's repository contracts.
"""

from yaru.infrastructure.storage import InMemoryTagRepository, InMemoryTaskRepository

__all__ = ["InMemoryTaskRepository", "InMemoryTagRepository"]
