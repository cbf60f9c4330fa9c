"""Storage infrastructure for yaru.

Repository implementations of the domain's persistence contracts, using
Result values for explicit error handling.
"""

from yaru.infrastructure.storage.in_memory import InMemoryTagRepository, InMemoryTaskRepository

__all__ = [
    "InMemoryTaskRepository",
    "InMemoryTagRepository",
]
