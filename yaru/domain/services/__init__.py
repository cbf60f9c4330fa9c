"""Domain services: stateless computations spanning many aggregates."""

from .statistics import NO_TAG, TaskStats, calculate_stats

__all__ = ["NO_TAG", "TaskStats", "calculate_stats"]
