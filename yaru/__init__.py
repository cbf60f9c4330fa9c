"""yaru - personal task and tag management core."""

__version__ = "0.1.0"
