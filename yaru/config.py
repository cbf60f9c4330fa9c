"""Configuration storage for yaru.

User preferences live in ``~/.config/yaru/config.json``; set ``YARU_CONFIG``
to point at another file. Missing or unreadable files fall back to defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from yaru.domain.task.specification import SearchField
from yaru.domain.task.value_objects import DUE_SOON_DAYS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "YARU_CONFIG"

SortKey = Literal["priority", "due_date", "created_at"]
SortOrder = Literal["asc", "desc"]


class AppConfig(BaseModel):
    """Application preferences."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    due_soon_days: int = Field(
        default=DUE_SOON_DAYS,
        ge=0,
        description="Days ahead a due date still counts as due this week",
    )
    search_field: SearchField = SearchField.ALL
    default_sort: SortKey = "created_at"
    default_order: SortOrder = "asc"


def get_config_dir() -> Path:
    """Get the yaru config directory."""
    return Path.home() / ".config" / "yaru"


def get_config_path() -> Path:
    """Path of the config file, honouring ``YARU_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / "config.json"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration, falling back to defaults."""
    config_file = path or get_config_path()
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return AppConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Ignoring invalid config file {config_file}: {e}")
    return AppConfig()


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Save configuration as indented JSON."""
    config_file = path or get_config_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )


def configure_logging(config: AppConfig) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
