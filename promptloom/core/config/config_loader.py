"""Load promptloom settings from config/promptloom.yaml.

Values come from, in increasing precedence:
1. Defaults on ``PromptloomSettings``
2. The YAML file
3. Environment variables (``.env`` is honoured via python-dotenv)
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from ..exceptions import ConfigError

load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "promptloom.yaml"

# Env var -> settings field
_ENV_OVERRIDES = {
    "PROMPTLOOM_LOG_LEVEL": "log_level",
    "PROMPTLOOM_KNOWLEDGE_INDEX": "knowledge_index",
    "PROMPTLOOM_PROJECT_ROOT": "project_root",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PromptloomSettings(BaseModel):
    """Runtime settings for the CLI and knowledge index loading."""

    log_level: str = "INFO"
    knowledge_index: Optional[str] = None
    project_root: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def resolve_knowledge_index(self) -> Optional[Path]:
        """Absolute path of the knowledge index, or None when unset.

        A relative ``knowledge_index`` is resolved against ``project_root``
        when one is configured, otherwise against the working directory.
        """
        if not self.knowledge_index:
            return None
        index = Path(self.knowledge_index).expanduser()
        if not index.is_absolute() and self.project_root:
            index = Path(self.project_root).expanduser() / index
        return index.resolve()


def get_config_path() -> Path:
    """Directory holding promptloom.yaml.

    ``PROMPTLOOM_CONFIG_DIR`` overrides the default ``<repo root>/config``.
    """
    override = os.environ.get("PROMPTLOOM_CONFIG_DIR", "").strip()
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent.parent / "config"


def load_settings(path: Optional[Union[str, Path]] = None) -> PromptloomSettings:
    """Read settings from ``path`` (default: promptloom.yaml in the config dir).

    Raises:
        ConfigError: the file is not valid YAML or fails validation
    """
    config_file = Path(path) if path else get_config_path() / CONFIG_FILE_NAME
    raw: Dict[str, Any] = {}

    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {config_file}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_file} must contain a mapping at the top level")
    else:
        logger.warning("%s not found at %s, using defaults", CONFIG_FILE_NAME, config_file)

    for env_var, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var, "").strip()
        if value:
            raw[field_name] = value

    try:
        settings = PromptloomSettings(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_file}: {e}") from e

    logger.debug("Loaded settings: %s", settings.model_dump())
    return settings


@lru_cache(maxsize=1)
def get_settings() -> PromptloomSettings:
    """Process-wide settings, loaded once from the default location."""
    return load_settings()
