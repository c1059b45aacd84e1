"""Application configuration helpers."""

from __future__ import annotations

from .env import get_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .generation import (
    DEFAULT_ARTIFACT_FILENAME,
    DEFAULT_METADATA_KEY,
    DEFAULT_OUTPUT_DIR,
    GenerationConfig,
    get_generation_config,
    get_manifest_path,
)
from .logging import configure_logging

__all__ = [
    "DEFAULT_ARTIFACT_FILENAME",
    "DEFAULT_METADATA_KEY",
    "DEFAULT_OUTPUT_DIR",
    "ConfigurationError",
    "GenerationConfig",
    "MissingConfigurationError",
    "configure_logging",
    "get_env_var",
    "get_generation_config",
    "get_manifest_path",
    "require_env_vars",
]
