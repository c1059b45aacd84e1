"""Registry generation settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from providermap.domain.identifiers import DEFAULT_SEPARATOR, is_valid_separator

from .env import get_env_var, require_env_vars
from .errors import ConfigurationError

DEFAULT_OUTPUT_DIR: Final[str] = "build/providermap"
DEFAULT_ARTIFACT_FILENAME: Final[str] = "generated_service_provider_data.py"
DEFAULT_METADATA_KEY: Final[str] = "spi"


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    output_dir: Path
    artifact_filename: str = DEFAULT_ARTIFACT_FILENAME
    metadata_key: str = DEFAULT_METADATA_KEY
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        if not is_valid_separator(self.separator):
            raise ConfigurationError(f"Invalid namespace separator: {self.separator!r}")
        if not self.artifact_filename.endswith(".py") or "/" in self.artifact_filename:
            raise ConfigurationError(
                f"Artifact filename must be a plain .py file name: {self.artifact_filename!r}"
            )
        if not self.metadata_key.strip():
            raise ConfigurationError("Metadata key must not be blank")

    def resolve_output_dir(self) -> Path:
        return self.output_dir.expanduser().resolve()

    def artifact_path(self) -> Path:
        return self.resolve_output_dir() / self.artifact_filename

    def with_output_dir(self, output_dir: Path) -> GenerationConfig:
        return replace(self, output_dir=output_dir)


def get_generation_config() -> GenerationConfig:
    return GenerationConfig(
        output_dir=Path(get_env_var("PROVIDERMAP_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        artifact_filename=get_env_var("PROVIDERMAP_ARTIFACT_FILENAME", DEFAULT_ARTIFACT_FILENAME),
        metadata_key=get_env_var("PROVIDERMAP_METADATA_KEY", DEFAULT_METADATA_KEY),
        separator=get_env_var("PROVIDERMAP_SEPARATOR", DEFAULT_SEPARATOR),
    )


def get_manifest_path() -> Path:
    """Return the package manifest path configured for non-interactive builds."""

    values = require_env_vars(("PROVIDERMAP_MANIFEST",))
    return Path(values["PROVIDERMAP_MANIFEST"]).expanduser()
