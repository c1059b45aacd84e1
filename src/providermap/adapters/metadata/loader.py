"""Read package records from manifest files."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from providermap.domain.model import DeclarationFormatError

from .schema import ManifestPayload, PyprojectPayload

if TYPE_CHECKING:
    from pathlib import Path

    from providermap.domain.model import PackageRecord

log = getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest file cannot be read as package metadata."""


@dataclass(slots=True)
class PackageGraph:
    """Root package (when the manifest names one) and its ordered dependencies."""

    root: PackageRecord | None
    dependencies: list[PackageRecord] = field(default_factory=list["PackageRecord"])


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path} is not valid UTF-8: {exc}") from exc


def load_manifest(path: Path, *, metadata_key: str) -> PackageGraph:
    """Load the package listing at ``path``, keeping its package order."""

    try:
        payload = ManifestPayload.model_validate(json.loads(_read_text(path)))
        root = payload.root.to_record(metadata_key) if payload.root else None
        dependencies = [package.to_record(metadata_key) for package in payload.packages]
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest {path} is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ManifestError(f"Manifest {path} has an unexpected shape: {exc}") from exc
    except (DeclarationFormatError, TypeError) as exc:
        raise ManifestError(f"Manifest {path}: {exc}") from exc

    log.info("Loaded %s packages from %s", len(dependencies), path)
    return PackageGraph(root=root, dependencies=dependencies)


def load_pyproject_root(path: Path, *, metadata_key: str) -> PackageRecord:
    """Load the root package from the ``[project]`` and ``[tool.providermap]`` tables."""

    try:
        payload = PyprojectPayload.model_validate(tomllib.loads(_read_text(path)))
        return payload.to_record(metadata_key)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"{path} is not valid TOML: {exc}") from exc
    except ValidationError as exc:
        raise ManifestError(f"{path} has no usable [project] table: {exc}") from exc
    except (DeclarationFormatError, TypeError) as exc:
        raise ManifestError(f"{path}: {exc}") from exc


__all__ = ["ManifestError", "PackageGraph", "load_manifest", "load_pyproject_root"]
