"""Persist the generated registry module and record it in the build output."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path

from providermap.domain.ports.publishing import PublishResult

log = getLogger(__name__)


class ModuleMapError(ValueError):
    """Raised when a stored module map cannot be read."""


def write_if_changed(path: Path, content: str) -> bool:
    """Write ``content`` to ``path`` unless the file already holds it.

    The new content goes to a temporary sibling first and is moved into place,
    so readers never observe a partially written file. Returns whether a write
    happened.
    """

    try:
        if path.read_text(encoding="utf-8") == content:
            return False
    except FileNotFoundError:
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        Path(temp_name).replace(path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return True


@dataclass(slots=True)
class ArtifactPublisher:
    """Store the registry module under ``output_dir``."""

    output_dir: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.output_dir / self.filename

    def publish(self, artifact: str) -> PublishResult:
        written = write_if_changed(self.path, artifact)
        if written:
            log.info("Wrote service provider registry to %s", self.path)
        else:
            log.info("Service provider registry %s is up to date", self.path)
        return PublishResult(path=self.path, written=written)

    def remove(self) -> bool:
        """Delete the artifact; returns whether there was one."""

        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        log.info("Removed service provider registry %s", self.path)
        return True


@dataclass(slots=True)
class ModuleMap:
    """Ordered set of generated module paths the build output must include.

    When ``location`` is given the map is loaded from and saved to that JSON
    file (``{"modules": [...]}``).
    """

    location: Path | None = None
    paths: list[Path] = field(default_factory=list[Path])

    @classmethod
    def load(cls, location: Path) -> ModuleMap:
        try:
            payload = json.loads(location.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls(location=location)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ModuleMapError(f"Module map {location} is not valid JSON: {exc}") from exc

        entries = payload.get("modules", []) if isinstance(payload, dict) else None
        if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
            raise ModuleMapError(
                f"Module map {location} must be an object with a list of paths under \"modules\""
            )
        return cls(location=location, paths=[Path(entry) for entry in entries])

    def register(self, path: Path) -> None:
        if path in self.paths:
            return
        self.paths.append(path)
        self.save()

    def unregister(self, path: Path) -> None:
        if path not in self.paths:
            return
        self.paths.remove(path)
        self.save()

    def save(self) -> None:
        if self.location is None:
            return
        content = json.dumps({"modules": [str(path) for path in self.paths]}, indent=2) + "\n"
        write_if_changed(self.location, content)


__all__ = ["ArtifactPublisher", "ModuleMap", "ModuleMapError", "write_if_changed"]
