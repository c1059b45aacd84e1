"""Ports for persisting the generated registry module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Where the artifact lives and whether this run rewrote it."""

    path: Path
    written: bool


@runtime_checkable
class ArtifactStore(Protocol):
    def publish(self, artifact: str) -> PublishResult: ...

    def remove(self) -> bool: ...


@runtime_checkable
class ModuleRegistrar(Protocol):
    """Build output that must include the generated module when loading code."""

    def register(self, path: Path) -> None: ...


__all__ = ["ArtifactStore", "ModuleRegistrar", "PublishResult"]
