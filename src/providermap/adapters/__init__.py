"""Adapters connecting registry generation to the interpreter and file system."""

from __future__ import annotations

from .diagnostics import CollectingDiagnosticSink, LoggingDiagnosticSink
from .environment import ImportlibEnvironment, resolution_context
from .filesystem import ArtifactPublisher, ModuleMap, ModuleMapError, write_if_changed

__all__ = [
    "ArtifactPublisher",
    "CollectingDiagnosticSink",
    "ImportlibEnvironment",
    "LoggingDiagnosticSink",
    "ModuleMap",
    "ModuleMapError",
    "resolution_context",
    "write_if_changed",
]
