"""Domain port definitions for adapters."""

from __future__ import annotations

from .diagnostics import DiagnosticSink
from .environment import Environment, IdentifierPredicate, PredicateEnvironment
from .publishing import ArtifactStore, ModuleRegistrar, PublishResult

__all__ = [
    "ArtifactStore",
    "DiagnosticSink",
    "Environment",
    "IdentifierPredicate",
    "ModuleRegistrar",
    "PredicateEnvironment",
    "PublishResult",
]
