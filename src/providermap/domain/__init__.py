"""Service provider registry generation."""

from __future__ import annotations

from .aggregation import aggregate
from .filtering import AvailabilityFilter, filter_available
from .generation import GenerationResult, generate_registry
from .identifiers import (
    DEFAULT_SEPARATOR,
    canonical_identifier,
    is_valid_identifier,
    is_valid_separator,
)
from .model import (
    AggregatedMapping,
    DeclarationFormatError,
    Diagnostic,
    FilterResult,
    PackageRecord,
    Severity,
    normalize_declarations,
)
from .rendering import REGISTRY_VERSION, render_registry

__all__ = [
    "DEFAULT_SEPARATOR",
    "REGISTRY_VERSION",
    "AggregatedMapping",
    "AvailabilityFilter",
    "DeclarationFormatError",
    "Diagnostic",
    "FilterResult",
    "GenerationResult",
    "PackageRecord",
    "Severity",
    "aggregate",
    "canonical_identifier",
    "filter_available",
    "generate_registry",
    "is_valid_identifier",
    "is_valid_separator",
    "normalize_declarations",
    "render_registry",
]
