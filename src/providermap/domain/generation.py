"""Run aggregation, filtering and rendering as one generation pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from providermap.domain.aggregation import aggregate
from providermap.domain.filtering import filter_available
from providermap.domain.identifiers import DEFAULT_SEPARATOR
from providermap.domain.rendering import render_registry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from providermap.domain.model import AggregatedMapping, Diagnostic, PackageRecord
    from providermap.domain.ports.diagnostics import DiagnosticSink
    from providermap.domain.ports.environment import Environment


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a generation pass."""

    artifact: str
    mapping: AggregatedMapping
    diagnostics: list[Diagnostic]


def generate_registry(
    root: PackageRecord,
    dependencies: Iterable[PackageRecord],
    environment: Environment,
    *,
    sink: DiagnosticSink | None = None,
    separator: str = DEFAULT_SEPARATOR,
) -> GenerationResult:
    """Build the registry module text for ``root`` and its ``dependencies``.

    Diagnostics are forwarded to ``sink`` in the order they were produced and
    are also returned on the result.
    """

    aggregated = aggregate(root, dependencies)
    filtered = filter_available(aggregated, environment, separator=separator)
    if sink is not None:
        for diagnostic in filtered.diagnostics:
            sink.report(diagnostic)
    return GenerationResult(
        artifact=render_registry(filtered.mapping, separator=separator),
        mapping=filtered.mapping,
        diagnostics=filtered.diagnostics,
    )


__all__ = ["GenerationResult", "generate_registry"]
