"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from providermap.adapters.diagnostics import LoggingDiagnosticSink
from providermap.adapters.environment import ImportlibEnvironment, resolution_context
from providermap.adapters.filesystem import ArtifactPublisher, ModuleMap
from providermap.adapters.metadata import load_manifest, load_pyproject_root
from providermap.config import get_generation_config
from providermap.domain.generation import generate_registry
from providermap.domain.model import PackageRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from providermap.config import GenerationConfig
    from providermap.domain.model import Diagnostic
    from providermap.domain.ports import ArtifactStore, DiagnosticSink, Environment, ModuleRegistrar

log = getLogger(__name__)


@dataclass(slots=True)
class BuildRegistryResult:
    """Outcome of generating and publishing the registry module."""

    path: Path
    written: bool
    services: int
    providers: int
    diagnostics: list[Diagnostic]


def build_registry(
    root: PackageRecord,
    dependencies: Sequence[PackageRecord],
    *,
    config: GenerationConfig | None = None,
    environment: Environment | None = None,
    source_paths: Iterable[Path] = (),
    store: ArtifactStore | None = None,
    registrar: ModuleRegistrar | None = None,
    sink: DiagnosticSink | None = None,
) -> BuildRegistryResult:
    """Generate the registry for ``root`` and ``dependencies`` and publish it.

    Availability checks run inside a resolution context that makes
    ``source_paths`` importable; the context is torn down before the artifact
    is written, including when generation fails.
    """

    effective_config = config or get_generation_config()
    effective_environment = environment or ImportlibEnvironment(effective_config.separator)
    effective_store = store or ArtifactPublisher(
        effective_config.resolve_output_dir(), effective_config.artifact_filename
    )
    log.info(
        "Generating service provider registry: root=%s, dependencies=%s",
        root.identity,
        len(dependencies),
    )

    with resolution_context(source_paths):
        generation = generate_registry(
            root,
            dependencies,
            effective_environment,
            sink=sink or LoggingDiagnosticSink(),
            separator=effective_config.separator,
        )

    published = effective_store.publish(generation.artifact)
    if registrar is not None:
        registrar.register(published.path)

    result = BuildRegistryResult(
        path=published.path,
        written=published.written,
        services=len(generation.mapping),
        providers=sum(len(providers) for providers in generation.mapping.values()),
        diagnostics=generation.diagnostics,
    )
    log.info(
        f"Finished registry generation: services={result.services}, "
        f"providers={result.providers}, diagnostics={len(result.diagnostics)}, "
        f"written={result.written}"
    )
    return result


def build_registry_from_files(
    *,
    manifest: Path | None = None,
    root_pyproject: Path | None = None,
    config: GenerationConfig | None = None,
    environment: Environment | None = None,
    source_paths: Iterable[Path] = (),
    module_map: Path | None = None,
) -> BuildRegistryResult:
    """Load package metadata from disk and run :func:`build_registry`.

    The root package comes from ``root_pyproject`` when given, otherwise from
    the manifest's ``root`` entry; without either an empty root is used.
    """

    effective_config = config or get_generation_config()
    key = effective_config.metadata_key

    root: PackageRecord | None = None
    dependencies: list[PackageRecord] = []
    if manifest is not None:
        graph = load_manifest(manifest, metadata_key=key)
        root, dependencies = graph.root, graph.dependencies
    if root_pyproject is not None:
        root = load_pyproject_root(root_pyproject, metadata_key=key)
    if root is None:
        log.warning("No root package metadata given, using an empty root package")
        root = PackageRecord(name="__root__")

    return build_registry(
        root,
        dependencies,
        config=effective_config,
        environment=environment,
        source_paths=source_paths,
        registrar=ModuleMap.load(module_map) if module_map is not None else None,
    )


def remove_registry(
    *, config: GenerationConfig | None = None, module_map: Path | None = None
) -> bool:
    """Delete the generated module and drop it from the module map."""

    effective_config = config or get_generation_config()
    publisher = ArtifactPublisher(
        effective_config.resolve_output_dir(), effective_config.artifact_filename
    )
    removed = publisher.remove()
    if module_map is not None:
        ModuleMap.load(module_map).unregister(publisher.path)
    return removed


__all__ = [
    "BuildRegistryResult",
    "build_registry",
    "build_registry_from_files",
    "remove_registry",
]
