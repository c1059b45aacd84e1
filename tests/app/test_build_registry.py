from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

from providermap.adapters.diagnostics import CollectingDiagnosticSink
from providermap.adapters.filesystem import ModuleMap
from providermap.app import build_registry, build_registry_from_files, remove_registry
from providermap.config import GenerationConfig
from providermap.domain.model import PackageRecord, Severity
from providermap.domain.ports import PredicateEnvironment


def _providers(path: Path, service: str) -> list[str]:
    namespace: dict[str, object] = {}
    exec(compile(path.read_text(encoding="utf-8"), str(path), "exec"), namespace)  # noqa: S102
    lookup = namespace["providers"]
    assert callable(lookup)
    return lookup(service)


@pytest.fixture
def config(tmp_path: Path) -> GenerationConfig:
    return GenerationConfig(output_dir=tmp_path / "build")


def test_build_registry_publishes_and_registers(
    config: GenerationConfig,
    root_package: PackageRecord,
    vendor_package: PackageRecord,
    open_environment: PredicateEnvironment,
) -> None:
    module_map = ModuleMap()

    result = build_registry(
        root_package,
        [vendor_package],
        config=config,
        environment=open_environment,
        registrar=module_map,
        sink=CollectingDiagnosticSink(),
    )

    assert result.written
    assert result.path == config.artifact_path()
    assert (result.services, result.providers) == (2, 3)
    assert module_map.paths == [result.path]
    assert _providers(result.path, "App\\Logger") == ["App\\FileLogger", "App\\NullLogger"]


def test_second_run_with_same_inputs_does_not_write(
    config: GenerationConfig,
    root_package: PackageRecord,
    vendor_package: PackageRecord,
    open_environment: PredicateEnvironment,
) -> None:
    first = build_registry(root_package, [vendor_package], config=config, environment=open_environment)
    mtime = first.path.stat().st_mtime_ns
    second = build_registry(root_package, [vendor_package], config=config, environment=open_environment)

    assert first.written
    assert not second.written
    assert second.path.stat().st_mtime_ns == mtime


def test_generation_failure_leaves_previous_artifact(
    config: GenerationConfig, root_package: PackageRecord
) -> None:
    artifact = config.artifact_path()
    artifact.parent.mkdir(parents=True)
    artifact.write_text("previous\n", encoding="utf-8")

    def broken(_identifier: str) -> bool:
        raise RuntimeError("environment misconfigured")

    with pytest.raises(RuntimeError, match="misconfigured"):
        build_registry(
            root_package, [], config=config, environment=PredicateEnvironment(service_available=broken)
        )

    assert artifact.read_text(encoding="utf-8") == "previous\n"


def test_build_from_files_resolves_against_source_paths(
    tmp_path: Path, config: GenerationConfig, sample_src: Path
) -> None:
    manifest = tmp_path / "installed.json"
    manifest.write_text(
        """
        {"root": {"name": "acme/app", "version": "1.0.0", "extra": {"spi": {
            "acme_spi\\\\contracts\\\\Logger": [
                "acme_spi\\\\providers\\\\FileLogger",
                "acme_spi\\\\providers\\\\NullLogger"
            ]
        }}},
         "packages": [{"name": "vendor/cache", "version": "0.1", "extra": {"spi": {
            "acme_spi\\\\contracts\\\\Cache": [
                "acme_spi\\\\providers\\\\ExtensionCache",
                "acme_spi\\\\providers\\\\Missing",
                "acme_spi\\\\providers\\\\ProbingCache"
            ],
            "acme_spi\\\\contracts\\\\Queue": "acme_spi\\\\providers\\\\FileLogger"
         }}}]}
        """,
        encoding="utf-8",
    )
    module_map = tmp_path / "module_map.json"

    result = build_registry_from_files(
        manifest=manifest, config=config, source_paths=[sample_src], module_map=module_map
    )

    assert str(sample_src.resolve()) not in sys.path
    assert _providers(result.path, "acme_spi\\contracts\\Logger") == [
        "acme_spi\\providers\\FileLogger"
    ]
    assert _providers(result.path, "acme_spi\\contracts\\Cache") == [
        "acme_spi\\providers\\ProbingCache"
    ]
    assert _providers(result.path, "acme_spi\\contracts\\Queue") == []
    assert [diagnostic.severity for diagnostic in result.diagnostics] == [
        Severity.INFO,
        Severity.INFO,
        Severity.INFO,
        Severity.INFO,
    ]
    assert ModuleMap.load(module_map).paths == [result.path]


def test_pyproject_root_overrides_manifest_root(
    tmp_path: Path, config: GenerationConfig, data_dir: Path
) -> None:
    manifest = tmp_path / "installed.json"
    shutil.copy(data_dir / "installed.json", manifest)

    result = build_registry_from_files(
        manifest=manifest,
        root_pyproject=data_dir / "pyproject_root.toml",
        config=config,
        environment=PredicateEnvironment(),
    )

    source = result.path.read_text(encoding="utf-8")
    assert "# acme-app 1.0.0" in source
    assert "# vendor/tools 2.3.1" in source


def test_remove_registry_deletes_artifact_and_map_entry(
    tmp_path: Path, config: GenerationConfig, root_package: PackageRecord
) -> None:
    module_map = tmp_path / "module_map.json"
    result = build_registry(
        root_package,
        [],
        config=config,
        environment=PredicateEnvironment(),
        registrar=ModuleMap.load(module_map),
    )

    assert remove_registry(config=config, module_map=module_map)
    assert not result.path.exists()
    assert ModuleMap.load(module_map).paths == []
    assert not remove_registry(config=config)


def test_package_name_with_lone_surrogate_still_publishes(
    config: GenerationConfig,
    root_package: PackageRecord,
    open_environment: PredicateEnvironment,
) -> None:
    broken = PackageRecord(
        name="vendor/bro\udcffken",
        version="1.0.0",
        declarations={"App\\Cache": ["App\\MemCache", "App\\Bad\ud800"]},
    )
    sink = CollectingDiagnosticSink()

    result = build_registry(
        root_package, [broken], config=config, environment=open_environment, sink=sink
    )

    assert result.written
    assert "vendor/bro\\udcffken 1.0.0" in result.path.read_text(encoding="utf-8")
    assert _providers(result.path, "App\\Cache") == ["App\\MemCache"]
    assert [diagnostic.severity for diagnostic in sink.diagnostics] == [Severity.WARNING]
