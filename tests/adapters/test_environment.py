from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest

from providermap.adapters.environment import ImportlibEnvironment, resolution_context

if TYPE_CHECKING:
    from pathlib import Path


def test_resolution_context_registers_and_releases_paths(sample_src: Path) -> None:
    root = str(sample_src.resolve())

    with resolution_context([sample_src]):
        assert sys.path[0] == root
        environment = ImportlibEnvironment()
        assert environment.identifier_exists("acme_spi\\contracts\\Logger")
        assert "acme_spi.contracts" in sys.modules

    assert root not in sys.path
    assert "acme_spi" not in sys.modules
    assert "acme_spi.contracts" not in sys.modules


def test_resolution_context_releases_paths_on_error(sample_src: Path) -> None:
    root = str(sample_src.resolve())

    with pytest.raises(RuntimeError, match="boom"), resolution_context([sample_src]):
        raise RuntimeError("boom")

    assert root not in sys.path


def test_identifier_exists(sample_src: Path) -> None:
    with resolution_context([sample_src]):
        environment = ImportlibEnvironment()

        assert environment.identifier_exists("\\acme_spi\\providers\\FileLogger")
        assert environment.identifier_exists("acme_spi\\providers\\Outer\\Inner")
        assert environment.identifier_exists("acme_spi\\providers")
        assert not environment.identifier_exists("acme_spi\\providers\\Missing")
        assert not environment.identifier_exists("acme_spi_absent\\Thing")


def test_service_available_checks_required_distributions(sample_src: Path) -> None:
    with resolution_context([sample_src]):
        environment = ImportlibEnvironment()

        assert environment.service_available("acme_spi\\contracts\\Logger")
        assert not environment.service_available("acme_spi\\contracts\\Queue")
        assert not environment.service_available("acme_spi\\contracts\\Absent")


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("acme_spi\\providers\\FileLogger", True),
        ("acme_spi\\providers\\NullLogger", False),
        ("acme_spi\\providers\\ProbingCache", True),
        ("acme_spi\\providers\\ExtensionCache", False),
        ("acme_spi\\providers\\PydanticCache", True),
        ("acme_spi\\providers\\SingleRequirementCache", True),
        ("acme_spi\\providers\\MissingSingleRequirementCache", False),
        ("acme_spi\\providers\\Absent", False),
    ],
)
def test_provider_available(sample_src: Path, identifier: str, expected: bool) -> None:
    with resolution_context([sample_src]):
        assert ImportlibEnvironment().provider_available(identifier) is expected


def test_dotted_identifiers(sample_src: Path) -> None:
    with resolution_context([sample_src]):
        environment = ImportlibEnvironment(separator=".")

        assert environment.identifier_exists("acme_spi.providers.FileLogger")
        assert not environment.provider_available("acme_spi.providers.NullLogger")


def test_stdlib_identifiers_resolve_without_context() -> None:
    environment = ImportlibEnvironment()

    assert environment.identifier_exists("collections\\OrderedDict")
    assert environment.service_available("collections\\abc\\Mapping")
