from __future__ import annotations

from pathlib import Path

import pytest

from providermap.domain.model import PackageRecord
from providermap.domain.ports import PredicateEnvironment

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PROVIDERMAP_OUTPUT_DIR",
        "PROVIDERMAP_ARTIFACT_FILENAME",
        "PROVIDERMAP_METADATA_KEY",
        "PROVIDERMAP_SEPARATOR",
        "PROVIDERMAP_MANIFEST",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def sample_src() -> Path:
    return DATA_DIR / "sample_src"


@pytest.fixture
def root_package() -> PackageRecord:
    return PackageRecord(
        name="acme/app",
        version="1.0.0",
        declarations={"App\\Logger": ["App\\FileLogger"]},
    )


@pytest.fixture
def vendor_package() -> PackageRecord:
    return PackageRecord(
        name="vendor/tools",
        version="2.3.1",
        declarations={"App\\Logger": ["App\\NullLogger"], "App\\Cache": "App\\MemCache"},
    )


@pytest.fixture
def open_environment() -> PredicateEnvironment:
    return PredicateEnvironment()
