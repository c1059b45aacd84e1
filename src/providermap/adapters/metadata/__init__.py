"""Public interface for the package metadata adapter."""

from __future__ import annotations

from .loader import ManifestError, PackageGraph, load_manifest, load_pyproject_root
from .schema import ManifestPayload, PackagePayload, PyprojectPayload

__all__ = [
    "ManifestError",
    "ManifestPayload",
    "PackageGraph",
    "PackagePayload",
    "PyprojectPayload",
    "load_manifest",
    "load_pyproject_root",
]
