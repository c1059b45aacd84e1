"""Merge per-package service bindings into a single ordered mapping."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from providermap.domain.model import AggregatedMapping, PackageRecord

log = getLogger(__name__)


def aggregate(root: PackageRecord, dependencies: Iterable[PackageRecord]) -> AggregatedMapping:
    """Collect the bindings of ``root`` and then of each dependency, in order.

    The first package to declare a ``(service, provider)`` pair is credited with
    it; later declarations of the same pair are ignored. Providers keep their
    first-seen order within a service, and a service declared without providers
    is still present with an empty mapping.
    """

    mapping: AggregatedMapping = {}
    for package in (root, *dependencies):
        _merge_package(mapping, package)
    log.debug(
        "Aggregated %s services with %s bindings",
        len(mapping),
        sum(len(providers) for providers in mapping.values()),
    )
    return mapping


def _merge_package(mapping: AggregatedMapping, package: PackageRecord) -> None:
    identity = package.identity
    for service, providers in package.declarations.items():
        bindings = mapping.setdefault(service, {})
        for provider in providers:
            bindings.setdefault(provider, identity)


__all__ = ["aggregate"]
