"""Port describing what the current environment can load."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

IdentifierPredicate: TypeAlias = Callable[[str], bool]


@runtime_checkable
class Environment(Protocol):
    """Availability predicates consulted while filtering bindings."""

    def service_available(self, identifier: str) -> bool:
        """Whether the service type can be resolved and used here."""
        ...

    def provider_available(self, identifier: str) -> bool:
        """Whether the loadable provider type declares itself usable."""
        ...

    def identifier_exists(self, identifier: str) -> bool:
        """Whether the named type can be loaded at all."""
        ...


def _always(_identifier: str) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class PredicateEnvironment:
    """Environment assembled from three plain predicates."""

    service_available: IdentifierPredicate = _always
    provider_available: IdentifierPredicate = _always
    identifier_exists: IdentifierPredicate = _always


__all__ = ["Environment", "IdentifierPredicate", "PredicateEnvironment"]
