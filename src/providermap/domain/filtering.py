"""Prune malformed or unavailable bindings from an aggregated mapping.

Every rejection becomes a :class:`Diagnostic` plus an omission; nothing here
aborts the run. The order of checks per service is:

1. the service name must be a valid identifier (warning otherwise);
2. the service must be available in the environment (info otherwise);
3. each provider must be a valid identifier (warning), must exist (info) and
   must report itself available (info).

Services rejected in steps 1-2 are dropped with all their providers and no
provider-level diagnostics are produced for them. Services that pass keep
their entry even when every provider is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from providermap.domain.identifiers import DEFAULT_SEPARATOR, is_valid_identifier
from providermap.domain.model import Diagnostic, FilterResult, Severity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from providermap.domain.model import AggregatedMapping, PackageIdentity, ProviderName
    from providermap.domain.ports.environment import Environment

log = getLogger(__name__)


def _packages_of(providers: Mapping[ProviderName, PackageIdentity]) -> str:
    return ", ".join(dict.fromkeys(providers.values()))


@dataclass(slots=True)
class AvailabilityFilter:
    """Apply identifier syntax and environment checks to an aggregated mapping."""

    environment: Environment
    separator: str = DEFAULT_SEPARATOR
    _diagnostics: list[Diagnostic] = field(default_factory=list[Diagnostic], init=False)

    def run(self, mapping: AggregatedMapping) -> FilterResult:
        self._diagnostics = []
        clean: AggregatedMapping = {}
        for service, providers in mapping.items():
            if not self._accept_service(service, providers):
                continue
            clean[service] = {
                provider: package
                for provider, package in providers.items()
                if self._accept_provider(service, provider, package)
            }
        log.debug(
            "Filtered %s of %s services, %s diagnostics",
            len(clean),
            len(mapping),
            len(self._diagnostics),
        )
        return FilterResult(mapping=clean, diagnostics=list(self._diagnostics))

    def _accept_service(
        self, service: str, providers: Mapping[ProviderName, PackageIdentity]
    ) -> bool:
        if not is_valid_identifier(service, separator=self.separator):
            self._emit(
                Severity.WARNING,
                f'Invalid spi configuration, expected identifier, got "{service}" '
                f"({_packages_of(providers)})",
            )
            return False
        if not self.environment.service_available(service):
            self._emit(
                Severity.INFO,
                f'Skipping spi service "{service}", service not available '
                f"({_packages_of(providers)})",
            )
            return False
        return True

    def _accept_provider(self, service: str, provider: str, package: str) -> bool:
        if not is_valid_identifier(provider, separator=self.separator):
            self._emit(
                Severity.WARNING,
                f'Invalid spi configuration, expected identifier, got "{provider}" '
                f'for "{service}" ({package})',
            )
            return False
        if not self.environment.identifier_exists(provider):
            self._emit(
                Severity.INFO,
                f'Skipping spi configuration, provider "{provider}" for "{service}" '
                f"does not exist ({package})",
            )
            return False
        if not self.environment.provider_available(provider):
            self._emit(
                Severity.INFO,
                f'Skipping spi provider "{provider}" for "{service}", provider not available '
                f"({package})",
            )
            return False
        return True

    def _emit(self, severity: Severity, message: str) -> None:
        self._diagnostics.append(Diagnostic(severity, message))


def filter_available(
    mapping: AggregatedMapping,
    environment: Environment,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> FilterResult:
    """Return the bindings of ``mapping`` usable in ``environment``."""

    return AvailabilityFilter(environment, separator).run(mapping)


__all__ = ["AvailabilityFilter", "filter_available"]
