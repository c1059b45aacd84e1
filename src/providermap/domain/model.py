"""Value types shared by the aggregation, filtering and rendering stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

ServiceName: TypeAlias = str
ProviderName: TypeAlias = str
PackageIdentity: TypeAlias = str

# service -> provider -> identity of the package credited with the binding
AggregatedMapping: TypeAlias = dict[ServiceName, dict[ProviderName, PackageIdentity]]

RawDeclarations: TypeAlias = "Mapping[str, object]"


class DeclarationFormatError(ValueError):
    """Raised when a package declares providers in an unsupported shape."""


def normalize_providers(service: str, providers: object) -> tuple[ProviderName, ...]:
    """Return the providers declared for ``service`` as an ordered tuple.

    A bare string is a single provider and ``None`` means no providers. Lists
    and tuples keep their order; their items must be strings.
    """

    if providers is None:
        return ()
    if isinstance(providers, str):
        return (providers,)
    if isinstance(providers, (list, tuple)):
        items: Iterable[object] = providers
        normalized: list[str] = []
        for item in items:
            if not isinstance(item, str):
                raise DeclarationFormatError(
                    f"Provider for {service!r} must be a string, got {type(item).__name__}"
                )
            normalized.append(item)
        return tuple(normalized)
    raise DeclarationFormatError(
        f"Providers for {service!r} must be a string or a list, got {type(providers).__name__}"
    )


def normalize_declarations(raw: RawDeclarations | None) -> dict[ServiceName, tuple[ProviderName, ...]]:
    if raw is None:
        return {}
    declarations: dict[ServiceName, tuple[ProviderName, ...]] = {}
    for service, providers in raw.items():
        if not isinstance(service, str):
            raise DeclarationFormatError(
                f"Service names must be strings, got {type(service).__name__}"
            )
        declarations[service] = normalize_providers(service, providers)
    return declarations


@dataclass(frozen=True, slots=True, kw_only=True)
class PackageRecord:
    """One package of the dependency graph and the bindings it declares."""

    name: str
    version: str | None = None
    declarations: Mapping[ServiceName, tuple[ProviderName, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        frozen = MappingProxyType(normalize_declarations(self.declarations))
        object.__setattr__(self, "declarations", frozen)

    @property
    def identity(self) -> PackageIdentity:
        """Human-readable ``name version`` string used for attribution."""

        if self.version:
            return f"{self.name} {self.version}"
        return self.name


class Severity(StrEnum):
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str


@dataclass(slots=True)
class FilterResult:
    """Bindings that survived filtering plus the reasons for every omission."""

    mapping: AggregatedMapping
    diagnostics: list[Diagnostic] = field(default_factory=list[Diagnostic])


__all__ = [
    "AggregatedMapping",
    "DeclarationFormatError",
    "Diagnostic",
    "FilterResult",
    "PackageIdentity",
    "PackageRecord",
    "ProviderName",
    "RawDeclarations",
    "ServiceName",
    "Severity",
    "normalize_declarations",
    "normalize_providers",
]
