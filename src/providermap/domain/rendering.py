"""Render a filtered mapping as a static Python lookup module.

The generated module exposes ``providers(service)``, a total function that
returns the provider names bound to ``service`` (an empty list for unknown
services). Identifiers are embedded in absolute form; the leading separator is
part of the spelling only, so ``providers`` accepts either form and returns
names without it. The output depends only on the mapping and its order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from providermap.domain.identifiers import DEFAULT_SEPARATOR, canonical_identifier

if TYPE_CHECKING:
    from providermap.domain.model import AggregatedMapping

REGISTRY_VERSION: Final[int] = 1

_HEADER: Final[str] = '''\
"""Generated service provider data.

Do not edit: regenerate with ``providermap generate``.
"""

from __future__ import annotations

VERSION = {version}
SEPARATOR = {separator}


def _lookup(service: str) -> tuple[str, ...]:
    match service:
'''

_FOOTER: Final[str] = '''\
        case _:
            return ()


def providers(service: str) -> list[str]:
    """Return the providers registered for ``service`` in priority order."""

    absolute = SEPARATOR + service.removeprefix(SEPARATOR)
    return [provider.removeprefix(SEPARATOR) for provider in _lookup(absolute)]
'''


def _comment(text: str) -> str:
    # single line, and lone surrogates escaped so the module stays encodable
    flat = " ".join(text.split())
    return flat.encode("utf-8", "backslashreplace").decode("utf-8")


def render_registry(mapping: AggregatedMapping, *, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the source of the lookup module for ``mapping``."""

    lines: list[str] = []
    for service, providers in mapping.items():
        lines.append(f"        case {canonical_identifier(service, separator=separator)!r}:")
        if not providers:
            lines.append("            return ()")
            continue
        lines.append("            return (")
        for provider, package in providers.items():
            literal = repr(canonical_identifier(provider, separator=separator))
            lines.append(f"                {literal},  # {_comment(package)}")
        lines.append("            )")

    header = _HEADER.format(version=REGISTRY_VERSION, separator=repr(separator))
    body = "".join(f"{line}\n" for line in lines)
    return header + body + _FOOTER


__all__ = ["REGISTRY_VERSION", "render_registry"]
