"""Port for reporting filtering diagnostics to the host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from providermap.domain.model import Diagnostic


@runtime_checkable
class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


__all__ = ["DiagnosticSink"]
