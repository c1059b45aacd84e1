"""Diagnostic sinks."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger

from providermap.domain.model import Diagnostic, Severity

log = getLogger(__name__)


@dataclass(slots=True)
class LoggingDiagnosticSink:
    """Forward diagnostics to a logger at the matching level."""

    logger: Logger = field(default_factory=lambda: log)

    def report(self, diagnostic: Diagnostic) -> None:
        if diagnostic.severity is Severity.WARNING:
            self.logger.warning(diagnostic.message)
        else:
            self.logger.info(diagnostic.message)


@dataclass(slots=True)
class CollectingDiagnosticSink:
    diagnostics: list[Diagnostic] = field(default_factory=list[Diagnostic])

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [
            item.message for item in self.diagnostics if severity is None or item.severity is severity
        ]


__all__ = ["CollectingDiagnosticSink", "LoggingDiagnosticSink"]
