"""Availability checks backed by the running interpreter's import system."""

from __future__ import annotations

import importlib
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from importlib import metadata
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from providermap.domain.identifiers import DEFAULT_SEPARATOR, identifier_segments

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = getLogger(__name__)

AVAILABILITY_HOOK: Final[str] = "__provider_available__"
REQUIREMENTS_ATTRIBUTE: Final[str] = "__requires_distributions__"

_MISSING: Final = object()


@contextmanager
def resolution_context(paths: Iterable[Path | str]) -> Iterator[None]:
    """Make ``paths`` importable for the duration of the block.

    The paths are prepended to ``sys.path``. On exit, whether or not the block
    raised, they are removed again together with every module first imported
    from them inside the block.
    """

    roots = [str(Path(path).resolve()) for path in paths]
    added = [root for root in roots if root not in sys.path]
    preloaded = set(sys.modules)
    sys.path[:0] = added
    importlib.invalidate_caches()
    log.debug("Registered resolution paths %s", added)
    try:
        yield
    finally:
        for root in added:
            if root in sys.path:
                sys.path.remove(root)
        for name in [name for name in sys.modules if name not in preloaded]:
            if _loaded_from(sys.modules[name], added):
                del sys.modules[name]
        importlib.invalidate_caches()
        log.debug("Unregistered resolution paths %s", added)


def _loaded_from(module: object, roots: list[str]) -> bool:
    location = getattr(module, "__file__", None)
    if not location:
        return False
    resolved = Path(location).resolve()
    return any(resolved.is_relative_to(root) for root in roots)


def _distribution_installed(name: str) -> bool:
    try:
        metadata.distribution(name)
    except metadata.PackageNotFoundError:
        return False
    return True


@dataclass(slots=True)
class ImportlibEnvironment:
    """Resolve identifiers to importable objects.

    ``App\\Logging\\FileLogger`` is looked up as the dotted path
    ``App.Logging.FileLogger``: the longest importable module prefix is
    imported and the remaining segments are read as attributes. Objects may
    carry ``__requires_distributions__`` (names of installed distributions they
    need) and ``__provider_available__`` (a bool or a zero-argument callable).
    """

    separator: str = DEFAULT_SEPARATOR
    _resolved: dict[str, object] = field(default_factory=dict[str, object], init=False)

    def identifier_exists(self, identifier: str) -> bool:
        return self._resolve(identifier) is not _MISSING

    def service_available(self, identifier: str) -> bool:
        target = self._resolve(identifier)
        return target is not _MISSING and self._requirements_met(identifier, target)

    def provider_available(self, identifier: str) -> bool:
        target = self._resolve(identifier)
        if target is _MISSING or not self._requirements_met(identifier, target):
            return False
        hook = getattr(target, AVAILABILITY_HOOK, True)
        return bool(hook() if callable(hook) else hook)

    def _requirements_met(self, identifier: str, target: object) -> bool:
        required = getattr(target, REQUIREMENTS_ATTRIBUTE, ())
        if isinstance(required, str):
            required = (required,)
        missing = [name for name in required if not _distribution_installed(name)]
        if missing:
            log.debug("%s requires missing distributions %s", identifier, missing)
        return not missing

    def _resolve(self, identifier: str) -> object:
        if identifier not in self._resolved:
            self._resolved[identifier] = self._import(identifier)
        return self._resolved[identifier]

    def _import(self, identifier: str) -> object:
        segments = identifier_segments(identifier, separator=self.separator)
        for split in range(len(segments), 0, -1):
            module_name = ".".join(segments[:split])
            try:
                target: object = importlib.import_module(module_name)
            except ImportError:
                continue
            for attribute in segments[split:]:
                target = getattr(target, attribute, _MISSING)
                if target is _MISSING:
                    return _MISSING
            return target
        return _MISSING


__all__ = [
    "AVAILABILITY_HOOK",
    "REQUIREMENTS_ATTRIBUTE",
    "ImportlibEnvironment",
    "resolution_context",
]
