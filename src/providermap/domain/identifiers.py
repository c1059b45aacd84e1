"""Syntactic checks for fully-qualified type identifiers.

An identifier is one or more segments joined by a namespace separator, with an
optional leading separator marking the absolute form (``\\App\\Logger``).
Segments start with a letter, an underscore or any non-surrogate code point
from U+0080 up, and continue with the same characters plus digits.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Final

DEFAULT_SEPARATOR: Final[str] = "\\"

_LETTER: Final[str] = r"A-Za-z_\u0080-\ud7ff\ue000-\U0010ffff"
_SEGMENT: Final[str] = rf"[{_LETTER}][0-9{_LETTER}]*"


@lru_cache(maxsize=8)
def _identifier_pattern(separator: str) -> re.Pattern[str]:
    sep = re.escape(separator)
    return re.compile(rf"{sep}?{_SEGMENT}(?:{sep}{_SEGMENT})*")


def is_valid_separator(separator: str) -> bool:
    """Return whether ``separator`` can delimit identifier segments."""

    return (
        isinstance(separator, str)
        and len(separator) == 1
        and re.fullmatch(_SEGMENT, separator) is None
        and not separator.isdigit()
        and not separator.isspace()
    )


def is_valid_identifier(value: object, *, separator: str = DEFAULT_SEPARATOR) -> bool:
    """Return ``True`` when ``value`` is a well-formed fully-qualified identifier.

    This never raises: anything that is not a string, or does not match the
    segment grammar in full, is simply reported as invalid. It does not check
    that the identifier resolves to loadable code.
    """

    if not isinstance(value, str):
        return False
    return _identifier_pattern(separator).fullmatch(value) is not None


def canonical_identifier(value: str, *, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return ``value`` in absolute form (exactly one leading separator)."""

    if value.startswith(separator):
        return value
    return separator + value


def relative_identifier(value: str, *, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return ``value`` without its leading separator."""

    return value.removeprefix(separator)


def identifier_segments(value: str, *, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    return relative_identifier(value, separator=separator).split(separator)


__all__ = [
    "DEFAULT_SEPARATOR",
    "canonical_identifier",
    "identifier_segments",
    "is_valid_identifier",
    "is_valid_separator",
    "relative_identifier",
]
