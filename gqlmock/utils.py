# File: gqlmock/utils.py
"""
gqlmock - Utility Functions & Helpers
======================================
Naming conventions, literal quoting, import formatting and file I/O used
throughout the generation pipeline.

Naming strategy:
- Every identifier is first split into words (camelCase, PascalCase,
  snake_case, SCREAMING_CASE and digit runs are all word boundaries).
- Case conversions are then simple joins over those words, cached with
  ``@lru_cache`` because the same type names are converted once per field.
"""

from __future__ import annotations

import functools
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Set, Tuple, Union

from gqlmock.models import NamingConvention

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)
_LEADING_DIGITS_RE: re.Pattern[str] = re.compile(r"\d+")

# Words whose written vowel/consonant does not match the spoken one.
_SILENT_H_PREFIXES: Tuple[str, ...] = ("hour", "honest", "honor", "honour", "heir")
_CONSONANT_SOUND_PREFIXES: Tuple[str, ...] = (
    "uni", "use", "usa", "usu", "uti", "ure", "uro", "url", "ubiq", "ufo",
    "eu", "ewe", "one", "once",
)
# Letters read out with a leading vowel sound ("an F", "an X").
_VOWEL_SOUND_LETTERS: FrozenSet[str] = frozenset("aefhilmnorsx")


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """
    Extract individual words from any casing style.

    Returns a tuple (hashable for LRU cache) of lowercase word strings.
    """
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    words: List[str] = _SPLIT_WORDS_RE.findall(cleaned)
    return tuple(w.lower() for w in words if w)


@functools.lru_cache(maxsize=None)
def to_pascal_case(name: str) -> str:
    """
    Convert any string to PascalCase.

    Examples:
        >>> to_pascal_case("user_profile")
        'UserProfile'
        >>> to_pascal_case("ACTIVE")
        'Active'
        >>> to_pascal_case("HTTPResponse")
        'HttpResponse'
    """
    if not name:
        return ""
    return "".join(word.capitalize() for word in _extract_words(name))


@functools.lru_cache(maxsize=None)
def to_constant_case(name: str) -> str:
    """
    Convert any string to upper case with ``_`` between words.

    Examples:
        >>> to_constant_case("inProgress")
        'IN_PROGRESS'
        >>> to_constant_case("ACTIVE")
        'ACTIVE'
    """
    if not name:
        return ""
    return "_".join(word.upper() for word in _extract_words(name))


@functools.lru_cache(maxsize=None)
def first_word(name: str) -> str:
    """First word of *name* in sentence case ("OrderItem" → "Order")."""
    words: Tuple[str, ...] = _extract_words(name)
    if not words:
        return ""
    return words[0].capitalize()


def convert_name(
    convention: Union[NamingConvention, str, None],
    value: Optional[str],
) -> str:
    """
    Apply a naming convention to *value*.

    ``upper-case#upperCase`` upper-cases with ``_`` word boundaries,
    ``keep`` is the identity, and anything else (PascalCase included)
    pascal-cases.
    """
    resolved: NamingConvention = NamingConvention.parse(convention)
    text: str = value or ""
    if resolved is NamingConvention.UPPER_CASE:
        return to_constant_case(text)
    if resolved is NamingConvention.KEEP:
        return text
    return to_pascal_case(text)


def update_text_case(
    value: str,
    convention: Union[NamingConvention, str, None],
) -> str:
    """
    Like :func:`convert_name`, but a leading run of underscores is kept
    verbatim and only the remainder is converted.

        >>> update_text_case("__typeKind", NamingConvention.PASCAL_CASE)
        '__TypeKind'
    """
    if value.startswith("_"):
        rest: str = value.lstrip("_")
        underscores: str = value[: len(value) - len(rest)]
        return f"{underscores}{convert_name(convention, rest)}"
    return convert_name(convention, value)


@functools.lru_cache(maxsize=None)
def indefinite_article(word: str) -> str:
    """
    Pick "a" or "an" for *word* by how it is spoken.

    Examples:
        >>> indefinite_article("Order")
        'an'
        >>> indefinite_article("User")
        'a'
        >>> indefinite_article("Hour")
        'an'
    """
    lower: str = word.lower()
    if not lower:
        return "a"

    if lower[0].isdigit():
        digits: str = _LEADING_DIGITS_RE.match(lower).group()  # type: ignore[union-attr]
        # eight..., eleven, eighteen (and their thousands)
        if digits.startswith("8"):
            return "an"
        if digits[:2] in ("11", "18") and len(digits) % 3 == 2:
            return "an"
        return "a"

    if len(lower) == 1:
        return "an" if lower in _VOWEL_SOUND_LETTERS else "a"

    if lower.startswith(_SILENT_H_PREFIXES):
        return "an"
    if lower.startswith(_CONSONANT_SOUND_PREFIXES):
        return "a"
    if lower[0] in "aeiou":
        return "an"
    return "a"


def with_types_prefix(type_name: str, types_prefix: Optional[str]) -> str:
    """Prepend the configured types prefix to a referenced type name."""
    return f"{types_prefix or ''}{type_name}"


def mock_name(
    type_name: str,
    cased_name: str,
    prefix: Optional[str] = None,
    types_prefix: Optional[str] = None,
) -> str:
    """
    Name of the factory for *type_name*.

    With a static *prefix*: ``prefix + typesPrefix + CasedName``. Otherwise
    the article for the first word of the raw (prefixed) type name is used:
    ``aUser``, ``anOrder``, ``anHour``.
    """
    if prefix:
        return f"{prefix}{with_types_prefix(cased_name, types_prefix)}"
    article: str = indefinite_article(first_word(with_types_prefix(type_name, types_prefix)))
    return f"{article}{with_types_prefix(cased_name, types_prefix)}"


# ---------------------------------------------------------------------------
# Literal & import formatting helpers
# ---------------------------------------------------------------------------


def wrap_in_quotes(value: str) -> str:
    """Wrap a string in double quotes, escaping it as a Python literal."""
    escaped: str = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def build_import_block(imports: Dict[str, Set[str]]) -> str:
    """
    Build a sorted, de-duplicated import block from a mapping of
    module → set of names.

    Example:
        >>> build_import_block({"typing": {"Optional", "Any"}})
        'from typing import Any, Optional'
    """
    lines: List[str] = []
    for module in sorted(imports.keys()):
        names: List[str] = sorted(imports[module])
        if names:
            lines.append(f"from {module} import {', '.join(names)}")
        else:
            lines.append(f"import {module}")
    return "\n".join(lines)


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path* and return the number of bytes written.

    When *atomic* is True the content goes to a temporary file in the same
    directory first and is renamed over the target, so readers never see a
    partial file.
    """
    ensure_directory(path.parent)
    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


def read_file(path: Path) -> str:
    """Read a file and return its content as a string."""
    return path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("parse schema") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


__all__: List[str] = [
    "to_pascal_case",
    "to_constant_case",
    "first_word",
    "convert_name",
    "update_text_case",
    "indefinite_article",
    "with_types_prefix",
    "mock_name",
    "wrap_in_quotes",
    "build_import_block",
    "count_lines",
    "ensure_directory",
    "write_file",
    "read_file",
    "Timer",
]

logger.debug("gqlmock.utils loaded - %d public symbols.", len(__all__))
