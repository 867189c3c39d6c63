"""Find ``{name}`` placeholders in step phrases and give them unique names.

Hosts keep placeholder types in a single process-wide namespace, so every
registration renames its placeholders before defining their types. Nested
braces are not supported: in ``{a{b}}`` only ``{b}`` is recognised.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t
import uuid

BUILT_IN_NAMES: t.Final[tuple[str, ...]] = ("int", "float", "string", "word")
DEFAULT_SEPARATOR: t.Final[str] = "__"

_PLACEHOLDER_RE: t.Final[re.Pattern[str]] = re.compile(r"\{([^{^}.]*)\}")


@dc.dataclass(frozen=True, slots=True)
class Placeholder:
    """One user-declared placeholder occurrence in a phrase."""

    braced: str
    name: str
    unique_name: str


def new_token() -> str:
    """Return a fresh random token for uniquifying placeholder names."""
    return uuid.uuid4().hex


def is_built_in(name: str) -> bool:
    """Return ``True`` when *name* is handled natively by the host."""
    return name in BUILT_IN_NAMES


def find_braced(phrase: str) -> t.Iterator[tuple[str, str]]:
    """Yield ``(braced, name)`` for each placeholder in *phrase*, left to right."""
    for match in _PLACEHOLDER_RE.finditer(phrase):
        yield match.group(0), match.group(1)


def required_names(phrase: str) -> tuple[str, ...]:
    """Return the placeholder names in *phrase* that need a definition."""
    names: dict[str, None] = {}
    for _, name in find_braced(phrase):
        if not is_built_in(name):
            names.setdefault(name)
    return tuple(names)


def extract_placeholders(
    phrase: str, token: str, *, separator: str = DEFAULT_SEPARATOR
) -> list[Placeholder]:
    """Return the non-built-in placeholders of *phrase* with unique names.

    Repeated names are kept; each occurrence is numbered so that its unique
    name differs from every other occurrence.
    """
    user_declared = [
        (braced, name) for braced, name in find_braced(phrase) if not is_built_in(name)
    ]
    return [
        Placeholder(braced, name, f"{name}{separator}{token}_{index}")
        for index, (braced, name) in enumerate(user_declared)
    ]


def rewrite_phrase(phrase: str, placeholders: t.Iterable[Placeholder]) -> str:
    """Return *phrase* with each placeholder renamed to its unique name.

    Placeholders are replaced in order, each searched for after the previous
    replacement, so repeated braced text maps one-to-one onto *placeholders*.
    """
    parts: list[str] = []
    cursor = 0
    for placeholder in placeholders:
        start = phrase.find(placeholder.braced, cursor)
        if start < 0:
            msg = f"placeholder {placeholder.braced!r} not found in {phrase!r}"
            raise ValueError(msg)
        parts.append(phrase[cursor:start])
        parts.append(f"{{{placeholder.unique_name}}}")
        cursor = start + len(placeholder.braced)
    parts.append(phrase[cursor:])
    return "".join(parts)


__all__ = [
    "BUILT_IN_NAMES",
    "DEFAULT_SEPARATOR",
    "Placeholder",
    "extract_placeholders",
    "find_braced",
    "is_built_in",
    "new_token",
    "required_names",
    "rewrite_phrase",
]
