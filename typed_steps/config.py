"""Registrar settings and their environment variable overrides."""

from __future__ import annotations

import dataclasses as dc
import os
import re
import typing as t

from .placeholders import DEFAULT_SEPARATOR

ALLOW_UNUSED_DEFINITIONS_ENV: t.Final[str] = "TYPED_STEPS_ALLOW_UNUSED_DEFINITIONS"
NAME_SEPARATOR_ENV: t.Final[str] = "TYPED_STEPS_NAME_SEPARATOR"

_TRUTHY: t.Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
# Unique names end up as ``parse`` type names, which stop at ``}`` and ``:``.
_SEPARATOR_RE: t.Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_\-]+")


def parse_bool(raw: str) -> bool:
    """Return ``True`` for the usual truthy spellings of *raw*."""
    return raw.strip().lower() in _TRUTHY


@dc.dataclass(frozen=True, slots=True)
class RegistrarSettings:
    """Options controlling :class:`~typed_steps.registrar.StepRegistrar`."""

    allow_unused_definitions: bool = False
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        """Validate the unique-name separator."""
        if not _SEPARATOR_RE.fullmatch(self.separator):
            msg = (
                "separator must be a non-empty run of letters, digits, "
                f"'_' or '-': {self.separator!r}"
            )
            raise ValueError(msg)

    @classmethod
    def from_env(
        cls, environ: t.Mapping[str, str] | None = None
    ) -> RegistrarSettings:
        """Build settings from *environ* (default: :data:`os.environ`)."""
        env = os.environ if environ is None else environ
        return cls(
            allow_unused_definitions=parse_bool(
                env.get(ALLOW_UNUSED_DEFINITIONS_ENV, "")
            ),
            separator=env.get(NAME_SEPARATOR_ENV) or DEFAULT_SEPARATOR,
        )


__all__ = [
    "ALLOW_UNUSED_DEFINITIONS_ENV",
    "NAME_SEPARATOR_ENV",
    "RegistrarSettings",
    "parse_bool",
]
