"""Exception hierarchy for typed step registration and decoding."""

from __future__ import annotations

import typing as t


class TypedStepsError(Exception):
    """Base class for all typed-steps errors."""


class DecodeError(TypedStepsError, ValueError):
    """Matched step text does not decode to a value of its parameter type."""


class DefinitionMismatchError(TypedStepsError):
    """Parameter definitions do not cover the placeholders of a phrase."""

    def __init__(
        self,
        phrase: str,
        *,
        missing: t.Iterable[str] = (),
        unused: t.Iterable[str] = (),
    ) -> None:
        self.phrase = phrase
        self.missing = tuple(missing)
        self.unused = tuple(unused)
        parts = []
        if self.missing:
            parts.append(f"missing definitions for {', '.join(self.missing)}")
        if self.unused:
            parts.append(f"unused definitions for {', '.join(self.unused)}")
        super().__init__(f"{'; '.join(parts)} in step {phrase!r}")


class UnknownParameterTypeError(TypedStepsError, TypeError):
    """A parameter definition is not one of the supported variants."""

    def __init__(self, definition: object) -> None:
        self.definition = definition
        super().__init__(f"Unknown definition: {definition!r}")


class UndefinedStepError(TypedStepsError, LookupError):
    """No registered step matches the given step text."""


__all__ = [
    "DecodeError",
    "DefinitionMismatchError",
    "TypedStepsError",
    "UndefinedStepError",
    "UnknownParameterTypeError",
]
