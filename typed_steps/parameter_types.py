"""Parameter type definitions accepted by :func:`typed_steps.define_step`.

Each definition is an immutable value describing what a ``{placeholder}`` in a
step phrase may contain. Definitions are plain data: they are compiled into a
pattern and a decoder only when a step is registered.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t


@dc.dataclass(frozen=True, slots=True)
class RawTransform:
    """Matching configuration handed to the host without inspection."""

    regexp: str | re.Pattern[str]
    transformer: t.Callable[[str], t.Any]
    regex_group_count: int | None = None


@dc.dataclass(frozen=True, slots=True)
class StringParam:
    """A parameter matching any text, decoded as the text itself."""


@dc.dataclass(frozen=True, slots=True)
class RawParam:
    """A parameter whose pattern and transformer are supplied verbatim.

    Raw parameters bypass validation entirely and should be avoided where one
    of the other definitions fits.
    """

    transform: RawTransform


def _require_values(kind: str, values: tuple[str, ...]) -> None:
    if not values:
        msg = f"{kind} requires at least one value"
        raise ValueError(msg)


@dc.dataclass(frozen=True, slots=True)
class SumParam:
    """A parameter matching exactly one of ``values``."""

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        """Reject an empty set of literals."""
        _require_values("SumParam", self.values)


@dc.dataclass(frozen=True, slots=True)
class ListParam:
    """A ``", "``-separated sequence of literals drawn from ``values``.

    Repeats are permitted. When ``is_non_empty`` is set the empty sequence is
    rejected at decode time.
    """

    values: tuple[str, ...]
    is_non_empty: bool = False

    def __post_init__(self) -> None:
        """Reject an empty set of literals."""
        _require_values("ListParam", self.values)


ParameterTypeDefinition = StringParam | RawParam | SumParam | ListParam


def parameter_type_string() -> StringParam:
    """Return a definition for a free-text parameter."""
    return StringParam()


def parameter_type_raw(
    regexp: str | re.Pattern[str],
    transformer: t.Callable[[str], t.Any],
    *,
    regex_group_count: int | None = None,
) -> RawParam:
    """Return a definition registering *regexp* and *transformer* unchecked.

    ``regex_group_count`` must be given when *regexp* contains capturing
    groups.
    """
    return RawParam(RawTransform(regexp, transformer, regex_group_count))


def parameter_type_sum(first: str, *rest: str) -> SumParam:
    """Return a definition for a parameter equal to one of the given values."""
    return SumParam((first, *rest))


def parameter_type_list(first: str, *rest: str) -> ListParam:
    """Return a definition for a possibly empty list of the given values."""
    return ListParam((first, *rest), is_non_empty=False)


def parameter_type_non_empty_list(first: str, *rest: str) -> ListParam:
    """Return a definition for a list holding at least one of the values."""
    return ListParam((first, *rest), is_non_empty=True)


__all__ = [
    "ListParam",
    "ParameterTypeDefinition",
    "RawParam",
    "RawTransform",
    "StringParam",
    "SumParam",
    "parameter_type_list",
    "parameter_type_non_empty_list",
    "parameter_type_raw",
    "parameter_type_string",
    "parameter_type_sum",
]
