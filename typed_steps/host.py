"""Ports through which typed steps are handed to a step-execution host."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t

StepHandler = t.Callable[..., t.Any]


@dc.dataclass(frozen=True, slots=True)
class ParameterType:
    """A named placeholder type: pattern plus transformer.

    ``regex_group_count`` is only needed when ``regexp`` contains capturing
    groups; generated patterns never do.
    """

    name: str
    regexp: str | re.Pattern[str]
    transformer: t.Callable[[str], t.Any]
    regex_group_count: int | None = None

    @property
    def pattern(self) -> str:
        """Return ``regexp`` as pattern source text."""
        if isinstance(self.regexp, re.Pattern):
            return self.regexp.pattern
        return self.regexp


@t.runtime_checkable
class StepHost(t.Protocol):
    """Registry of placeholder types and step expressions.

    Expressions use cucumber-style placeholders: ``{name}`` refers to a
    parameter type registered under ``name`` or to one of the built-in types.
    """

    def define_parameter_type(self, parameter_type: ParameterType) -> None:
        """Register *parameter_type* under its name."""
        ...

    def define_step(self, expression: str, handler: StepHandler) -> None:
        """Register *expression*, dispatching matches to *handler*."""
        ...


__all__ = ["ParameterType", "StepHandler", "StepHost"]
