"""Recording step host and deterministic tokens for registrar tests."""

from __future__ import annotations

import dataclasses as dc
import itertools
import typing as t

if t.TYPE_CHECKING:
    from typed_steps.host import ParameterType, StepHandler


@dc.dataclass(slots=True)
class RecordingHost:
    """Step host that only records what it is asked to register."""

    parameter_types: list[ParameterType] = dc.field(default_factory=list)
    steps: list[tuple[str, StepHandler]] = dc.field(default_factory=list)

    def define_parameter_type(self, parameter_type: ParameterType) -> None:
        """Record *parameter_type*."""
        self.parameter_types.append(parameter_type)

    def define_step(self, expression: str, handler: StepHandler) -> None:
        """Record *expression* and *handler*."""
        self.steps.append((expression, handler))

    def parameter_type(self, name: str) -> ParameterType:
        """Return the recorded parameter type called *name*."""
        return next(pt for pt in self.parameter_types if pt.name == name)


def counting_tokens(prefix: str = "T") -> t.Callable[[], str]:
    """Return a token factory yielding ``T0``, ``T1`` and so on."""
    counter = itertools.count()
    return lambda: f"{prefix}{next(counter)}"


__all__ = ["RecordingHost", "counting_tokens"]
