"""Step host adapter registering typed steps with behave.

Parameter types become behave custom types via :func:`behave.register_type`
and steps are registered with behave's keyword-agnostic ``step`` decorator,
so they match ``Given``, ``When`` and ``Then`` lines alike. behave's default
``parse`` step matcher must be active when steps are defined.
"""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from behave import register_type, step  # type: ignore[attr-defined]

from .parse_host import (
    BUILT_IN_CONVERTERS,
    make_converter,
    to_parse_format,
    type_name_for,
)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from .host import ParameterType, StepHandler

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class DeferredTransformError:
    """A transformer failure captured while behave matched step text."""

    error: Exception


def _deferring(transformer: t.Callable[[str], t.Any]) -> t.Callable[[str], t.Any]:
    """Wrap *transformer* so failures are returned instead of raised.

    behave converts values while searching for a matching step, outside the
    step body; an exception there would not be reported as a step failure.
    """

    def transform(text: str) -> t.Any:  # noqa: ANN401 - transformer-defined
        try:
            return transformer(text)
        except Exception as exc:  # noqa: BLE001 - re-raised by the step body
            return DeferredTransformError(exc)

    return transform


class BehaveHost:
    """Register parameter types and steps in behave's global registries."""

    def __init__(self) -> None:
        self.type_names: set[str] = set(BUILT_IN_CONVERTERS)
        register_type(**BUILT_IN_CONVERTERS)

    def define_parameter_type(self, parameter_type: ParameterType) -> None:
        """Register *parameter_type* as a behave custom type."""
        converter = make_converter(
            parameter_type, _deferring(parameter_type.transformer)
        )
        type_name = type_name_for(parameter_type.name)
        register_type(**{type_name: converter})
        self.type_names.add(type_name)

    def define_step(self, expression: str, handler: StepHandler) -> None:
        """Register *expression* with behave, calling *handler* on match.

        *handler* receives behave's ``context`` followed by the converted
        placeholder values.
        """
        step_format = to_parse_format(expression, self.type_names)

        def run_step(context: t.Any, *args: t.Any) -> t.Any:  # noqa: ANN401
            for arg in args:
                if isinstance(arg, DeferredTransformError):
                    raise arg.error
            return handler(context, *args)

        step(step_format)(run_step)
        logger.debug("Defined behave step %r as %r", expression, step_format)


__all__ = ["BehaveHost", "DeferredTransformError"]
