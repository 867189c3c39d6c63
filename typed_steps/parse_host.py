"""In-process step host built on the ``parse`` library.

Cucumber-style expressions are translated into ``parse`` formats: every
``{name}`` becomes the anonymous typed field ``{:name}``, so matched values
are converted by the registered type and handed over positionally, in the
order the placeholders appear.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as t

import parse

from .errors import UndefinedStepError
from .placeholders import BUILT_IN_NAMES, find_braced, is_built_in

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from .host import ParameterType, StepHandler

logger = logging.getLogger(__name__)

BUILT_IN_TYPE_PREFIX: t.Final[str] = "typed_steps_"

_QUOTED_STRING_PATTERN: t.Final[str] = r"""(?:"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')"""
_FLOAT_PATTERN: t.Final[str] = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_PLAIN_TYPE_NAME_RE: t.Final[re.Pattern[str]] = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


@parse.with_pattern(r"-?\d+")
def _convert_int(text: str) -> int:
    return int(text)


@parse.with_pattern(_FLOAT_PATTERN)
def _convert_float(text: str) -> float:
    return float(text)


@parse.with_pattern(r"[^\s]+")
def _convert_word(text: str) -> str:
    return text


@parse.with_pattern(_QUOTED_STRING_PATTERN)
def _convert_string(text: str) -> str:
    quote = text[0]
    return text[1:-1].replace(f"\\{quote}", quote)


BUILT_IN_CONVERTERS: t.Final[dict[str, t.Callable[[str], t.Any]]] = {
    f"{BUILT_IN_TYPE_PREFIX}{name}": converter
    for name, converter in zip(
        BUILT_IN_NAMES,
        (_convert_int, _convert_float, _convert_string, _convert_word),
        strict=True,
    )
}


def make_converter(
    parameter_type: ParameterType,
    transformer: t.Callable[[str], t.Any] | None = None,
) -> t.Callable[[str], t.Any]:
    """Return a ``parse`` type converter for *parameter_type*.

    *transformer* replaces the parameter type's own transformer when given.
    """
    convert = transformer or parameter_type.transformer

    def converter(text: str) -> t.Any:  # noqa: ANN401 - transformer-defined
        return convert(text)

    return parse.with_pattern(
        f"(?:{parameter_type.pattern})",
        regex_group_count=parameter_type.regex_group_count,
    )(converter)


def type_name_for(name: str) -> str:
    """Return the ``parse`` type name used for placeholder *name*.

    Built-ins map onto the host's own converters. Any other name that is not
    a plain identifier (``parse`` would read a leading digit, sign, space or
    fill and alignment characters as part of the format spec) is hex-encoded
    under the reserved prefix.
    """
    if is_built_in(name):
        return f"{BUILT_IN_TYPE_PREFIX}{name}"
    if _PLAIN_TYPE_NAME_RE.fullmatch(name) and not name.startswith(
        BUILT_IN_TYPE_PREFIX
    ):
        return name
    return f"{BUILT_IN_TYPE_PREFIX}x{name.encode().hex()}"


def _escape_literal(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def to_parse_format(expression: str, type_names: t.Container[str]) -> str:
    """Translate a cucumber-style *expression* into a ``parse`` format.

    Raises :class:`ValueError` when a placeholder refers to a type missing
    from *type_names*.
    """
    parts: list[str] = []
    cursor = 0
    for braced, name in find_braced(expression):
        start = expression.index(braced, cursor)
        type_name = type_name_for(name)
        if type_name not in type_names:
            msg = f"undefined parameter type {name!r} in {expression!r}"
            raise ValueError(msg)
        parts.append(_escape_literal(expression[cursor:start]))
        parts.append(f"{{:{type_name}}}")
        cursor = start + len(braced)
    parts.append(_escape_literal(expression[cursor:]))
    return "".join(parts)


@dc.dataclass(frozen=True, slots=True)
class ParsedStep:
    """A step expression compiled into a ``parse`` parser."""

    expression: str
    parser: parse.Parser
    handler: StepHandler


@dc.dataclass(frozen=True, slots=True)
class StepMatch:
    """A step whose expression matched some step text."""

    step: ParsedStep
    args: tuple[t.Any, ...]

    def run(self) -> t.Any:  # noqa: ANN401 - handler-defined
        """Call the step handler with the converted arguments."""
        return self.step.handler(*self.args)


class ParseStepHost:
    """Standalone step host matching step text with ``parse``.

    Steps are tried in registration order and the first match wins.
    Transformer errors raised while matching propagate to the caller.
    """

    def __init__(self) -> None:
        self.converters: dict[str, t.Callable[[str], t.Any]] = dict(
            BUILT_IN_CONVERTERS
        )
        self.parameter_types: dict[str, ParameterType] = {}
        self.steps: list[ParsedStep] = []

    def define_parameter_type(self, parameter_type: ParameterType) -> None:
        """Register *parameter_type*; names must be unique."""
        name = parameter_type.name
        if is_built_in(name) or name in self.parameter_types:
            msg = f"parameter type {name!r} is already defined"
            raise ValueError(msg)
        self.parameter_types[name] = parameter_type
        self.converters[type_name_for(name)] = make_converter(parameter_type)

    def define_step(self, expression: str, handler: StepHandler) -> None:
        """Compile *expression* and register it with *handler*."""
        step_format = to_parse_format(expression, self.converters)
        parser = parse.compile(
            step_format, extra_types=self.converters, case_sensitive=True
        )
        self.steps.append(ParsedStep(expression, parser, handler))
        logger.debug("Defined step %r as format %r", expression, step_format)

    def match(self, text: str) -> StepMatch | None:
        """Return the first step matching *text*, or ``None``."""
        for step in self.steps:
            result = step.parser.parse(text)
            if result is not None:
                return StepMatch(step, tuple(result.fixed))
        return None

    def run_step(self, text: str) -> t.Any:  # noqa: ANN401 - handler-defined
        """Run the step matching *text* and return the handler's result."""
        step_match = self.match(text)
        if step_match is None:
            msg = f"no step matches {text!r}"
            raise UndefinedStepError(msg)
        return step_match.run()


__all__ = [
    "BUILT_IN_CONVERTERS",
    "BUILT_IN_TYPE_PREFIX",
    "ParseStepHost",
    "ParsedStep",
    "StepMatch",
    "make_converter",
    "to_parse_format",
    "type_name_for",
]
