"""Compile parameter definitions into host parameter types and decoders."""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as t

from .decoding import (
    LIST_SEPARATOR,
    decode_or_throw,
    list_decoder,
    literal_decoder,
    string_decoder,
    unknown_decoder,
)
from .errors import UnknownParameterTypeError
from .host import ParameterType
from .parameter_types import ListParam, RawParam, StringParam, SumParam

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from pydantic import TypeAdapter

    from .host import StepHost
    from .parameter_types import ParameterTypeDefinition

logger = logging.getLogger(__name__)

ANY_TEXT_PATTERN: t.Final[str] = ".*"


@dc.dataclass(frozen=True, slots=True)
class CompiledParameterType:
    """A host parameter type together with the decoder behind it."""

    parameter_type: ParameterType
    decoder: TypeAdapter[t.Any]


def _identity(text: str) -> str:
    return text


def alternation_pattern(values: t.Iterable[str]) -> str:
    """Return a non-capturing alternation matching any of *values* literally."""
    return f"(?:{'|'.join(re.escape(value) for value in values)})"


def sum_pattern(values: t.Iterable[str]) -> str:
    """Return the pattern for a sum parameter over *values*."""
    return alternation_pattern(values)


def list_pattern(values: t.Iterable[str], *, is_non_empty: bool = False) -> str:
    """Return the pattern for a list parameter over *values*.

    Without *is_non_empty* the whole sequence is optional so the empty text
    matches as well.
    """
    word = alternation_pattern(values)
    pattern = f"(?:{word}(?:{re.escape(LIST_SEPARATOR)}{word})*)"
    return pattern if is_non_empty else f"{pattern}?"


def _compile_string(name: str) -> CompiledParameterType:
    return CompiledParameterType(
        ParameterType(name, ANY_TEXT_PATTERN, _identity), string_decoder()
    )


def _compile_raw(definition: RawParam, name: str) -> CompiledParameterType:
    transform = definition.transform
    return CompiledParameterType(
        ParameterType(
            name,
            transform.regexp,
            transform.transformer,
            transform.regex_group_count,
        ),
        unknown_decoder(),
    )


def _compile_sum(definition: SumParam, name: str) -> CompiledParameterType:
    decoder = literal_decoder(definition.values)
    return CompiledParameterType(
        ParameterType(name, sum_pattern(definition.values), decode_or_throw(decoder)),
        decoder,
    )


def _compile_list(definition: ListParam, name: str) -> CompiledParameterType:
    decoder = list_decoder(definition.values, is_non_empty=definition.is_non_empty)
    pattern = list_pattern(definition.values, is_non_empty=definition.is_non_empty)
    return CompiledParameterType(
        ParameterType(name, pattern, decode_or_throw(decoder)), decoder
    )


def compile_parameter_type(
    definition: ParameterTypeDefinition, name: str
) -> CompiledParameterType:
    """Build the host parameter type and decoder for *definition*.

    Raises :class:`UnknownParameterTypeError` for anything that is not one of
    the supported definitions.
    """
    if isinstance(definition, StringParam):
        return _compile_string(name)
    if isinstance(definition, RawParam):
        return _compile_raw(definition, name)
    if isinstance(definition, SumParam):
        return _compile_sum(definition, name)
    if isinstance(definition, ListParam):
        return _compile_list(definition, name)
    raise UnknownParameterTypeError(definition)


def register_parameter_type(
    definition: ParameterTypeDefinition, name: str, host: StepHost
) -> TypeAdapter[t.Any]:
    """Register *definition* with *host* under *name* and return its decoder."""
    compiled = compile_parameter_type(definition, name)
    host.define_parameter_type(compiled.parameter_type)
    logger.debug(
        "Registered parameter type %s with pattern %r",
        name,
        compiled.parameter_type.pattern,
    )
    return compiled.decoder


def define_parameter_type_with_decoder(
    first: str, *rest: str
) -> t.Callable[[str, StepHost], TypeAdapter[str]]:
    """Return a function registering a sum parameter type over the values.

    The returned function takes the parameter name and the host, registers
    the type and returns the literal decoder used by its transformer.
    """
    definition = SumParam((first, *rest))

    def define(name: str, host: StepHost) -> TypeAdapter[str]:
        return register_parameter_type(definition, name, host)

    return define


__all__ = [
    "ANY_TEXT_PATTERN",
    "CompiledParameterType",
    "alternation_pattern",
    "compile_parameter_type",
    "define_parameter_type_with_decoder",
    "list_pattern",
    "register_parameter_type",
    "sum_pattern",
]
