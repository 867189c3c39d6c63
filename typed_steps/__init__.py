"""Typed step definitions for Gherkin-style step hosts.

Declare a step phrase with ``{name}`` placeholders together with a definition
of each placeholder's allowed values; the phrase is registered with a host
alongside a pattern and a validating decoder for every placeholder, so the
values reaching a step implementation always match their declaration.
"""

from __future__ import annotations

from .compiler import (
    CompiledParameterType,
    compile_parameter_type,
    define_parameter_type_with_decoder,
    register_parameter_type,
)
from .config import RegistrarSettings
from .decoding import construct_decode_error, decode_or_throw
from .errors import (
    DecodeError,
    DefinitionMismatchError,
    TypedStepsError,
    UndefinedStepError,
    UnknownParameterTypeError,
)
from .host import ParameterType, StepHost
from .parameter_types import (
    ListParam,
    ParameterTypeDefinition,
    RawParam,
    RawTransform,
    StringParam,
    SumParam,
    parameter_type_list,
    parameter_type_non_empty_list,
    parameter_type_raw,
    parameter_type_string,
    parameter_type_sum,
)
from .parse_host import ParseStepHost
from .placeholders import BUILT_IN_NAMES, Placeholder
from .registrar import StepRegistrar, StepRegistration, define_step

__all__ = [
    "BUILT_IN_NAMES",
    "CompiledParameterType",
    "DecodeError",
    "DefinitionMismatchError",
    "ListParam",
    "ParameterType",
    "ParameterTypeDefinition",
    "ParseStepHost",
    "Placeholder",
    "RawParam",
    "RawTransform",
    "RegistrarSettings",
    "StepHost",
    "StepRegistrar",
    "StepRegistration",
    "StringParam",
    "SumParam",
    "TypedStepsError",
    "UndefinedStepError",
    "UnknownParameterTypeError",
    "compile_parameter_type",
    "construct_decode_error",
    "decode_or_throw",
    "define_parameter_type_with_decoder",
    "define_step",
    "parameter_type_list",
    "parameter_type_non_empty_list",
    "parameter_type_raw",
    "parameter_type_string",
    "parameter_type_sum",
    "register_parameter_type",
]
