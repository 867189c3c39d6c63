"""Decoders for placeholder text and the adapter that makes them raise.

Decoders are :class:`pydantic.TypeAdapter` instances. They report failures as
a structured :class:`pydantic.ValidationError`; hosts expect transformers to
raise instead, so :func:`decode_or_throw` converts one into the other.
"""

from __future__ import annotations

import typing as t

from pydantic import BeforeValidator, Field, TypeAdapter, ValidationError

from .errors import DecodeError

T = t.TypeVar("T")

LIST_SEPARATOR: t.Final[str] = ", "


def construct_decode_error(exc: ValidationError) -> DecodeError:
    """Return a :class:`DecodeError` holding a JSON rendering of *exc*."""
    return DecodeError(f"DecodeError: {exc.json(include_url=False)}")


def decode_or_throw(decoder: TypeAdapter[T]) -> t.Callable[[t.Any], T]:
    """Return a function running *decoder* and raising on failure.

    Successful decodes return the validated value. Failures raise
    :class:`DecodeError` chained to the original validation error.
    """

    def decode(value: t.Any) -> T:  # noqa: ANN401 - decoders accept any input
        try:
            return decoder.validate_python(value)
        except ValidationError as exc:
            raise construct_decode_error(exc) from exc

    return decode


def string_decoder() -> TypeAdapter[str]:
    """Return a decoder accepting any string."""
    return TypeAdapter(str)


def unknown_decoder() -> TypeAdapter[t.Any]:
    """Return a decoder passing every value through unchecked."""
    return TypeAdapter(t.Any)


def literal_decoder(values: tuple[str, ...]) -> TypeAdapter[str]:
    """Return a decoder accepting exactly one of *values*."""
    return TypeAdapter(t.Literal[values])  # type: ignore[valid-type]


def split_list_text(value: object) -> object:
    """Split list text on ``", "``; the empty string is the empty list."""
    if not isinstance(value, str):
        return value
    if value == "":
        return []
    return value.split(LIST_SEPARATOR)


def list_decoder(
    values: tuple[str, ...], *, is_non_empty: bool = False
) -> TypeAdapter[list[str]]:
    """Return a decoder for a ``", "``-separated list of *values*.

    Each element is checked independently against *values*; repeats are
    allowed. With *is_non_empty* the empty list is rejected.
    """
    item = t.Literal[values]  # type: ignore[valid-type]
    sequence: t.Any = list[item]  # type: ignore[valid-type]
    if is_non_empty:
        sequence = t.Annotated[sequence, Field(min_length=1)]
    return TypeAdapter(t.Annotated[sequence, BeforeValidator(split_list_text)])


__all__ = [
    "LIST_SEPARATOR",
    "construct_decode_error",
    "decode_or_throw",
    "list_decoder",
    "literal_decoder",
    "split_list_text",
    "string_decoder",
    "unknown_decoder",
]
