"""Unit tests for :mod:`typed_steps.decoding`."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from typed_steps.decoding import (
    construct_decode_error,
    decode_or_throw,
    list_decoder,
    literal_decoder,
    split_list_text,
    string_decoder,
    unknown_decoder,
)
from typed_steps.errors import DecodeError, TypedStepsError

VALUE_SETS = [
    ("alice",),
    ("alice", "bob"),
    ("a.b", "c|d", "(e)"),
    ("tea", "coffee", "hot chocolate"),
]


@pytest.mark.parametrize("values", VALUE_SETS)
def test_literal_decoder_accepts_every_member(values: tuple[str, ...]) -> None:
    """Every declared literal decodes to itself."""
    decode = decode_or_throw(literal_decoder(values))
    for value in values:
        assert decode(value) == value


@pytest.mark.parametrize("values", VALUE_SETS)
@pytest.mark.parametrize("text", ["", "carol", "ALICE", "tea, coffee"])
def test_literal_decoder_rejects_non_members(
    values: tuple[str, ...], text: str
) -> None:
    """Text outside the literal set raises a decode error."""
    decode = decode_or_throw(literal_decoder(values))
    with pytest.raises(DecodeError, match="^DecodeError: "):
        decode(text)


def test_decode_error_chains_the_validation_error() -> None:
    """The structured failure stays reachable for diagnosis."""
    decode = decode_or_throw(literal_decoder(("a",)))
    with pytest.raises(DecodeError) as excinfo:
        decode("b")
    assert isinstance(excinfo.value.__cause__, ValidationError)
    assert isinstance(excinfo.value, TypedStepsError)
    assert isinstance(excinfo.value, ValueError)


def test_construct_decode_error_serialises_failure() -> None:
    """The error message carries a JSON rendering of the failure."""
    with pytest.raises(ValidationError) as excinfo:
        literal_decoder(("a", "b")).validate_python("c")
    error = construct_decode_error(excinfo.value)
    message = str(error)
    assert message.startswith("DecodeError: ")
    details = json.loads(message.removeprefix("DecodeError: "))
    assert details[0]["type"] == "literal_error"
    assert details[0]["input"] == "c"
    assert str(construct_decode_error(excinfo.value)) == message


@pytest.mark.parametrize(
    "items",
    [
        [],
        ["tea"],
        ["coffee", "tea"],
        ["tea", "tea", "tea"],
    ],
)
def test_list_decoder_returns_joined_items(items: list[str]) -> None:
    """Joined items decode back to the same ordered list."""
    decode = decode_or_throw(list_decoder(("tea", "coffee")))
    assert decode(", ".join(items)) == items


def test_list_decoder_maps_empty_text_to_empty_list() -> None:
    """Empty text is the empty list, never a list holding ``""``."""
    assert decode_or_throw(list_decoder(("tea",)))("") == []


@pytest.mark.parametrize("text", ["water", "tea, water", "tea,coffee", ", "])
def test_list_decoder_rejects_unknown_items(text: str) -> None:
    """Each element is validated against the literal set."""
    decode = decode_or_throw(list_decoder(("tea", "coffee")))
    with pytest.raises(DecodeError):
        decode(text)


def test_non_empty_list_decoder_rejects_empty_text() -> None:
    """Non-empty lists refuse the empty sequence."""
    decode = decode_or_throw(list_decoder(("tea", "coffee"), is_non_empty=True))
    with pytest.raises(DecodeError, match="too_short"):
        decode("")
    assert decode("coffee") == ["coffee"]
    assert decode("tea, coffee") == ["tea", "coffee"]


def test_split_list_text() -> None:
    """Only strings are split; the empty string becomes ``[]``."""
    assert split_list_text("") == []
    assert split_list_text("a, b") == ["a", "b"]
    assert split_list_text("a,b") == ["a,b"]
    assert split_list_text(["a"]) == ["a"]


def test_string_and_unknown_decoders_pass_values_through() -> None:
    """String decoding is the identity and unknown decoding never fails."""
    assert decode_or_throw(string_decoder())("any text") == "any text"
    marker = object()
    assert decode_or_throw(unknown_decoder())(marker) is marker
