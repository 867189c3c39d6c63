"""Unit tests for :mod:`typed_steps.behave_host`."""

from __future__ import annotations

import dataclasses as dc
import typing as t

import parse
import pytest

from typed_steps import behave_host
from typed_steps.behave_host import BehaveHost, DeferredTransformError
from typed_steps.decoding import decode_or_throw, literal_decoder
from typed_steps.errors import DecodeError
from typed_steps.host import ParameterType, StepHost
from typed_steps.parameter_types import parameter_type_list, parameter_type_sum
from typed_steps.registrar import define_step


@dc.dataclass(slots=True)
class FakeBehave:
    """Stand-in for behave's global type and step registries."""

    types: dict[str, t.Callable[[str], t.Any]] = dc.field(default_factory=dict)
    steps: list[tuple[str, t.Callable[..., t.Any]]] = dc.field(default_factory=list)

    def register_type(self, **converters: t.Callable[[str], t.Any]) -> None:
        """Record custom types."""
        self.types.update(converters)

    def step(self, text: str) -> t.Callable[[t.Callable[..., t.Any]], t.Any]:
        """Record a step definition."""

        def decorator(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
            self.steps.append((text, func))
            return func

        return decorator

    def run(self, text: str, context: object) -> t.Any:  # noqa: ANN401
        """Match *text* the way behave's parse matcher does and run the step."""
        for step_format, func in self.steps:
            result = parse.compile(step_format, self.types).parse(text)
            if result is not None:
                return func(context, *result.fixed)
        msg = f"undefined step {text!r}"
        raise AssertionError(msg)


@pytest.fixture
def fake_behave(monkeypatch: pytest.MonkeyPatch) -> FakeBehave:
    """Route behave registrations into a :class:`FakeBehave`."""
    fake = FakeBehave()
    monkeypatch.setattr(behave_host, "register_type", fake.register_type)
    monkeypatch.setattr(behave_host, "step", fake.step)
    return fake


def _who_type() -> ParameterType:
    return ParameterType(
        "who__T_0", "alice|bob", decode_or_throw(literal_decoder(("alice", "bob")))
    )


def test_host_registers_built_ins(fake_behave: FakeBehave) -> None:
    """Creating a host makes the built-in converters available."""
    host = BehaveHost()
    assert isinstance(host, StepHost)
    assert {"typed_steps_int", "typed_steps_string"} <= set(fake_behave.types)


def test_parameter_types_become_custom_types(fake_behave: FakeBehave) -> None:
    """Converters carry the pattern and defer transformer failures."""
    BehaveHost().define_parameter_type(_who_type())
    converter = fake_behave.types["who__T_0"]

    assert converter.pattern == "(?:alice|bob)"  # type: ignore[attr-defined]
    assert converter("bob") == "bob"
    deferred = converter("carol")
    assert isinstance(deferred, DeferredTransformError)
    assert isinstance(deferred.error, DecodeError)


def test_steps_are_translated_and_pass_context(fake_behave: FakeBehave) -> None:
    """Handlers receive behave's context followed by the values."""
    calls: list[tuple[t.Any, ...]] = []
    host = BehaveHost()
    host.define_parameter_type(_who_type())
    host.define_step("{who__T_0} waits {int} minutes", lambda *a: calls.append(a))

    assert fake_behave.steps[0][0] == "{:who__T_0} waits {:typed_steps_int} minutes"
    context = object()
    fake_behave.run("alice waits 3 minutes", context)
    assert calls == [(context, "alice", 3)]


def test_deferred_failures_are_raised_inside_the_step(
    fake_behave: FakeBehave,
) -> None:
    """Decode errors surface when behave runs the step body."""
    host = BehaveHost()
    host.define_parameter_type(_who_type())
    host.define_step("{who__T_0} waves", lambda *a: pytest.fail("not reached"))
    _, run_step = fake_behave.steps[0]
    failure = DeferredTransformError(DecodeError("DecodeError: []"))

    with pytest.raises(DecodeError):
        run_step(object(), failure)


def test_define_step_defaults_to_behave(fake_behave: FakeBehave) -> None:
    """The module-level entry point registers with behave by default."""
    orders: list[tuple[str, list[str]]] = []

    def record(context: object, who: str, items: list[str]) -> None:
        orders.append((who, items))

    define_step(
        "{who} orders [{items}]",
        record,
        {
            "who": parameter_type_sum("alice", "bob"),
            "items": parameter_type_list("tea", "coffee"),
        },
    )
    fake_behave.run("bob orders [coffee, tea]", object())
    fake_behave.run("alice orders []", object())
    assert orders == [("bob", ["coffee", "tea"]), ("alice", [])]


def test_digit_and_sign_leading_names_register(fake_behave: FakeBehave) -> None:
    """Names ``parse`` would misread are registered under encoded type names."""
    calls: list[tuple[t.Any, ...]] = []
    define_step(
        "{2nd} greets {-x}",
        lambda *a: calls.append(a),
        {"2nd": parameter_type_sum("alice"), "-x": parameter_type_sum("bob")},
    )

    assert all(name.isidentifier() for name in fake_behave.types)
    context = object()
    fake_behave.run("alice greets bob", context)
    assert calls == [(context, "alice", "bob")]
