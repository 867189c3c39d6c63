"""Register typed step phrases with a step-execution host."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from .compiler import register_parameter_type
from .config import RegistrarSettings
from .errors import DefinitionMismatchError
from .placeholders import (
    Placeholder,
    extract_placeholders,
    new_token,
    required_names,
    rewrite_phrase,
)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from pydantic import TypeAdapter

    from .host import StepHost
    from .parameter_types import ParameterTypeDefinition

logger = logging.getLogger(__name__)

Definitions = t.Mapping[str, "ParameterTypeDefinition"]


@dc.dataclass(frozen=True, slots=True)
class StepRegistration:
    """Outcome of registering one step phrase."""

    phrase: str
    expression: str
    placeholders: tuple[Placeholder, ...]
    decoders: dict[str, TypeAdapter[t.Any]]


class StepRegistrar:
    """Turn phrases and parameter definitions into host registrations.

    Parameters
    ----------
    host : StepHost
        Registry receiving parameter types and step expressions.
    token_factory : Callable[[], str], optional
        Source of the per-registration token appended to placeholder names.
        Defaults to random UUID hex strings.
    settings : RegistrarSettings | None, optional
        Defaults to :meth:`RegistrarSettings.from_env`.
    """

    def __init__(
        self,
        host: StepHost,
        *,
        token_factory: t.Callable[[], str] = new_token,
        settings: RegistrarSettings | None = None,
    ) -> None:
        self.host = host
        self.token_factory = token_factory
        self.settings = (
            settings if settings is not None else RegistrarSettings.from_env()
        )

    def check_definitions(self, phrase: str, definitions: Definitions) -> None:
        """Ensure *definitions* name exactly the placeholders of *phrase*."""
        required = required_names(phrase)
        missing = [name for name in required if name not in definitions]
        unused = [name for name in definitions if name not in required]
        if missing or (unused and not self.settings.allow_unused_definitions):
            raise DefinitionMismatchError(phrase, missing=missing, unused=unused)
        for name in unused:
            logger.warning("Ignoring unused definition %r for step %r", name, phrase)

    def define_step(
        self,
        phrase: str,
        implementation: t.Callable[..., t.Any],
        definitions: Definitions | None = None,
    ) -> StepRegistration:
        """Register *phrase* with the host, calling *implementation* on match.

        Each placeholder occurrence gets its own parameter type, registered
        under a unique name. *implementation* receives whatever arguments the
        host passes for a match, in the host's order.
        """
        definitions = definitions or {}
        self.check_definitions(phrase, definitions)

        token = self.token_factory()
        placeholders = tuple(
            extract_placeholders(phrase, token, separator=self.settings.separator)
        )
        decoders = {
            placeholder.unique_name: register_parameter_type(
                definitions[placeholder.name], placeholder.unique_name, self.host
            )
            for placeholder in placeholders
        }
        expression = rewrite_phrase(phrase, placeholders)

        def trampoline(*args: t.Any) -> t.Any:  # noqa: ANN401 - host-defined values
            return implementation(*args)

        self.host.define_step(expression, trampoline)
        logger.debug("Registered step %r as %r", phrase, expression)
        return StepRegistration(phrase, expression, placeholders, decoders)


def define_step(
    phrase: str,
    implementation: t.Callable[..., t.Any],
    definitions: Definitions | None = None,
    *,
    host: StepHost | None = None,
) -> StepRegistration:
    """Register a typed step, with behave as the default host.

    Parameters
    ----------
    phrase : str
        Step text; placeholders are written ``{name}``. The built-in names
        ``int``, ``float``, ``string`` and ``word`` need no definition.
    implementation : Callable
        Called with the decoded arguments in placeholder order.
    definitions : Mapping[str, ParameterTypeDefinition] | None, optional
        One definition per non-built-in placeholder name.
    host : StepHost | None, optional
        Defaults to a :class:`~typed_steps.behave_host.BehaveHost`.
    """
    if host is None:
        from .behave_host import BehaveHost

        host = BehaveHost()
    return StepRegistrar(host).define_step(phrase, implementation, definitions)


__all__ = [
    "Definitions",
    "StepRegistrar",
    "StepRegistration",
    "define_step",
]
