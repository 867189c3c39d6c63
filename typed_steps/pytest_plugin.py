"""Pytest plugin providing typed step registration fixtures."""

from __future__ import annotations

import dataclasses as dc

import pytest

from .config import RegistrarSettings, parse_bool
from .parse_host import ParseStepHost
from .registrar import StepRegistrar


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options for the plugin."""
    parser.addini(
        "typed_steps_allow_unused_definitions",
        (
            "Log and skip parameter definitions that a step phrase does not "
            "use instead of rejecting them. Overrides "
            "TYPED_STEPS_ALLOW_UNUSED_DEFINITIONS."
        ),
        type="string",
        default="",
    )


def settings_from_config(config: pytest.Config) -> RegistrarSettings:
    """Combine environment settings with the ini override, if present."""
    settings = RegistrarSettings.from_env()
    raw = str(config.getini("typed_steps_allow_unused_definitions")).strip()
    if not raw:
        return settings
    return dc.replace(settings, allow_unused_definitions=parse_bool(raw))


@pytest.fixture
def step_host() -> ParseStepHost:
    """Return a fresh in-process step host."""
    return ParseStepHost()


@pytest.fixture
def step_registrar(
    request: pytest.FixtureRequest, step_host: ParseStepHost
) -> StepRegistrar:
    """Return a registrar bound to the ``step_host`` fixture."""
    return StepRegistrar(step_host, settings=settings_from_config(request.config))


__all__ = ["settings_from_config", "step_host", "step_registrar"]
