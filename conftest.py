"""Global test configuration and shared fixtures."""

from __future__ import annotations

import pytest

from typed_steps.config import ALLOW_UNUSED_DEFINITIONS_ENV, NAME_SEPARATOR_ENV

pytest_plugins = ("typed_steps.pytest_plugin",)


@pytest.fixture(autouse=True)
def reset_registrar_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure registrar settings are not leaked in from the environment."""
    monkeypatch.delenv(ALLOW_UNUSED_DEFINITIONS_ENV, raising=False)
    monkeypatch.delenv(NAME_SEPARATOR_ENV, raising=False)
