"""Steps running behave on generated projects that use typed_steps."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import os
import re
import shutil
import subprocess
import sys
import tempfile
import typing as t
from pathlib import Path

from behave import given, then, when  # type: ignore[attr-defined]

REPO_ROOT = Path(__file__).resolve().parents[2]

STEPS_TEMPLATE = '''
from behave import then

from typed_steps import define_step, parameter_type_raw


def _even(text):
    value = int(text)
    if value % 2:
        raise ValueError(f"odd number: {{value}}")
    return value


def _record(context, count):
    context.count = count


define_step(
    "the count is {{{name}}}",
    _record,
    {{"{name}": parameter_type_raw(r"\\d+", _even)}},
)


@then("the count was accepted")
def step_accepted(context):
    assert context.count % 2 == 0
'''


class BehaveContext(t.Protocol):
    """Behave step context for nested behave runs."""

    project: Path
    result: subprocess.CompletedProcess[str]


@given('a behave project whose "{name}" placeholder rejects odd numbers')
def step_create_project(context: BehaveContext, name: str) -> None:
    """Write step definitions registering a raw transformer that can fail."""
    project = Path(tempfile.mkdtemp())
    (project / "features" / "steps").mkdir(parents=True)
    (project / "features" / "steps" / "steps_count.py").write_text(
        STEPS_TEMPLATE.format(name=name)
    )
    context.project = project


@when('I run behave on "{text}"')
def step_run_behave(context: BehaveContext, text: str) -> None:
    """Run behave on a single scenario using *text* as its first step."""
    (context.project / "features" / "count.feature").write_text(
        "Feature: Count\n"
        "  Scenario: Count\n"
        f"    Given {text}\n"
        "    Then the count was accepted\n"
    )
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, (str(REPO_ROOT), env.get("PYTHONPATH")))
    )
    context.result = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-m",
            "behave",
            "--no-color",
            "--format",
            "plain",
            "features",
        ],
        capture_output=True,
        text=True,
        cwd=context.project,
        env=env,
    )
    shutil.rmtree(context.project)


def _step_summary(output: str) -> str:
    for line in output.splitlines():
        if re.match(r"\d+ steps? passed", line.strip()):
            return line.strip()
    msg = f"no step summary in behave output:\n{output}"
    raise AssertionError(msg)


@then("behave reports 1 failed step")
def step_check_failed(context: BehaveContext) -> None:
    """The transformer failure was reported against the step."""
    summary = _step_summary(context.result.stdout)
    assert context.result.returncode != 0, context.result.stdout  # noqa: S101
    assert re.search(r"\b1 failed\b", summary), summary  # noqa: S101
    assert not re.search(r"\b[1-9]\d* undefined\b", summary), summary  # noqa: S101


@then("behave reports 0 failed steps")
def step_check_passed(context: BehaveContext) -> None:
    """Every step passed."""
    summary = _step_summary(context.result.stdout)
    assert context.result.returncode == 0, context.result.stdout  # noqa: S101
    assert re.search(r"\b0 failed\b", summary), summary  # noqa: S101


@then('the output mentions "{message}"')
def step_check_output(context: BehaveContext, message: str) -> None:
    """The transformer's error message is part of the report."""
    output = context.result.stdout + context.result.stderr
    assert message in output, output  # noqa: S101
