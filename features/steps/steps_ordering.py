"""Step definitions registered with behave through typed_steps."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import typing as t

from behave import then  # type: ignore[attr-defined]

from typed_steps import define_step, parameter_type_list, parameter_type_sum

WHO = parameter_type_sum("alice", "bob")
DRINKS = parameter_type_list("tea", "coffee")


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    who: str
    drinks: list[str]


def step_order(context: BehaveContext, who: str, drinks: list[str]) -> None:
    """Record an order for *who*."""
    context.who = who
    context.drinks = drinks


def step_order_many(
    context: BehaveContext, who: str, count: int, drinks: list[str]
) -> None:
    """Record *count* rounds of *drinks* for *who*."""
    context.who = who
    context.drinks = drinks * count


define_step("{who} orders [{drinks}]", step_order, {"who": WHO, "drinks": DRINKS})
define_step(
    "{who} orders {int} of [{drinks}]",
    step_order_many,
    {"who": WHO, "drinks": DRINKS},
)


@then('the order is for "{who}" with {count:d} drinks')
def step_check_order(context: BehaveContext, who: str, count: int) -> None:
    """Verify the decoded order."""
    assert context.who == who  # noqa: S101
    assert len(context.drinks) == count  # noqa: S101
    assert set(context.drinks) <= {"tea", "coffee"}  # noqa: S101
