"""Demonstration scenarios for builder and copy-mutation helpers.

Each scenario returns the records it produced and the ``"Label: value"``
lines describing them; :func:`run_demo` writes the lines out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from record_builder.core.shapes import values_of
from record_builder.domain.people import NewPersonRecord, PersonRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioResult:
    """Records produced by a scenario, keyed by label, plus its output lines."""

    name: str
    records: dict[str, Any] = field(default_factory=dict)
    lines: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {label: values_of(r) for label, r in self.records.items()}


def foo() -> ScenarioResult:
    """Fresh builder, then a seeded builder overriding ``id``."""
    angelo = PersonRecord.builder().id(1).name("Angelo").build()
    angelo_with_new_id = PersonRecord.builder(angelo).id(2).build()

    lines = (
        f"Name: {angelo.name}",
        f"Old id: {angelo.id}",
        f"New id: {angelo_with_new_id.id}",
    )
    return ScenarioResult(
        name="foo",
        records={"angelo": angelo, "angelo_with_new_id": angelo_with_new_id},
        lines=lines,
    )


def _cool_java(person: NewPersonRecord.Builder) -> None:
    if person.name() == "Java":
        person.name(person.name() + " is cool!")


def bar() -> ScenarioResult:
    """Chained ``with_*`` copies, bulk copies and a static ``from_`` seed."""
    p1 = NewPersonRecord(1, "Angelo")
    p2 = p1.with_name("Zero")
    p3 = p2.with_id(2)
    p4 = p3.with_().id(3).name("Jake").build()
    p5 = p4.with_(lambda person: person.id(4).name("Java"))
    p6 = p5.with_(_cool_java)
    p7 = NewPersonRecord.Builder.from_(p6).id(25).build()

    records = {f"P{i}": p for i, p in enumerate((p1, p2, p3, p4, p5, p6, p7), start=1)}
    lines = tuple(
        f"{label} - name: {p.name} id: {p.id}" for label, p in records.items()
    )
    return ScenarioResult(name="bar", records=records, lines=lines)


SCENARIO_REGISTRY: dict[str, Callable[[], ScenarioResult]] = {"foo": foo, "bar": bar}


def run_demo(
    echo: Callable[[str], Any] = print,
    scenarios: list[str] | tuple[str, ...] = tuple(SCENARIO_REGISTRY),
) -> list[ScenarioResult]:
    """Run the named scenarios and write their lines through *echo*.

    A blank line follows each scenario except the last.
    """
    results = []
    for i, name in enumerate(scenarios):
        result = SCENARIO_REGISTRY[name]()
        logger.info("Scenario %s produced %d records", name, len(result.records))
        for line in result.lines:
            echo(line)
        if i < len(scenarios) - 1:
            echo("")
        results.append(result)
    return results
