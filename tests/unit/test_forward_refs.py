"""Tests for shapes whose annotations refer to themselves or to later classes."""

from __future__ import annotations

from dataclasses import dataclass

from record_builder.core.builder import record_builder
from record_builder.core.shapes import fields_of


@record_builder(with_methods=True)
@dataclass(frozen=True)
class Node:
    id: int
    name: str
    parent: Node | None = None


@record_builder
@dataclass(frozen=True)
class Shipment:
    id: int
    label: str
    carrier: Carrier | None = None


@dataclass(frozen=True)
class Carrier:
    code: str


class TestSelfReference:
    def test_unset_fields_take_zero_values(self):
        node = Node.builder().build()
        assert (node.id, node.name, node.parent) == (0, "", None)

    def test_annotation_resolved(self):
        by_name = {s.name: s for s in fields_of(Node)}
        assert by_name["id"].annotation is int
        assert by_name["parent"].annotation == (Node | None)

    def test_with_parent(self):
        root = Node(1, "root")
        child = Node.builder().id(2).name("child").parent(root).build()
        assert child.with_name("leaf").parent is root


class TestForwardReference:
    def test_unset_fields_take_zero_values(self):
        shipment = Shipment.builder().build()
        assert (shipment.id, shipment.label, shipment.carrier) == (0, "", None)

    def test_later_class_resolved_on_use(self):
        by_name = {s.name: s for s in fields_of(Shipment)}
        assert by_name["carrier"].annotation == (Carrier | None)


class TestUnresolvableReference:
    def test_other_fields_still_resolved(self):
        @record_builder
        @dataclass(frozen=True)
        class Dangling:
            id: int
            other: Undefined | None = None  # noqa: F821

        record = Dangling.builder().build()
        assert record.id == 0
        assert record.other is None
        by_name = {s.name: s for s in fields_of(Dangling)}
        assert by_name["id"].annotation is int
        assert by_name["other"].annotation == "Undefined | None"
