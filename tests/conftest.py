"""Shared fixtures for the record-builder test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, ConfigDict

from record_builder.core.builder import record_builder
from record_builder.core.shapes import mandatory
from record_builder.domain.people import NewPersonRecord


# ---------------------------------------------------------------------------
# Test shapes
# ---------------------------------------------------------------------------

@record_builder(with_methods=True)
@dataclass(frozen=True)
class Account:
    number: str = mandatory()
    owner: str = "nobody"
    balance: float = 0.0
    tags: tuple[str, ...] = ()
    notes: list[str] = field(default_factory=list)
    parent: str | None = None


@record_builder(with_methods=True)
class FrozenPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int = 7
    label: str | None = None


# ---------------------------------------------------------------------------
# Person fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def angelo() -> NewPersonRecord:
    """Return the canonical starting record ``{id: 1, name: "Angelo"}``."""
    return NewPersonRecord(1, "Angelo")


@pytest.fixture
def account_cls() -> type[Account]:
    return Account


@pytest.fixture
def point_cls() -> type[FrozenPoint]:
    return FrozenPoint
