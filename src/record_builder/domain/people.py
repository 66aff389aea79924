"""Person shapes.

``PersonRecord`` only gets a builder.  ``NewPersonRecord`` also gets the
``with_*`` copy helpers.  ``PersonB`` is a mutable bean-style model built the
same way, kept for comparison with the immutable records.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from record_builder.core.builder import record_builder


@record_builder
@dataclass(frozen=True)
class PersonRecord:
    id: int
    name: str


@record_builder(with_methods=True)
@dataclass(frozen=True)
class NewPersonRecord:
    id: int
    name: str


@record_builder
class PersonB(BaseModel):
    """Mutable person; supports no-arg and all-arg construction."""

    id: int | None = None
    name: str | None = None
