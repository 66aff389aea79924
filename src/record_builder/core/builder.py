"""Builder synthesis for immutable records.

``@record_builder`` takes a dataclass or pydantic model and attaches a
generated ``Builder`` class plus construction helpers::

    @record_builder(with_methods=True)
    @dataclass(frozen=True)
    class Person:
        id: int
        name: str

    p1 = Person.builder().id(1).name("Angelo").build()
    p2 = Person.builder(p1).id(2).build()        # copy with override
    p3 = p1.with_name("Zero")                     # single-field copy
    p4 = p1.with_(lambda p: p.id(3).name("Jake"))  # bulk copy

Builders are mutable staging objects private to one call chain.  The records
they produce are never modified: every "mutation" is a new instance.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar

from .errors import (
    IncompatibleRecordError,
    InvalidStateError,
    UnknownFieldError,
    UnsupportedShapeError,
)
from .shapes import FieldSpec, field_names, fields_of, is_frozen, values_of

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class RecordBuilder:
    """Base class for generated builders.

    Each field ``x`` of the shape becomes an accessor method: ``b.x(value)``
    stages a value and returns the builder, ``b.x()`` returns the value
    ``build()`` would use for it.
    """

    _shape: ClassVar[type]

    @property
    def _fields(self) -> tuple[FieldSpec, ...]:
        # Resolved on use so forward references declared after the shape work.
        return fields_of(self._shape)

    def __init__(self, existing: Any = None, /, **overrides: Any) -> None:
        self._staged: dict[str, Any] = {}
        if existing is not None:
            self._seed(existing)
        for name, value in overrides.items():
            self._set(name, value)

    @classmethod
    def from_(cls, existing: Any) -> RecordBuilder:
        """Return a builder pre-populated from *existing*."""
        return cls(existing)

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def _seed(self, existing: Any) -> None:
        if not isinstance(existing, self._shape):
            raise IncompatibleRecordError(
                f"{type(self).__name__} cannot be seeded from "
                f"{type(existing).__name__}"
            )
        self._staged.update(values_of(existing))

    def _spec(self, name: str) -> FieldSpec:
        for spec in self._fields:
            if spec.name == name:
                return spec
        raise UnknownFieldError(self._shape.__name__, name)

    def _set(self, name: str, value: Any) -> RecordBuilder:
        self._spec(name)
        self._staged[name] = value
        return self

    def _get(self, name: str) -> Any:
        spec = self._spec(name)
        if name in self._staged:
            return self._staged[name]
        return spec.resolve_default()

    def is_set(self, name: str) -> bool:
        """Whether *name* has been staged (seeded or set explicitly)."""
        self._spec(name)
        return name in self._staged

    def to_dict(self) -> dict[str, Any]:
        """Staged values in field order, unset fields resolved to defaults."""
        return {spec.name: self._get(spec.name) for spec in self._fields}

    # ------------------------------------------------------------------
    # Materialize
    # ------------------------------------------------------------------

    def build(self) -> Any:
        """Return a new record from the staged values.

        Raises:
            InvalidStateError: a mandatory field was never staged.
        """
        missing = tuple(
            spec.name
            for spec in self._fields
            if spec.mandatory and spec.name not in self._staged
        )
        if missing:
            raise InvalidStateError(self._shape.__name__, missing)

        record = self._shape(**self.to_dict())
        logger.debug(
            "Built %s", self._shape.__name__,
            extra={"shape": self._shape.__name__, "staged": sorted(self._staged)},
        )
        return record

    def __repr__(self) -> str:
        staged = ", ".join(f"{k}={v!r}" for k, v in self._staged.items())
        return f"{type(self).__name__}({staged})"


# ---------------------------------------------------------------------------
# Generated members
# ---------------------------------------------------------------------------

def _make_accessor(builder_name: str, name: str) -> Callable[..., Any]:
    def accessor(self: RecordBuilder, value: Any = _UNSET) -> Any:
        if value is _UNSET:
            return self._get(name)
        return self._set(name, value)

    accessor.__name__ = name
    accessor.__qualname__ = f"{builder_name}.{name}"
    accessor.__doc__ = f"Return the staged ``{name}``, or stage a new value and return the builder."
    return accessor


def _make_with(name: str) -> Callable[..., Any]:
    def with_field(self: Any, value: Any) -> Any:
        return type(self).Builder(self)._set(name, value).build()

    with_field.__name__ = f"with_{name}"
    with_field.__doc__ = f"Return a copy of this record with ``{name}`` replaced."
    return with_field


def _with(self: Any, fn: Callable[[RecordBuilder], Any] | None = None) -> Any:
    """Copy this record through a private builder.

    Without *fn*, return the seeded builder for chaining.  With *fn*, call it
    with the seeded builder (its return value is ignored) and build the
    result.

    The builder is private to the call, but seeding is shallow: field values
    are the same objects the original holds.  Mutating a staged list in
    place mutates the original's list; stage a new value instead.
    """
    builder = type(self).Builder(self)
    if fn is None:
        return builder
    fn(builder)
    return builder.build()


def _builder(cls: type, existing: Any = None, /, **overrides: Any) -> RecordBuilder:
    """Return a fresh builder, or one seeded from *existing*."""
    return cls.Builder(existing, **overrides)


def _check_free(cls: type, name: str) -> None:
    if name in vars(cls):
        raise UnsupportedShapeError(
            f"{cls.__name__} already defines {name!r}; cannot generate it"
        )


def _process(cls: type, with_methods: bool) -> type:
    names = field_names(cls)
    builder_name = f"{cls.__name__}Builder"

    namespace: dict[str, Any] = {
        "__module__": cls.__module__,
        "__qualname__": f"{cls.__qualname__}Builder",
        "__doc__": f"Builder for :class:`{cls.__name__}`.",
        "_shape": cls,
    }
    for name in names:
        if hasattr(RecordBuilder, name) or name.startswith("_"):
            raise UnsupportedShapeError(
                f"{cls.__name__}.{name} clashes with a builder member"
            )
        namespace[name] = _make_accessor(builder_name, name)
    builder_cls = type(builder_name, (RecordBuilder,), namespace)

    _check_free(cls, "Builder")
    _check_free(cls, "builder")
    cls.Builder = builder_cls
    cls.builder = classmethod(_builder)

    if with_methods:
        if not is_frozen(cls):
            raise UnsupportedShapeError(
                f"{cls.__name__} is mutable; with-helpers need a frozen shape"
            )
        _check_free(cls, "with_")
        cls.with_ = _with
        for name in names:
            helper = _make_with(name)
            _check_free(cls, helper.__name__)
            helper.__qualname__ = f"{cls.__qualname__}.{helper.__name__}"
            setattr(cls, helper.__name__, helper)

    logger.debug(
        "Generated %s", builder_name,
        extra={"fields": list(names), "with_methods": with_methods},
    )
    return cls


def record_builder(cls: type | None = None, /, *, with_methods: bool = False) -> Any:
    """Class decorator adding ``Builder``, ``builder()`` and copy helpers.

    Usable bare (``@record_builder``) or with options
    (``@record_builder(with_methods=True)``).  Apply it on top of
    ``@dataclass``, or directly on a pydantic model.

    Args:
        with_methods: Also add ``with_<field>(value)`` and ``with_(fn)`` to
            the record.  Requires a frozen shape.
    """

    def wrap(cls: type) -> type:
        return _process(cls, with_methods)

    if cls is None:
        return wrap
    return wrap(cls)
