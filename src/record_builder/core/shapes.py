"""Shape introspection for record classes.

A *shape* is the ordered, fixed set of named fields a record type declares.
Two kinds of classes are understood:

* dataclasses (``@dataclass`` / ``@dataclass(frozen=True)``)
* pydantic models (``BaseModel``, frozen via ``ConfigDict(frozen=True)``)

Everything the builder needs to know about a shape (field order, declared
types, defaults, which fields are mandatory) comes from :func:`fields_of`.
"""

from __future__ import annotations

import dataclasses
import sys
import types
import typing
from dataclasses import MISSING, dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Union

from pydantic import BaseModel, Field

from .errors import UnsupportedShapeError

# Metadata key marking a field that must be staged before ``build()``.
MANDATORY = "mandatory"

_SCALAR_ZEROS: dict[Any, Any] = {
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bool: False,
    bytes: b"",
    Decimal: Decimal("0"),
}

_CONTAINERS = (list, tuple, dict, set, frozenset)


@dataclass(frozen=True)
class FieldSpec:
    """One declared field of a shape."""

    name: str
    annotation: Any
    default: Any = MISSING
    default_factory: Callable[[], Any] | Any = MISSING
    mandatory: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not MISSING

    def resolve_default(self) -> Any:
        """Value used when the field is left unset on a builder."""
        if self.default is not MISSING:
            return self.default
        if self.default_factory is not MISSING:
            return self.default_factory()
        return zero_value(self.annotation)


def mandatory(**kwargs: Any) -> Any:
    """Declare a dataclass field that builders must set explicitly.

    Example::

        @dataclass(frozen=True)
        class Account:
            number: str = mandatory()
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[MANDATORY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def mandatory_field(**kwargs: Any) -> Any:
    """Pydantic counterpart of :func:`mandatory`."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[MANDATORY] = True
    return Field(json_schema_extra=extra, **kwargs)


def zero_value(annotation: Any) -> Any:
    """Return the zero value for a declared type.

    Optional types yield ``None``; scalars yield their empty value; builtin
    containers yield an empty instance.  ``Literal`` types yield their first
    value and enums their first member.  Anything else yields ``None``.
    """
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        if type(None) in typing.get_args(annotation):
            return None
        return zero_value(typing.get_args(annotation)[0])
    if origin is typing.Annotated:
        return zero_value(typing.get_args(annotation)[0])
    if origin is typing.Literal:
        return typing.get_args(annotation)[0]
    if origin in _CONTAINERS:
        return origin()
    if annotation in _CONTAINERS:
        return annotation()
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return next(iter(annotation), None)
    try:
        return _SCALAR_ZEROS.get(annotation)
    except TypeError:  # unhashable annotation objects
        return None


def is_dataclass_shape(cls: type) -> bool:
    return isinstance(cls, type) and dataclasses.is_dataclass(cls)


def is_pydantic_shape(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def is_frozen(cls: type) -> bool:
    """Whether instances of *cls* reject attribute assignment."""
    if is_dataclass_shape(cls):
        return bool(cls.__dataclass_params__.frozen)
    if is_pydantic_shape(cls):
        return bool(cls.model_config.get("frozen", False))
    raise UnsupportedShapeError(f"{cls!r} is not a dataclass or pydantic model")


def field_names(cls: type) -> tuple[str, ...]:
    """Declared field names of a shape, without resolving their types."""
    if is_dataclass_shape(cls):
        return tuple(f.name for f in dataclasses.fields(cls) if f.init)
    if is_pydantic_shape(cls):
        return tuple(cls.model_fields)
    raise UnsupportedShapeError(
        f"{getattr(cls, '__name__', cls)!r} is not a dataclass or pydantic model"
    )


def _resolve(cls: type, annotation: Any) -> Any:
    """Evaluate a string annotation in the namespace of *cls*.

    The class itself is visible under its own name, so self-references
    resolve while the decorator runs.  Unresolvable names are returned as
    the raw string.
    """
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {cls.__name__: cls}
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def _is_resolved(specs: tuple[FieldSpec, ...]) -> bool:
    return not any(isinstance(s.annotation, str) for s in specs)


def _dataclass_specs(cls: type) -> tuple[FieldSpec, ...]:
    return tuple(
        FieldSpec(
            name=f.name,
            annotation=_resolve(cls, f.type),
            default=f.default,
            default_factory=f.default_factory,
            mandatory=bool(f.metadata.get(MANDATORY, False)),
        )
        for f in dataclasses.fields(cls)
        if f.init
    )


def _pydantic_specs(cls: type) -> tuple[FieldSpec, ...]:
    specs = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        if info.is_required():
            default, factory = MISSING, MISSING
        elif info.default_factory is not None:
            default, factory = MISSING, info.default_factory
        else:
            default, factory = info.default, MISSING
        specs.append(
            FieldSpec(
                name=name,
                annotation=_resolve(cls, info.annotation),
                default=default,
                default_factory=factory,
                mandatory=bool(extra.get(MANDATORY, False)),
            )
        )
    return tuple(specs)


_resolved_fields: dict[type, tuple[FieldSpec, ...]] = {}


def fields_of(cls: type) -> tuple[FieldSpec, ...]:
    """Return the ordered field specs of a dataclass or pydantic model.

    Annotations are resolved one field at a time.  A field that still names
    an undefined type (a forward reference to a class declared later) keeps
    its string annotation and is retried on the next call; only fully
    resolved shapes are cached.
    """
    cached = _resolved_fields.get(cls)
    if cached is not None:
        return cached

    if is_dataclass_shape(cls):
        specs = _dataclass_specs(cls)
    elif is_pydantic_shape(cls):
        specs = _pydantic_specs(cls)
    else:
        raise UnsupportedShapeError(
            f"{getattr(cls, '__name__', cls)!r} is not a dataclass or pydantic model"
        )

    if _is_resolved(specs):
        _resolved_fields[cls] = specs
    return specs


def values_of(instance: Any) -> dict[str, Any]:
    """Field values of *instance* in declaration order."""
    return {f.name: getattr(instance, f.name) for f in fields_of(type(instance))}
