"""Capability surface descriptions for interceptable target systems.

A capability surface is the fixed set of operations a target object exposes.
Surfaces are declared as ``typing.Protocol`` classes (or plain classes marked
with :func:`capability_surface`); the return annotation of each operation decides
whether a recorded call returns nothing, a further interceptable surface, or is
unsupported.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from functools import lru_cache
import inspect
import typing
from typing import Any, Generic, Mapping, Protocol, TypeVar

from deferpack.core.types import ResultKind

_SURFACE_MARKER = "__capability_surface__"
_SKIPPED_BASES = frozenset({object, Protocol, Generic, ABC})
_UNANNOTATED = inspect.Signature.empty
SURFACE_CACHE_SIZE = 256

C = TypeVar("C", bound=type)


def capability_surface(cls: C) -> C:
    """Mark a plain class as an interceptable capability surface."""
    setattr(cls, _SURFACE_MARKER, True)
    return cls


def is_surface_type(value: Any) -> bool:
    """Return whether ``value`` (or its generic origin) is a declared surface."""
    origin = typing.get_origin(value) or value
    if not isinstance(origin, type) or origin in _SKIPPED_BASES:
        return False
    if origin.__dict__.get(_SURFACE_MARKER, False):
        return True
    return bool(getattr(origin, "_is_protocol", False))


@dataclass(frozen=True, slots=True)
class Selector:
    """Identity of one operation on a capability surface."""

    surface: str
    name: str

    def __str__(self) -> str:
        return f"{self.surface}.{self.name}"


@dataclass(frozen=True, slots=True)
class Operation:
    """A declared operation and the kind of result it produces."""

    selector: Selector
    signature: inspect.Signature
    result_kind: ResultKind
    result_type: Any = None

    def result_surface(self) -> "CapabilitySurface":
        if self.result_kind != "chainable":
            raise TypeError(f"{self.selector} does not return a capability surface")
        return surface_of(self.result_type)

    def describe_result(self) -> str:
        if self.result_kind == "void":
            return "None"
        if self.result_type is _UNANNOTATED:
            return "<unannotated>"
        return _type_name(self.result_type)


@dataclass(frozen=True, slots=True)
class CapabilitySurface:
    """Operations exposed by one surface type, keyed by name."""

    type: type
    name: str
    operations: Mapping[str, Operation] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.operations

    def operation(self, name: str) -> Operation:
        try:
            return self.operations[name]
        except KeyError:
            raise AttributeError(
                f"{self.name} has no operation {name!r}; "
                f"available: {', '.join(sorted(self.operations)) or '<none>'}"
            ) from None


@lru_cache(maxsize=SURFACE_CACHE_SIZE)
def surface_of(surface_type: type) -> CapabilitySurface:
    """Describe ``surface_type`` as a :class:`CapabilitySurface` (cached)."""
    origin = typing.get_origin(surface_type) or surface_type
    if not is_surface_type(origin):
        raise TypeError(
            f"{_type_name(origin)} is not a capability surface; declare it as a "
            "typing.Protocol or decorate it with @capability_surface."
        )

    name = origin.__name__
    operations: dict[str, Operation] = {}
    for base in reversed(origin.__mro__):
        if not is_surface_type(base):
            continue
        for member_name, member in vars(base).items():
            if member_name.startswith("_") or not inspect.isfunction(member):
                continue
            operations[member_name] = _describe_operation(origin, name, member_name, member)

    return CapabilitySurface(type=origin, name=name, operations=operations)


def _describe_operation(owner: type, surface_name: str, name: str, function: Any) -> Operation:
    selector = Selector(surface=surface_name, name=name)
    try:
        hints = typing.get_type_hints(function)
    except NameError as error:
        raise TypeError(f"Cannot resolve annotations of {selector}: {error}") from error

    signature = inspect.signature(function)
    parameters = list(signature.parameters.values())[1:]
    signature = signature.replace(parameters=parameters, return_annotation=_UNANNOTATED)

    result_kind, result_type = _classify_result(owner, hints.get("return", _UNANNOTATED))
    return Operation(
        selector=selector,
        signature=signature,
        result_kind=result_kind,
        result_type=result_type,
    )


def _classify_result(owner: type, annotation: Any) -> tuple[ResultKind, Any]:
    if annotation is None or annotation is type(None):
        return "void", None
    if annotation is typing.Self:
        return "chainable", owner
    if is_surface_type(annotation):
        return "chainable", typing.get_origin(annotation) or annotation
    return "unsupported", annotation


def _type_name(value: Any) -> str:
    if isinstance(value, type):
        return value.__qualname__
    return repr(value)
