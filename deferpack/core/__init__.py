"""Core models and deterministic primitives for DeferKit."""

from deferpack.core.canonical import canonical_json, canonicalize, describe_opaque
from deferpack.core.entrypoints import EntrypointError, resolve_entrypoint
from deferpack.core.models import Invocation
from deferpack.core.surface import (
    CapabilitySurface,
    Operation,
    Selector,
    capability_surface,
    is_surface_type,
    surface_of,
)
from deferpack.core.types import RESULT_KINDS, SESSION_STATES, ResultKind, SessionState

__all__ = [
    "Invocation",
    "Selector",
    "Operation",
    "CapabilitySurface",
    "capability_surface",
    "is_surface_type",
    "surface_of",
    "RESULT_KINDS",
    "ResultKind",
    "SESSION_STATES",
    "SessionState",
    "canonicalize",
    "canonical_json",
    "describe_opaque",
    "EntrypointError",
    "resolve_entrypoint",
]
