"""Deterministic, JSON-compatible rendering of recorded call arguments."""

from __future__ import annotations

import json
import math
from typing import Any


def canonicalize(value: Any) -> Any:
    """Normalize values to a deterministic, JSON-compatible representation.

    Recorded call arguments are opaque, so anything without a JSON form is
    replaced by its textual description (see :func:`describe_opaque`).
    """
    if isinstance(value, dict):
        return {
            str(key): canonicalize(value[key])
            for key in sorted(value.keys(), key=lambda raw: str(raw))
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, (set, frozenset)):
        return sorted((canonicalize(item) for item in value), key=_stable_item_sort_key)

    if isinstance(value, str):
        return value.replace("\r\n", "\n").replace("\r", "\n")

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return repr(value)
        return float(f"{value:.12g}")

    return describe_opaque(value)


def canonical_json(value: Any) -> str:
    """Serialize a value to stable canonical JSON."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=True,
        separators=(",", ":"),
        sort_keys=True,
    )


def describe_opaque(value: Any) -> str:
    """Describe a value that has no JSON form.

    Classes and functions are named by ``module.qualname``; any other object
    by its type alone, so the description does not vary between processes.
    """
    if isinstance(value, type) or hasattr(value, "__qualname__"):
        return f"{getattr(value, '__module__', None) or '?'}.{value.__qualname__}"
    kind = type(value)
    return f"<{kind.__module__}.{kind.__qualname__} object>"


def _stable_item_sort_key(item: Any) -> str:
    return json.dumps(item, ensure_ascii=True, separators=(",", ":"), sort_keys=True)
