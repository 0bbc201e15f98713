"""Core data models for recorded invocations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from deferpack.core.canonical import canonicalize
from deferpack.core.surface import Selector


@dataclass(frozen=True, slots=True)
class Invocation:
    """One intercepted call, in log order."""

    index: int
    selector: Selector
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    root: bool = True
    parent_index: int | None = None

    def execute(self, receiver: Any) -> Any:
        """Invoke the recorded operation on ``receiver`` and return its result."""
        method = getattr(receiver, self.selector.name)
        return method(*self.args, **self.kwargs)

    def describe(self) -> str:
        rendered = [_render_argument(value) for value in self.args]
        rendered.extend(f"{key}={_render_argument(value)}" for key, value in self.kwargs.items())
        return f"{self.selector}({', '.join(rendered)})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "selector": str(self.selector),
            "root": self.root,
            "parent_index": self.parent_index,
            "args": canonicalize(list(self.args)),
            "kwargs": canonicalize(dict(self.kwargs)),
        }


def _render_argument(value: Any) -> str:
    if isinstance(value, type) or hasattr(value, "__qualname__"):
        return value.__qualname__
    return repr(value)
