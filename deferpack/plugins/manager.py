"""Plugin dispatch for session lifecycle events, with per-context activation."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator
import warnings

from deferpack.plugins.base import LifecycleEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    """A hook that raised; the session carried on without it."""

    plugin_name: str
    hook: str
    session_id: str
    error_type: str
    message: str


@dataclass(slots=True)
class PluginManager:
    """Delivers session events to plugins. A failing hook never reaches the session."""

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)

    def emit(self, event: LifecycleEvent) -> None:
        for plugin in self.plugins:
            callback = getattr(plugin, event.hook, None)
            if callback is None:
                continue
            try:
                callback(event)
            except Exception as error:
                self._isolate(plugin, event, error)

    def _isolate(self, plugin: object, event: LifecycleEvent, error: Exception) -> None:
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", type(plugin).__name__)),
            hook=event.hook,
            session_id=event.session_id,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(
            f"DeferKit plugin {diagnostic.plugin_name!r} failed in {diagnostic.hook} "
            f"for session {diagnostic.session_id}: {diagnostic.error_type}: {diagnostic.message}",
            RuntimeWarning,
            stacklevel=3,
        )


_ACTIVE_PLUGIN_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "deferpack_active_plugin_manager",
    default=None,
)
_NO_PLUGINS = PluginManager()


def get_active_plugin_manager() -> PluginManager:
    """Manager that sessions opened in the current context report to."""
    return _ACTIVE_PLUGIN_MANAGER.get() or _NO_PLUGINS


@contextmanager
def use_plugins(*plugins: object) -> Iterator[PluginManager]:
    """Attach ``plugins`` to every session opened inside the block."""
    manager = PluginManager(plugins=plugins)
    token = _ACTIVE_PLUGIN_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_PLUGIN_MANAGER.reset(token)
