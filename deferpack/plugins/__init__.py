"""Lifecycle plugins for DeferKit sessions."""

from deferpack.plugins.base import (
    LifecycleEvent,
    LifecyclePlugin,
    RecordEvent,
    ReplayCallEvent,
    ReplayEndEvent,
    ReplayStartEvent,
    SessionStartEvent,
)
from deferpack.plugins.manager import (
    PluginDiagnostic,
    PluginManager,
    get_active_plugin_manager,
    use_plugins,
)

__all__ = [
    "LifecycleEvent",
    "SessionStartEvent",
    "RecordEvent",
    "ReplayStartEvent",
    "ReplayCallEvent",
    "ReplayEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "get_active_plugin_manager",
    "use_plugins",
]
