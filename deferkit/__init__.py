"""Stable public API surface for DeferKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any

from deferpack.capture import (
    CaptureError,
    ChainOrderError,
    DeferredModule,
    InterceptionPolicy,
    Interceptor,
    OperationPolicyError,
    RecordingSession,
    SessionSpentError,
    UnsupportedResultTypeError,
)
from deferpack.core import capability_surface, surface_of
from deferpack.plugins import LifecyclePlugin, use_plugins
from deferpack.replay import (
    EmptySessionError,
    ReplayConfigError,
    ReplayError,
    ReplayExecutionError,
    ReplayReport,
)

__version__ = "0.1.0"


def record(
    surface: type,
    *,
    policy: InterceptionPolicy | None = None,
    session_id: str | None = None,
) -> RecordingSession:
    """Open a recording session whose ``root`` imitates ``surface``."""
    return RecordingSession.open(surface, session_id=session_id, policy=policy)


def replay(session: RecordingSession, target: Any) -> ReplayReport:
    """Replay every call recorded in ``session`` against ``target``."""
    return session.replay(target)


__all__ = [
    "__version__",
    "record",
    "replay",
    "use_plugins",
    "LifecyclePlugin",
    "capability_surface",
    "surface_of",
    "DeferredModule",
    "InterceptionPolicy",
    "Interceptor",
    "RecordingSession",
    "ReplayReport",
    "CaptureError",
    "UnsupportedResultTypeError",
    "OperationPolicyError",
    "ChainOrderError",
    "SessionSpentError",
    "ReplayError",
    "ReplayConfigError",
    "EmptySessionError",
    "ReplayExecutionError",
]
