"""Replay subsystem for DeferKit."""

from deferpack.replay.engine import ReplayReport, replay_invocations, replay_session
from deferpack.replay.exceptions import (
    EmptySessionError,
    ReplayConfigError,
    ReplayError,
    ReplayExecutionError,
)

__all__ = [
    "ReplayError",
    "ReplayConfigError",
    "EmptySessionError",
    "ReplayExecutionError",
    "ReplayReport",
    "replay_invocations",
    "replay_session",
]
