"""Replay subsystem exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deferpack.core.models import Invocation


class ReplayError(Exception):
    """Base class for replay errors."""


class ReplayConfigError(ReplayError):
    """Replay was triggered on a session that cannot be replayed as configured."""


class EmptySessionError(ReplayConfigError):
    """Replay was triggered before any call was recorded."""


class ReplayExecutionError(ReplayError):
    """A replayed call raised; the calls after it were not executed.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, invocation: "Invocation", *, skipped: int, error: BaseException) -> None:
        self.invocation = invocation
        self.skipped = skipped
        super().__init__(
            f"Replay of call #{invocation.index} {invocation.describe()} failed: "
            f"{error.__class__.__name__}: {error} ({skipped} remaining call(s) not executed)"
        )
