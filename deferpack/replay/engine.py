"""Replay engine that re-issues recorded calls against a real target."""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable

from deferpack.capture.exceptions import SessionSpentError
from deferpack.core.models import Invocation
from deferpack.plugins import ReplayCallEvent, ReplayEndEvent, ReplayStartEvent
from deferpack.replay.exceptions import EmptySessionError, ReplayExecutionError

if TYPE_CHECKING:
    from deferpack.capture.recorder import RecordingSession


@dataclass(frozen=True, slots=True)
class ReplayReport:
    """Outcome of a completed replay pass."""

    session_id: str
    surface: str
    executed_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def replay_invocations(
    invocations: deque[Invocation],
    target: Any,
    *,
    on_call: Callable[[Invocation], None] | None = None,
) -> int:
    """Drain ``invocations`` front-to-back, executing each against a live receiver.

    Root calls run against ``target``. Chained calls run against whatever the
    call immediately before them returned. The first failure halts the pass and
    is raised as :class:`ReplayExecutionError`. Returns the number of executed calls.
    """
    chain_target = target
    executed = 0
    while invocations:
        invocation = invocations.popleft()
        receiver = target if invocation.root else chain_target
        if on_call is not None:
            on_call(invocation)
        try:
            chain_target = invocation.execute(receiver)
        except Exception as error:
            raise ReplayExecutionError(
                invocation,
                skipped=len(invocations),
                error=error,
            ) from error
        executed += 1
    return executed


def replay_session(session: "RecordingSession", target: Any) -> ReplayReport:
    """Replay a recording session against the real target exactly once."""
    if session.state != "recording":
        raise SessionSpentError(
            f"Session {session.session_id} was already replayed; "
            "record into a new session to replay again."
        )
    if not session.invocations:
        raise EmptySessionError(session.usage_hint or _default_usage_hint(session))

    # Flip before executing so calls recorded from inside the target are rejected.
    session.state = "replayed"
    manager = session.plugin_manager
    invocation_count = len(session.invocations)
    manager.emit(
        ReplayStartEvent(
            session_id=session.session_id,
            surface=session.surface.name,
            invocation_count=invocation_count,
        )
    )

    def notify(invocation: Invocation) -> None:
        manager.emit(
            ReplayCallEvent(
                session_id=session.session_id,
                index=invocation.index,
                selector=str(invocation.selector),
                root=invocation.root,
            )
        )

    executed = 0
    status = "error"
    error_type: str | None = None
    error_message: str | None = None
    try:
        executed = replay_invocations(session.invocations, target, on_call=notify)
        status = "ok"
    except ReplayExecutionError as error:
        executed = invocation_count - error.skipped - 1
        cause = error.__cause__
        error_type = cause.__class__.__name__ if cause is not None else error.__class__.__name__
        error_message = str(cause if cause is not None else error)
        raise
    finally:
        session.invocations.clear()
        manager.emit(
            ReplayEndEvent(
                session_id=session.session_id,
                status=status,
                executed_count=executed,
                error_type=error_type,
                error_message=error_message,
            )
        )

    return ReplayReport(
        session_id=session.session_id,
        surface=session.surface.name,
        executed_count=executed,
    )


def _default_usage_hint(session: "RecordingSession") -> str:
    surface = session.surface.name
    return (
        f"No calls were recorded for {surface}; record at least one call before replay:\n"
        f"session = deferkit.record({surface})\n"
        "session.root.<operation>(...)\n"
        "session.replay(target)\n"
    )
