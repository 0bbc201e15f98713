"""Session-scoped call log and its root Interceptor."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any
import uuid

from deferpack.capture.exceptions import SessionSpentError
from deferpack.capture.interceptors import CaptureState, Interceptor
from deferpack.capture.policy import InterceptionPolicy
from deferpack.core.models import Invocation
from deferpack.core.surface import CapabilitySurface, Selector, surface_of
from deferpack.core.types import SessionState
from deferpack.plugins import (
    PluginManager,
    RecordEvent,
    SessionStartEvent,
    get_active_plugin_manager,
)

if TYPE_CHECKING:
    from deferpack.replay.engine import ReplayReport


@dataclass(slots=True, eq=False)
class RecordingSession:
    """Mutable state for a single record/replay cycle."""

    surface: CapabilitySurface
    session_id: str
    timestamp: str
    policy: InterceptionPolicy = field(default_factory=InterceptionPolicy)
    plugin_manager: PluginManager = field(default_factory=get_active_plugin_manager)
    usage_hint: str | None = None
    invocations: deque[Invocation] = field(default_factory=deque)
    state: SessionState = "recording"
    _counter: int = 0
    _root: Interceptor | None = field(default=None, init=False, repr=False)

    @classmethod
    def open(
        cls,
        surface: type | CapabilitySurface,
        *,
        session_id: str | None = None,
        timestamp: str | None = None,
        policy: InterceptionPolicy | None = None,
        plugin_manager: PluginManager | None = None,
        usage_hint: str | None = None,
    ) -> "RecordingSession":
        described = surface if isinstance(surface, CapabilitySurface) else surface_of(surface)
        session = cls(
            surface=described,
            session_id=session_id or f"session-{uuid.uuid4().hex[:12]}",
            timestamp=timestamp or _utcnow_iso(),
            policy=policy or InterceptionPolicy(),
            plugin_manager=plugin_manager or get_active_plugin_manager(),
            usage_hint=usage_hint,
        )
        session.plugin_manager.emit(
            SessionStartEvent(
                session_id=session.session_id,
                surface=described.name,
                timestamp=session.timestamp,
            )
        )
        return session

    @property
    def root(self) -> Interceptor:
        """The Interceptor standing in for the real target system."""
        if self._root is None:
            self._root = Interceptor(CaptureState(session=self, surface=self.surface, root=True))
        return self._root

    @property
    def last_index(self) -> int | None:
        return self._counter or None

    @property
    def invocation_count(self) -> int:
        return len(self.invocations)

    def ensure_recording(self, selector: Selector) -> None:
        if self.state != "recording":
            raise SessionSpentError(
                f"Cannot record {selector}: session {self.session_id} was already "
                "replayed. Open a new session to record again."
            )

    def append(
        self,
        selector: Selector,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        *,
        root: bool,
        parent_index: int | None = None,
    ) -> Invocation:
        self.ensure_recording(selector)
        self._counter += 1
        invocation = Invocation(
            index=self._counter,
            selector=selector,
            args=tuple(args),
            kwargs=dict(kwargs),
            root=root,
            parent_index=parent_index,
        )
        self.invocations.append(invocation)
        self.plugin_manager.emit(
            RecordEvent(
                session_id=self.session_id,
                index=invocation.index,
                selector=str(selector),
                root=root,
            )
        )
        return invocation

    def snapshot(self) -> tuple[Invocation, ...]:
        """Recorded calls still waiting for replay, in log order."""
        return tuple(self.invocations)

    def replay(self, target: Any) -> "ReplayReport":
        """Replay every recorded call against ``target``; see :func:`replay_session`."""
        from deferpack.replay.engine import replay_session

        return replay_session(self, target)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")
