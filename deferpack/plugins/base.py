"""Lifecycle events emitted by recording sessions and replay passes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Literal

LifecycleStatus = Literal["ok", "error"]


class LifecycleEvent:
    """Base for session events; ``hook`` names the plugin method that receives it."""

    __slots__ = ()

    hook: ClassVar[str]
    session_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"hook": self.hook, **asdict(self)}


@dataclass(frozen=True, slots=True)
class SessionStartEvent(LifecycleEvent):
    hook: ClassVar[str] = "on_session_start"

    session_id: str
    surface: str
    timestamp: str


@dataclass(frozen=True, slots=True)
class RecordEvent(LifecycleEvent):
    hook: ClassVar[str] = "on_record"

    session_id: str
    index: int
    selector: str
    root: bool


@dataclass(frozen=True, slots=True)
class ReplayStartEvent(LifecycleEvent):
    hook: ClassVar[str] = "on_replay_start"

    session_id: str
    surface: str
    invocation_count: int


@dataclass(frozen=True, slots=True)
class ReplayCallEvent(LifecycleEvent):
    hook: ClassVar[str] = "on_replay_call"

    session_id: str
    index: int
    selector: str
    root: bool


@dataclass(frozen=True, slots=True)
class ReplayEndEvent(LifecycleEvent):
    hook: ClassVar[str] = "on_replay_end"

    session_id: str
    status: LifecycleStatus
    executed_count: int
    error_type: str | None = None
    error_message: str | None = None


class LifecyclePlugin:
    """No-op base; override the hooks of interest."""

    name = "lifecycle-plugin"

    def on_session_start(self, event: SessionStartEvent) -> None:
        return None

    def on_record(self, event: RecordEvent) -> None:
        return None

    def on_replay_start(self, event: ReplayStartEvent) -> None:
        return None

    def on_replay_call(self, event: ReplayCallEvent) -> None:
        return None

    def on_replay_end(self, event: ReplayEndEvent) -> None:
        return None
