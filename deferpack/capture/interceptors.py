"""Substitute receivers that record calls instead of executing them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from deferpack.capture.exceptions import ChainOrderError, UnsupportedResultTypeError
from deferpack.core.surface import CapabilitySurface, Operation

if TYPE_CHECKING:
    from deferpack.capture.recorder import RecordingSession


@dataclass(eq=False, slots=True)
class CaptureState:
    """Capture state behind one Interceptor."""

    session: "RecordingSession"
    surface: CapabilitySurface
    root: bool
    origin_index: int | None = None


class Interceptor:
    """Stand-in for the target system, or for a chainable result mid-chain.

    Only operations declared on the imitated surface are reachable. Each call is
    appended to the session log; chainable calls hand back a derived Interceptor
    for the result surface. Equality, hashing and repr are answered locally.
    """

    __slots__ = ("_capture_state",)

    def __init__(self, state: CaptureState) -> None:
        object.__setattr__(self, "_capture_state", state)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        state = self._capture_state
        return _recording_method(state, state.surface.operation(name))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cannot set {name!r} on an Interceptor")

    def __dir__(self) -> list[str]:
        return sorted(self._capture_state.surface.operations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interceptor):
            return False
        return self._capture_state is other._capture_state

    def __hash__(self) -> int:
        return id(self._capture_state)

    def __repr__(self) -> str:
        state = self._capture_state
        role = "root" if state.root else f"chained from #{state.origin_index}"
        return (
            f"<Interceptor {state.surface.name} ({role}) "
            f"session={state.session.session_id}>"
        )


def _recording_method(state: CaptureState, operation: Operation) -> Callable[..., Any]:
    def record(*args: Any, **kwargs: Any) -> Any:
        return intercept_call(state, operation, args, kwargs)

    record.__name__ = operation.selector.name
    record.__qualname__ = str(operation.selector)
    record.__doc__ = f"Record {operation.selector} for later replay."
    return record


def intercept_call(
    state: CaptureState,
    operation: Operation,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> "Interceptor | None":
    """Record one call made against an Interceptor.

    Returns ``None`` for void operations and a derived Interceptor for chainable
    ones. Nothing is appended when any check fails.
    """
    session = state.session
    selector = operation.selector
    session.ensure_recording(selector)

    if operation.result_kind == "unsupported":
        raise UnsupportedResultTypeError(
            f"Unsupported return type for {selector}: {operation.describe_result()}. "
            "Intercepted operations must return None or a capability surface."
        )

    policy = session.policy
    policy.assert_allowed(selector)

    if policy.validate_arguments:
        try:
            operation.signature.bind(*args, **kwargs)
        except TypeError as error:
            raise TypeError(f"{selector}(): {error}") from error

    if not state.root and policy.strict_chaining and session.last_index != state.origin_index:
        raise ChainOrderError(
            f"{selector} chains from call #{state.origin_index}, but call "
            f"#{session.last_index} was recorded after it; chained calls must "
            "directly follow the call whose result they use."
        )

    invocation = session.append(
        selector,
        args,
        kwargs,
        root=state.root,
        parent_index=state.origin_index,
    )

    if operation.result_kind == "void":
        return None

    return Interceptor(
        CaptureState(
            session=session,
            surface=operation.result_surface(),
            root=False,
            origin_index=invocation.index,
        )
    )
