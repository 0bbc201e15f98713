"""Base class for modules that issue their calls at construction time."""

from __future__ import annotations

from typing import Any, ClassVar

from deferpack.capture.interceptors import Interceptor
from deferpack.capture.policy import InterceptionPolicy
from deferpack.capture.recorder import RecordingSession


class DeferredModule:
    """Record calls while the module is built; replay them in :meth:`configure`.

    Subclasses name the surface they configure and issue their calls in
    ``__init__``, as if the real target already existed::

        class AppModule(DeferredModule, surface=Binder):
            def __init__(self) -> None:
                super().__init__()
                self.bind(Service).to(DefaultService)

        AppModule().configure(real_binder)

    Operations of the surface are reachable directly on the module (as above)
    or through :meth:`binder`. Anything the caller passes along is evaluated
    immediately, during recording, not when :meth:`configure` runs.
    """

    surface: ClassVar[type | None] = None

    def __init_subclass__(cls, surface: type | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if surface is not None:
            cls.surface = surface

    def __init__(self, *, policy: InterceptionPolicy | None = None) -> None:
        module_type = type(self)
        if module_type.surface is None:
            raise TypeError(
                f"{module_type.__name__} must declare the surface it configures: "
                f"class {module_type.__name__}(DeferredModule, surface=...)"
            )
        self._session = RecordingSession.open(
            module_type.surface,
            session_id=f"{module_type.__name__}-{id(self):x}",
            policy=policy,
            usage_hint=_usage_hint(module_type),
        )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._session.root, name)

    @property
    def session(self) -> RecordingSession:
        return self._session

    @property
    def root(self) -> Interceptor:
        return self._session.root

    def binder(self) -> Interceptor:
        """Direct access to the recording stand-in for the target."""
        return self._session.root

    def configure(self, target: Any) -> None:
        """Replay the recorded calls against ``target``. Only for the host framework."""
        self._session.replay(target)


def _usage_hint(module_type: type[DeferredModule]) -> str:
    name = module_type.__name__
    surface = module_type.surface.__name__ if module_type.surface is not None else "..."
    return (
        f"No calls were recorded for {name}; issue them in __init__:\n"
        f"class {name}(DeferredModule, surface={surface}):\n"
        "    def __init__(self):\n"
        "        super().__init__()\n"
        "        self.root.<operation>(...)\n"
    )
