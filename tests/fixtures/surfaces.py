"""Capability surfaces and real targets shared by the test suite."""

from dataclasses import dataclass, field
from typing import Protocol, Self

from deferkit import DeferredModule, record


class Writer(Protocol):
    def write(self, text: str) -> None: ...

    def flush(self) -> None: ...


class Builder(Protocol):
    def named(self, name: str) -> Self: ...

    def to(self, target: object) -> None: ...

    def size(self) -> int: ...


class Root(Protocol):
    def open(self) -> Writer: ...

    def a(self) -> Builder: ...

    def b(self) -> Builder: ...

    def install(self, module: object, *, eager: bool = False) -> None: ...

    def count(self) -> int: ...


@dataclass
class RealWriter:
    label: str
    journal: list
    sink: list

    def write(self, text: str) -> None:
        if text == "boom":
            raise ValueError("writer rejected 'boom'")
        self.journal.append((self.label, "write", (text,)))
        self.sink.append(text)

    def flush(self) -> None:
        self.journal.append((self.label, "flush", ()))


@dataclass
class RealBuilder:
    label: str
    journal: list

    def named(self, name: str) -> "RealBuilder":
        self.journal.append((self.label, "named", (name,)))
        return RealBuilder(f"{self.label}/{name}", self.journal)

    def to(self, target: object) -> None:
        self.journal.append((self.label, "to", (target,)))

    def size(self) -> int:
        return 0


@dataclass
class RealRoot:
    journal: list = field(default_factory=list)
    sink: list = field(default_factory=list)
    open_calls: int = 0

    def open(self) -> RealWriter:
        self.open_calls += 1
        self.journal.append(("root", "open", ()))
        return RealWriter(f"writer-{self.open_calls}", self.journal, self.sink)

    def a(self) -> RealBuilder:
        self.journal.append(("root", "a", ()))
        return RealBuilder("a", self.journal)

    def b(self) -> RealBuilder:
        self.journal.append(("root", "b", ()))
        return RealBuilder("b", self.journal)

    def install(self, module: object, *, eager: bool = False) -> None:
        self.journal.append(("root", "install", (module,)))

    def count(self) -> int:
        return len(self.journal)


class WiringModule(DeferredModule, surface=Root):
    def __init__(self) -> None:
        super().__init__()
        self.a().named("primary").to("service")
        self.open().write("wired")


class EmptyModule(DeferredModule, surface=Root):
    pass


class MisconfiguredModule(DeferredModule, surface=Root):
    def __init__(self) -> None:
        super().__init__()
        self.install()


def build_session():
    session = record(Root, session_id="fixture-session")
    session.root.install("plugin", eager=True)
    session.root.a().named("x").to("y")
    session.root.open().write("hello")
    return session


def build_failing_session():
    session = record(Root, session_id="failing-session")
    session.root.install("first")
    session.root.open().write("boom")
    session.root.install("never")
    return session


def build_empty_session():
    return record(Root, session_id="empty-session")


def build_target() -> RealRoot:
    return RealRoot()


def broken_factory() -> RealRoot:
    raise RuntimeError("target unavailable")
