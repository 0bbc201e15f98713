"""Deferred console configuration used by DeferKit CLI and example smoke tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Self

from deferpack.capture import DeferredModule


class Writer(Protocol):
    def write(self, text: str) -> None: ...

    def indent(self, width: int = 2) -> Self: ...


class Console(Protocol):
    def open(self, channel: str = "stdout") -> Writer: ...

    def close(self) -> None: ...


@dataclass
class ListWriter:
    channel: str
    lines: list[str]
    prefix: str = ""

    def write(self, text: str) -> None:
        self.lines.append(f"{self.channel}:{self.prefix}{text}")

    def indent(self, width: int = 2) -> "ListWriter":
        return ListWriter(self.channel, self.lines, self.prefix + " " * width)


@dataclass
class MemoryConsole:
    lines: list[str] = field(default_factory=list)
    closed: bool = False

    def open(self, channel: str = "stdout") -> ListWriter:
        return ListWriter(channel, self.lines)

    def close(self) -> None:
        self.closed = True


class GreetingModule(DeferredModule, surface=Console):
    def __init__(self) -> None:
        super().__init__()
        self.open().write("hello")
        self.open("stderr").indent(4).write("indented")
        self.close()


def build_console() -> MemoryConsole:
    return MemoryConsole()


def main() -> None:
    console = build_console()
    GreetingModule().configure(console)
    for line in console.lines:
        print(line)


if __name__ == "__main__":
    main()
