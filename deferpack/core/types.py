"""Type definitions for DeferKit core models."""

from typing import Literal

ResultKind = Literal["void", "chainable", "unsupported"]

RESULT_KINDS: tuple[str, ...] = ("void", "chainable", "unsupported")

SessionState = Literal["recording", "replayed"]

SESSION_STATES: tuple[str, ...] = ("recording", "replayed")
