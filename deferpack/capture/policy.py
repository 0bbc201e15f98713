"""Interception policy controls for recording sessions."""

from __future__ import annotations

from dataclasses import dataclass, field

from deferpack.capture.exceptions import OperationPolicyError
from deferpack.core.surface import Selector


@dataclass(slots=True)
class InterceptionPolicy:
    """Policy for validating calls while they are recorded."""

    validate_arguments: bool = True
    strict_chaining: bool = True
    blocked_operations: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if isinstance(self.blocked_operations, str):
            raise TypeError("blocked_operations must be a collection of names, not a string")
        self.blocked_operations = frozenset(
            str(name).strip() for name in self.blocked_operations if str(name).strip()
        )

    def assert_allowed(self, selector: Selector) -> None:
        if selector.name in self.blocked_operations or str(selector) in self.blocked_operations:
            raise OperationPolicyError(
                f"Operation {selector} denied by policy. "
                "Remove it from blocked_operations to record this call."
            )
