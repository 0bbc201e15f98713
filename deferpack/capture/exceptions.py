"""Capture subsystem exceptions."""


class CaptureError(Exception):
    """Base class for capture subsystem errors."""


class UnsupportedResultTypeError(CaptureError, TypeError):
    """Raised when an intercepted operation returns neither None nor a surface."""


class OperationPolicyError(CaptureError):
    """Raised when interception policy blocks an operation."""


class ChainOrderError(CaptureError):
    """Raised when a chained call does not directly follow the call it chains from."""


class SessionSpentError(CaptureError):
    """Raised when a session is used after replay has started."""
