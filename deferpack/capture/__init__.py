"""Capture subsystem for DeferKit."""

from deferpack.capture.exceptions import (
    CaptureError,
    ChainOrderError,
    OperationPolicyError,
    SessionSpentError,
    UnsupportedResultTypeError,
)
from deferpack.capture.interceptors import CaptureState, Interceptor, intercept_call
from deferpack.capture.module import DeferredModule
from deferpack.capture.policy import InterceptionPolicy
from deferpack.capture.recorder import RecordingSession

__all__ = [
    "CaptureError",
    "UnsupportedResultTypeError",
    "OperationPolicyError",
    "ChainOrderError",
    "SessionSpentError",
    "InterceptionPolicy",
    "CaptureState",
    "Interceptor",
    "intercept_call",
    "RecordingSession",
    "DeferredModule",
]
