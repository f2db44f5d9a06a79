"""Orchestration layer exports."""

from .classifier import (
    CANCELLED_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    Classification,
    OutcomeClassifier,
    normalize_timeout_message,
)
from .config import RequestMiddlewareConfig, TransportDefaults, status_failure_transform
from .context import DispatchContext, Middleware, NextHandler
from .exceptions import (
    ConfigurationError,
    InvalidTransitionError,
    LifecycleError,
    RelayError,
    RequestFailed,
)
from .executor import PreparedCall, RequestExecutor, resolve_url
from .lifecycle import RequestLifecycle
from .middleware import RequestHandle, RequestMiddleware
from .pipeline import MessagePipeline, record_notifications

__all__ = [
    "CANCELLED_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
    "TIMEOUT_MESSAGE",
    "Classification",
    "ConfigurationError",
    "DispatchContext",
    "InvalidTransitionError",
    "LifecycleError",
    "MessagePipeline",
    "Middleware",
    "NextHandler",
    "OutcomeClassifier",
    "PreparedCall",
    "RelayError",
    "RequestExecutor",
    "RequestFailed",
    "RequestHandle",
    "RequestLifecycle",
    "RequestMiddleware",
    "RequestMiddlewareConfig",
    "TransportDefaults",
    "normalize_timeout_message",
    "record_notifications",
    "resolve_url",
    "status_failure_transform",
]
