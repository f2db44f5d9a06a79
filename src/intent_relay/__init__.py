"""Intent-driven HTTP request orchestration."""

from .domain import (
    FailureTransform,
    HttpMethod,
    Intent,
    LifecycleNotification,
    LifecycleTypes,
    Outcome,
    Phase,
    RequestOverrides,
)
from .orchestration import (
    MessagePipeline,
    RequestFailed,
    RequestHandle,
    RequestMiddleware,
    RequestMiddlewareConfig,
)

__all__ = [
    "FailureTransform",
    "HttpMethod",
    "Intent",
    "LifecycleNotification",
    "LifecycleTypes",
    "MessagePipeline",
    "Outcome",
    "Phase",
    "RequestFailed",
    "RequestHandle",
    "RequestMiddleware",
    "RequestMiddlewareConfig",
    "RequestOverrides",
]
