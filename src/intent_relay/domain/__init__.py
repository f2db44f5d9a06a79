"""Domain models for the intent relay."""

from .base import DomainModel
from .enums import HttpMethod, Outcome, Phase, RequestState, StorageKind
from .messages import (
    FailureTransform,
    HideErrorPolicy,
    Intent,
    LifecycleNotification,
    LifecycleTypes,
    RequestOverrides,
)
from .types import Headers, JsonMapping

__all__ = [
    "DomainModel",
    "FailureTransform",
    "Headers",
    "HideErrorPolicy",
    "HttpMethod",
    "Intent",
    "JsonMapping",
    "LifecycleNotification",
    "LifecycleTypes",
    "Outcome",
    "Phase",
    "RequestOverrides",
    "RequestState",
    "StorageKind",
]
