"""Intent and lifecycle notification models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import Field, field_validator, model_validator

from .base import DomainModel
from .enums import HttpMethod, Outcome, Phase
from .types import JsonMapping

HideErrorPolicy = bool | Callable[["LifecycleNotification"], bool]


class LifecycleTypes(DomainModel):
    """The three tags marking an intent's prepare, success and fail notifications."""

    prepare: str = Field(min_length=1)
    success: str = Field(min_length=1)
    fail: str = Field(min_length=1)

    @model_validator(mode="after")
    def ensure_distinct(self) -> LifecycleTypes:
        if len({self.prepare, self.success, self.fail}) != 3:
            msg = f"Lifecycle tags must be distinct, got {self.prepare!r}/{self.success!r}/{self.fail!r}"
            raise ValueError(msg)
        return self

    def tag_for(self, phase: Phase) -> str:
        if phase is Phase.PREPARE:
            return self.prepare
        if phase is Phase.SUCCESS:
            return self.success
        return self.fail

    @classmethod
    def from_prefix(cls, prefix: str) -> LifecycleTypes:
        """Derive ``<prefix>/prepare`` style tags from a single name."""

        return cls(
            prepare=f"{prefix}/{Phase.PREPARE.value}",
            success=f"{prefix}/{Phase.SUCCESS.value}",
            fail=f"{prefix}/{Phase.FAIL.value}",
        )


class RequestOverrides(DomainModel):
    """Per-intent transport options layered over the global defaults."""

    headers: Mapping[str, str] = Field(default_factory=dict)
    params: JsonMapping | None = None
    timeout: float | None = Field(default=None, gt=0)
    follow_redirects: bool | None = None


class Intent(DomainModel):
    """Declarative description of one HTTP call and its lifecycle tags."""

    middleware: str
    type: LifecycleTypes
    uri: str
    method: HttpMethod = HttpMethod.GET
    query: JsonMapping = Field(default_factory=dict)
    body: Any = None
    request_options: RequestOverrides = Field(default_factory=RequestOverrides)
    success_text: str | None = None
    hide_error: HideErrorPolicy = False
    payload: Any = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def should_show_error(self, notification: LifecycleNotification) -> bool:
        if isinstance(self.hide_error, bool):
            return not self.hide_error
        return not self.hide_error(notification)


class LifecycleNotification(DomainModel):
    """An intent re-tagged for one lifecycle phase, plus the phase outcome."""

    type: str
    phase: Phase
    intent: Intent
    payload: Any = None
    response: Any = None
    outcome: Outcome | None = None
    error_message: str | None = None
    http_status: int | None = None
    business_code: str | None = None

    @property
    def is_failure(self) -> bool:
        return self.phase is Phase.FAIL


class FailureTransform(DomainModel):
    """Normalized failure fields supplied by a server-error classification hook."""

    http_status: int | None = None
    error_message: str | None = None
    business_code: str | None = None


Intent.model_rebuild()

__all__ = [
    "FailureTransform",
    "HideErrorPolicy",
    "Intent",
    "LifecycleNotification",
    "LifecycleTypes",
    "RequestOverrides",
]
