"""Maps settled calls onto the four request outcomes."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from intent_relay.domain import FailureTransform, Outcome
from intent_relay.transport import CancelToken, RequestCancelled, TransportResponse, decode_body

from .config import FailureHook

CANCELLED_MESSAGE = "Request was cancelled"
GENERIC_ERROR_MESSAGE = "Request failed unexpectedly"
TIMEOUT_MESSAGE = "Network busy, request timed out"

_TIMEOUT_PATTERN = re.compile(r"^timeout\sof\s\d+m?s\sexceeded$", re.IGNORECASE)


def normalize_timeout_message(message: str) -> str:
    """Collapse transport timeout wording into one user-facing message."""

    if _TIMEOUT_PATTERN.match(message):
        return TIMEOUT_MESSAGE
    return message


@dataclass(frozen=True, slots=True)
class Classification:
    """Tagged result of a settled call."""

    outcome: Outcome
    response: Any = None
    error_message: str | None = None
    http_status: int | None = None
    business_code: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCESS


class OutcomeClassifier:
    """Classifies successes and failures; only server errors consult the hook."""

    def __init__(
        self,
        failure_hook: FailureHook,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._failure_hook = failure_hook
        self._logger = logger or logging.getLogger(__name__)

    def success(self, response: TransportResponse) -> Classification:
        return Classification(outcome=Outcome.SUCCESS, response=response.data)

    def failure(self, error: BaseException, token: CancelToken | None = None) -> Classification:
        """Classify ``error``; with ``token``, only that token's cancellation counts."""

        if isinstance(error, asyncio.CancelledError) or (
            isinstance(error, RequestCancelled) and (token is None or token.cancelled)
        ):
            custom = error.message if isinstance(error, RequestCancelled) else None
            return Classification(
                outcome=Outcome.CANCELLED,
                response={},
                error_message=custom or CANCELLED_MESSAGE,
            )

        if isinstance(error, httpx.HTTPStatusError):
            transform = self._transform(error)
            body = decode_body(error.response)
            return Classification(
                outcome=Outcome.SERVER_ERROR,
                response=body if body is not None else {},
                error_message=normalize_timeout_message(
                    transform.error_message or GENERIC_ERROR_MESSAGE
                ),
                http_status=transform.http_status,
                business_code=transform.business_code,
            )

        return Classification(
            outcome=Outcome.TRANSPORT_ERROR,
            response={},
            error_message=normalize_timeout_message(str(error) or GENERIC_ERROR_MESSAGE),
        )

    def _transform(self, error: httpx.HTTPStatusError) -> FailureTransform:
        try:
            transform = self._failure_hook(error)
        except Exception:
            self._logger.exception(
                "Failure hook raised while classifying %s", error.response.status_code
            )
            return FailureTransform()
        return transform or FailureTransform()


__all__ = [
    "CANCELLED_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
    "TIMEOUT_MESSAGE",
    "Classification",
    "OutcomeClassifier",
    "normalize_timeout_message",
]
