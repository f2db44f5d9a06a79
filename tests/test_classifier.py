from __future__ import annotations

import asyncio

import httpx
import pytest

from intent_relay.domain import FailureTransform, Outcome
from intent_relay.orchestration import (
    CANCELLED_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    OutcomeClassifier,
    normalize_timeout_message,
    status_failure_transform,
)
from intent_relay.transport import (
    CancelSource,
    RequestCancelled,
    TransportResponse,
    TransportTimeout,
)


def _status_error(status: int, **response_kwargs: object) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.test/orders")
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"status {status}", request=request, response=response)


@pytest.mark.parametrize(
    "message",
    [
        "timeout of 20000ms exceeded",
        "Timeout of 5s exceeded",
        "TIMEOUT OF 1500MS EXCEEDED",
    ],
)
def test_timeout_wording_is_normalized(message: str) -> None:
    assert normalize_timeout_message(message) == TIMEOUT_MESSAGE


@pytest.mark.parametrize(
    "message",
    [
        "timeout of ms exceeded",
        "request timeout of 20000ms exceeded",
        "timeout of 20000ms exceeded!",
        "connection refused",
    ],
)
def test_other_messages_are_left_alone(message: str) -> None:
    assert normalize_timeout_message(message) == message


def test_success_carries_decoded_payload() -> None:
    classifier = OutcomeClassifier(status_failure_transform)

    result = classifier.success(TransportResponse(status_code=201, data={"id": 7}))

    assert result.succeeded
    assert result.response == {"id": 7}
    assert result.error_message is None


def test_cancellation_defaults_and_custom_messages() -> None:
    classifier = OutcomeClassifier(status_failure_transform)

    default = classifier.failure(RequestCancelled())
    custom = classifier.failure(RequestCancelled("left page"))
    task_cancel = classifier.failure(asyncio.CancelledError())

    assert default.outcome is Outcome.CANCELLED
    assert default.error_message == CANCELLED_MESSAGE
    assert custom.error_message == "left page"
    assert task_cancel.outcome is Outcome.CANCELLED
    assert default.response == {}


def test_only_the_calls_own_token_counts_as_cancellation() -> None:
    classifier = OutcomeClassifier(status_failure_transform)
    own = CancelSource()
    own.cancel("closed tab")

    mine = classifier.failure(RequestCancelled("closed tab"), own.token)
    foreign = classifier.failure(RequestCancelled("other call"), CancelSource().token)

    assert mine.outcome is Outcome.CANCELLED
    assert mine.error_message == "closed tab"
    assert foreign.outcome is Outcome.TRANSPORT_ERROR
    assert foreign.error_message == "other call"


def test_server_error_merges_hook_result() -> None:
    def hook(error: httpx.HTTPStatusError) -> FailureTransform:
        return FailureTransform(http_status=409, error_message="Conflict", business_code="DUP")

    result = OutcomeClassifier(hook).failure(_status_error(409, json={"detail": "dup"}))

    assert result.outcome is Outcome.SERVER_ERROR
    assert result.http_status == 409
    assert result.business_code == "DUP"
    assert result.error_message == "Conflict"
    assert result.response == {"detail": "dup"}


def test_server_error_hook_returning_none_uses_generic_message() -> None:
    result = OutcomeClassifier(lambda error: None).failure(_status_error(500))

    assert result.error_message == GENERIC_ERROR_MESSAGE
    assert result.http_status is None
    assert result.response == {}


def test_server_error_hook_message_is_still_timeout_normalized() -> None:
    def hook(error: httpx.HTTPStatusError) -> FailureTransform:
        return FailureTransform(error_message="timeout of 30000ms exceeded")

    result = OutcomeClassifier(hook).failure(_status_error(504))

    assert result.error_message == TIMEOUT_MESSAGE


def test_server_error_hook_exception_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    def hook(error: httpx.HTTPStatusError) -> FailureTransform:
        raise KeyError("code")

    with caplog.at_level("ERROR"):
        result = OutcomeClassifier(hook).failure(_status_error(500, text="oops"))

    assert result.outcome is Outcome.SERVER_ERROR
    assert result.error_message == GENERIC_ERROR_MESSAGE
    assert result.response == "oops"
    assert "Failure hook raised" in caplog.text


def test_transport_errors_use_message_or_generic() -> None:
    classifier = OutcomeClassifier(status_failure_transform)

    timed_out = classifier.failure(TransportTimeout("timeout of 20000ms exceeded"))
    silent = classifier.failure(RuntimeError())
    refused = classifier.failure(ConnectionRefusedError("refused"))

    assert timed_out.outcome is Outcome.TRANSPORT_ERROR
    assert timed_out.error_message == TIMEOUT_MESSAGE
    assert silent.error_message == GENERIC_ERROR_MESSAGE
    assert refused.error_message == "refused"
    assert refused.http_status is None
