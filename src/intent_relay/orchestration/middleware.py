"""Middleware turning request intents into prepare/success/fail notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from intent_relay.domain import (
    Intent,
    LifecycleNotification,
    Outcome,
    Phase,
    RequestState,
)
from intent_relay.transport import HttpTransport

from .classifier import Classification, OutcomeClassifier
from .config import RequestMiddlewareConfig
from .context import DispatchContext, NextHandler
from .exceptions import RequestFailed
from .executor import PreparedCall, RequestExecutor
from .lifecycle import RequestLifecycle


@dataclass(frozen=True, slots=True)
class RequestHandle:
    """Returned to the dispatching caller: the eventual notification and a cancel switch."""

    promise: asyncio.Task[LifecycleNotification]
    lifecycle: RequestLifecycle
    _call: PreparedCall

    @property
    def state(self) -> RequestState:
        return self.lifecycle.state

    def cancel(self, message: str | None = None) -> None:
        self._call.cancel(message)


class RequestMiddleware:
    """Admits intents tagged with its identity and drives them through one HTTP call."""

    def __init__(
        self,
        config: RequestMiddlewareConfig,
        transport: HttpTransport,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._executor = RequestExecutor(transport, config.defaults, config.derive_headers)
        self._classifier = OutcomeClassifier(config.classify_failure, logger=self._logger)

    @property
    def identity(self) -> str:
        return self._config.identity

    def __call__(self, context: DispatchContext) -> Callable[[NextHandler], NextHandler]:
        def bind(next_handler: NextHandler) -> NextHandler:
            def handle(message: Any) -> Any:
                return self.handle(message, context, next_handler)

            return handle

        return bind

    def handle(self, message: Any, context: DispatchContext, next_handler: NextHandler) -> Any:
        intent = self._admit(message)
        if intent is None:
            return next_handler(message)
        return self._orchestrate(intent, context, next_handler)

    def _admit(self, message: Any) -> Intent | None:
        if isinstance(message, Intent):
            return message if message.middleware == self.identity else None
        if isinstance(message, Mapping) and message.get("middleware") == self.identity:
            return Intent.model_validate(message)
        return None

    def _orchestrate(
        self,
        intent: Intent,
        context: DispatchContext,
        next_handler: NextHandler,
    ) -> RequestHandle:
        loop = asyncio.get_running_loop()
        lifecycle = RequestLifecycle()

        if self._config.on_init is not None:
            self._config.on_init(context, intent)

        call = self._executor.prepare(intent, context)
        lifecycle.advance(RequestState.PREPARING)
        self._logger.debug(
            "Dispatching %s %s as %s",
            call.request.method,
            call.request.url,
            intent.type.prepare,
        )
        next_handler(self._notification(intent, Phase.PREPARE))

        lifecycle.advance(RequestState.PENDING)
        promise = loop.create_task(self._settle(intent, call, lifecycle, next_handler))
        promise.add_done_callback(
            lambda task: self._finalize(task, intent, call, lifecycle, next_handler)
        )
        return RequestHandle(promise=promise, lifecycle=lifecycle, _call=call)

    def _finalize(
        self,
        task: asyncio.Task[LifecycleNotification],
        intent: Intent,
        call: PreparedCall,
        lifecycle: RequestLifecycle,
        next_handler: NextHandler,
    ) -> None:
        if not task.cancelled():
            # Failures already reached the pipeline as fail notifications.
            task.exception()
            return
        if lifecycle.settled:
            return
        # Cancelled before its first step: _settle never ran.
        call.source.close()
        classification = self._classifier.failure(
            asyncio.CancelledError(), call.request.cancel_token
        )
        self._fail(intent, classification, lifecycle, next_handler)

    async def _settle(
        self,
        intent: Intent,
        call: PreparedCall,
        lifecycle: RequestLifecycle,
        next_handler: NextHandler,
    ) -> LifecycleNotification:
        token = call.request.cancel_token
        try:
            response = await self._executor.execute(call)
        except asyncio.CancelledError as exc:
            self._fail(intent, self._classifier.failure(exc, token), lifecycle, next_handler)
            raise
        except Exception as exc:
            notification = self._fail(
                intent, self._classifier.failure(exc, token), lifecycle, next_handler
            )
            raise RequestFailed(notification) from exc

        lifecycle.advance(RequestState.SETTLED_SUCCESS)
        notification = self._notification(
            intent, Phase.SUCCESS, self._classifier.success(response)
        )
        next_handler(notification)
        self._logger.debug("%s settled with %s", intent.uri, response.status_code)
        if intent.success_text:
            self._config.on_show_success(intent.success_text)
        return notification

    def _fail(
        self,
        intent: Intent,
        classification: Classification,
        lifecycle: RequestLifecycle,
        next_handler: NextHandler,
    ) -> LifecycleNotification:
        lifecycle.advance(RequestState.SETTLED_FAIL)
        notification = self._notification(intent, Phase.FAIL, classification)
        next_handler(notification)

        if classification.outcome is Outcome.CANCELLED:
            self._logger.info("%s cancelled: %s", intent.uri, classification.error_message)
            return notification

        self._logger.warning(
            "%s failed (%s, status=%s, code=%s): %s",
            intent.uri,
            classification.outcome,
            classification.http_status,
            classification.business_code,
            classification.error_message,
        )
        if self._should_show_error(intent, notification):
            self._config.on_show_error(notification.error_message or "")
        return notification

    def _should_show_error(self, intent: Intent, notification: LifecycleNotification) -> bool:
        try:
            return intent.should_show_error(notification)
        except Exception:
            self._logger.exception("hide_error predicate raised for %s", intent.uri)
            return True

    @staticmethod
    def _notification(
        intent: Intent,
        phase: Phase,
        classification: Classification | None = None,
    ) -> LifecycleNotification:
        if classification is None:
            return LifecycleNotification(
                type=intent.type.tag_for(phase),
                phase=phase,
                intent=intent,
                payload=intent.payload,
            )
        return LifecycleNotification(
            type=intent.type.tag_for(phase),
            phase=phase,
            intent=intent,
            payload=intent.payload,
            response=classification.response,
            outcome=classification.outcome,
            error_message=classification.error_message,
            http_status=classification.http_status,
            business_code=classification.business_code,
        )


__all__ = ["RequestHandle", "RequestMiddleware"]
