"""Service container wiring application components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from intent_relay.config import AppSettings
from intent_relay.orchestration import (
    MessagePipeline,
    RequestMiddleware,
    RequestMiddlewareConfig,
    TransportDefaults,
    record_notifications,
    status_failure_transform,
)
from intent_relay.orchestration.config import DisplayHook, FailureHook, HeaderHook, no_headers
from intent_relay.persistence import KeyValueStorage, create_storage
from intent_relay.transport import HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Aggregates constructed services with shared configuration."""

    settings: AppSettings
    transport: HttpTransport
    storage: KeyValueStorage
    middleware: RequestMiddleware
    pipeline: MessagePipeline


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith("sqlite"):
        return
    try:
        _, path = database_url.split(":///", maxsplit=1)
    except ValueError:
        return
    db_path = Path(path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _log_success(message: str) -> None:
    logger.info(message)


def _log_error(message: str) -> None:
    logger.error(message)


def build_container(
    settings: AppSettings | None = None,
    *,
    transport: HttpTransport | None = None,
    derive_headers: HeaderHook = no_headers,
    classify_failure: FailureHook = status_failure_transform,
    on_show_success: DisplayHook = _log_success,
    on_show_error: DisplayHook = _log_error,
) -> ServiceContainer:
    """Construct the primary service container."""

    resolved_settings = settings or AppSettings.from_env()
    resolved_transport = transport or HttpxTransport(timeout=resolved_settings.timeout)

    _ensure_sqlite_directory(resolved_settings.database_url)
    storage = create_storage(
        resolved_settings.storage,
        database_url=resolved_settings.database_url,
    )

    config = RequestMiddlewareConfig(
        identity=resolved_settings.identity,
        defaults=TransportDefaults(
            base_url=resolved_settings.base_url,
            timeout=resolved_settings.timeout,
            follow_redirects=resolved_settings.follow_redirects,
        ),
        derive_headers=derive_headers,
        classify_failure=classify_failure,
        on_show_success=on_show_success,
        on_show_error=on_show_error,
    )
    middleware = RequestMiddleware(config, resolved_transport, logger=logger)
    pipeline = MessagePipeline([middleware], reducer=record_notifications)

    return ServiceContainer(
        settings=resolved_settings,
        transport=resolved_transport,
        storage=storage,
        middleware=middleware,
        pipeline=pipeline,
    )


__all__ = ["ServiceContainer", "build_container"]
