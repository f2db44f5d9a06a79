"""Typer CLI for dispatching request intents by hand."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from intent_relay.container import ServiceContainer
from intent_relay.domain import (
    HttpMethod,
    Intent,
    LifecycleNotification,
    LifecycleTypes,
    Phase,
    RequestOverrides,
)
from intent_relay.orchestration import RequestFailed

from .deps import get_container, reset_container

T = TypeVar("T")

app = typer.Typer(help="Intent relay command-line interface")
storage_app = typer.Typer(help="Inspect the configured key/value storage")
app.add_typer(storage_app, name="storage")

_NOTIFICATION_FIELDS: dict[Phase, set[str]] = {
    Phase.PREPARE: set(),
    Phase.SUCCESS: {"response"},
    Phase.FAIL: {"outcome", "error_message", "http_status", "business_code", "response"},
}


def _parse_pairs(values: list[str] | None, option: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"{option} expects key=value, got {item!r}")
        parsed[key.strip()] = value.strip()
    return parsed


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _render(notification: LifecycleNotification) -> str:
    include = _NOTIFICATION_FIELDS[notification.phase]
    fields = (
        notification.model_dump(mode="json", include=include, exclude_none=True)
        if include
        else {}
    )
    return f"{notification.type}\t{json.dumps(fields, sort_keys=True)}"


def _run_with_storage(
    container: ServiceContainer,
    operation: Callable[[], Awaitable[T]],
) -> T:
    # Storage is closed on the loop that opened it; session namespaces are purged then.
    async def _run() -> T:
        try:
            return await operation()
        finally:
            await container.storage.close()

    try:
        return asyncio.run(_run())
    finally:
        reset_container()


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings."""

    container = get_container()
    settings = container.settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Identity:\t" + settings.identity)
    typer.echo("Base URL:\t" + (settings.base_url or "(none)"))
    typer.echo(f"Timeout:\t{settings.timeout}s")
    typer.echo("Storage:\t" + settings.storage.value)


@app.command("request")
def send_request(
    method: str,
    uri: str,
    body: str | None = typer.Option(None, help="JSON request body"),
    query: list[str] | None = typer.Option(None, "--query", "-q", help="Query parameter key=value"),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="Header key=value"),
    timeout: float | None = typer.Option(None, min=0.001, help="Per-request timeout in seconds"),
    success_text: str | None = typer.Option(None, help="Message shown when the call succeeds"),
    hide_error: bool = typer.Option(False, "--hide-error", help="Suppress the error message"),
) -> None:
    """Dispatch one request intent and print its lifecycle notifications."""

    try:
        http_method = HttpMethod(method.strip().upper())
    except ValueError as exc:
        raise typer.BadParameter(f"Unsupported HTTP method {method!r}") from exc

    container = get_container()
    intent = Intent(
        middleware=container.settings.identity,
        type=LifecycleTypes.from_prefix(f"cli/{http_method.value.lower()}"),
        uri=uri,
        method=http_method,
        query=_parse_pairs(query, "--query"),
        body=_parse_json(body) if body is not None else None,
        request_options=RequestOverrides(
            headers=_parse_pairs(header, "--header"),
            timeout=timeout,
        ),
        success_text=success_text,
        hide_error=hide_error,
    )

    async def _dispatch() -> bool:
        pipeline = container.pipeline
        state_key = container.settings.state_key
        await pipeline.rehydrate(container.storage, state_key)
        seen = len(pipeline.history)
        handle = pipeline.dispatch(intent)
        try:
            await handle.promise
            succeeded = True
        except RequestFailed:
            succeeded = False
        for message in pipeline.history[seen:]:
            if isinstance(message, LifecycleNotification):
                typer.echo(_render(message))
        await pipeline.persist(container.storage, state_key)
        return succeeded

    if not _run_with_storage(container, _dispatch):
        raise typer.Exit(code=1)


@storage_app.command("get")
def storage_get(key: str) -> None:
    """Print the JSON value stored under KEY."""

    container = get_container()
    value = _run_with_storage(container, lambda: container.storage.get(key))
    if value is None:
        typer.echo(f"No value stored under {key}")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(value, sort_keys=True))


@storage_app.command("set")
def storage_set(key: str, value: str) -> None:
    """Store VALUE (parsed as JSON when possible) under KEY."""

    container = get_container()
    _run_with_storage(container, lambda: container.storage.set(key, _parse_json(value)))
    typer.echo(f"Stored {key}")


@storage_app.command("remove")
def storage_remove(key: str) -> None:
    """Delete KEY from the storage."""

    container = get_container()
    _run_with_storage(container, lambda: container.storage.remove(key))
    typer.echo(f"Removed {key}")
