"""Shared CLI dependency helpers."""

from __future__ import annotations

from functools import lru_cache

import typer

from intent_relay.config import AppSettings
from intent_relay.container import ServiceContainer, build_container
from intent_relay.transport import HttpTransport


def _echo_success(message: str) -> None:
    typer.echo(f"OK: {message}")


def _echo_error(message: str) -> None:
    typer.echo(f"Error: {message}")


def build_cli_container(
    settings: AppSettings,
    *,
    transport: HttpTransport | None = None,
) -> ServiceContainer:
    """Build a container whose display hooks print to the terminal."""

    return build_container(
        settings,
        transport=transport,
        on_show_success=_echo_success,
        on_show_error=_echo_error,
    )


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """Return a cached service container for CLI commands."""

    return build_cli_container(AppSettings.from_env())


def reset_container() -> None:
    """Clear the cached container (useful for tests)."""

    get_container.cache_clear()
