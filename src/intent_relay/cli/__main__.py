"""Executable entry point for `python -m intent_relay.cli`."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from .app import app


def main() -> None:  # pragma: no cover - thin wrapper
    # RELAY_* values from a local .env; real environment variables win.
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    app()


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
