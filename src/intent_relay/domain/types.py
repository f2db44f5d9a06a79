"""Shared type aliases for the domain layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

JsonMapping = Mapping[str, Any]
Headers = Mapping[str, str]

__all__ = ["Headers", "JsonMapping"]
