"""CLI command implementations."""

from __future__ import annotations

from .convert import convert
from .extensions import list_extensions


__all__ = ["convert", "list_extensions"]
