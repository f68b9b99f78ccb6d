"""Public CLI exports for mdingest."""

from __future__ import annotations

from .app import app, main
from .commands import convert, list_extensions
from .state import debug_enabled, emit_error, get_cli_state


__all__ = [
    "app",
    "convert",
    "debug_enabled",
    "emit_error",
    "get_cli_state",
    "list_extensions",
    "main",
]
