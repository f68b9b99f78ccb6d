"""Implementation of the ``mdingest extensions`` command."""

from __future__ import annotations

from rich.table import Table

from mdingest.extensions import available_extensions

from ..state import get_cli_state


def list_extensions() -> None:
    """List the extensions bundled with mdingest."""
    table = Table(title="Bundled extensions")
    table.add_column("Name", style="bold")
    table.add_column("Entry")
    table.add_column("Description")
    for extension in available_extensions():
        table.add_row(extension.slug, extension.entry, extension.description or "")
    get_cli_state().console.print(table)


__all__ = ["list_extensions"]
