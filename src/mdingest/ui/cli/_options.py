"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputArgument = Annotated[
    str,
    typer.Argument(
        metavar="INPUT",
        help="Markdown file to convert, or '-' to read from standard input.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file holding Markdown options (html, linkify, breaks, ignore_regex).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

InlineOption = Annotated[
    bool,
    typer.Option(
        "--inline",
        help="Produce content insertable inside an existing paragraph.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

HtmlOption = Annotated[
    bool | None,
    typer.Option(
        "--html/--no-html",
        help="Allow raw HTML in the Markdown source.",
        show_default=False,
        rich_help_panel=RENDERING_PANEL,
    ),
]

LinkifyOption = Annotated[
    bool | None,
    typer.Option(
        "--linkify/--no-linkify",
        help="Turn bare URLs into links.",
        show_default=False,
        rich_help_panel=RENDERING_PANEL,
    ),
]

BreaksOption = Annotated[
    bool | None,
    typer.Option(
        "--breaks/--no-breaks",
        help="Treat single newlines as hard line breaks.",
        show_default=False,
        rich_help_panel=RENDERING_PANEL,
    ),
]

IgnoreOption = Annotated[
    list[str] | None,
    typer.Option(
        "--ignore",
        "-i",
        help="Regular expression whose matches are kept verbatim. Repeatable.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

NoDefaultExtensionsOption = Annotated[
    bool,
    typer.Option(
        "--no-default-extensions",
        help="Disable the bundled code block and task list extensions.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the markup to this file instead of standard output.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
