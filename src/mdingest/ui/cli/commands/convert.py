"""Implementation of the ``mdingest convert`` command."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Any

from pydantic import ValidationError
import typer

from mdingest.api import create_parser
from mdingest.core.config import MarkdownOptions, load_options
from mdingest.core.exceptions import IngestError, exception_hint

from .._options import (
    BreaksOption,
    ConfigOption,
    DebugOption,
    HtmlOption,
    IgnoreOption,
    InlineOption,
    InputArgument,
    LinkifyOption,
    NoDefaultExtensionsOption,
    OutputOption,
    VerboseOption,
)
from ..state import configure_logging, debug_enabled, emit_error, set_cli_state


def _read_source(input_path: str) -> str:
    if input_path == "-":
        return sys.stdin.read()
    path = Path(input_path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to read '{path}': {exc.strerror or exc}", exception=exc)
        raise typer.Exit(code=1) from exc


def _resolve_options(
    config: Path | None,
    overrides: dict[str, Any],
) -> MarkdownOptions:
    base = load_options(config) if config is not None else MarkdownOptions()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base
    return MarkdownOptions.model_validate({**base.model_dump(), **updates})


def convert(
    input_path: InputArgument,
    output: OutputOption = None,
    config: ConfigOption = None,
    inline: InlineOption = False,
    html: HtmlOption = None,
    linkify: LinkifyOption = None,
    breaks: BreaksOption = None,
    ignore: IgnoreOption = None,
    no_default_extensions: NoDefaultExtensionsOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Convert a Markdown document into editor-ready markup."""
    set_cli_state(verbosity=verbose, debug=debug)
    configure_logging(verbose)

    source = _read_source(input_path)

    try:
        options = _resolve_options(
            config,
            {
                "html": html,
                "linkify": linkify,
                "breaks": breaks,
                "ignore_regex": list(ignore) if ignore else None,
            },
        )
        parser = create_parser(options, extensions=[] if no_default_extensions else None)
        result = parser.parse(source, inline=inline)
    except ValidationError as exc:
        emit_error(f"Invalid Markdown options: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    except IngestError as exc:
        if debug_enabled():
            raise
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")


__all__ = ["convert"]
