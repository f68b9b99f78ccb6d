"""Per-invocation CLI settings and the diagnostics printed on stderr.

`-v` adds the exception type and, for extension failures, the extension and
hook phase. `-vv` also lists the cause chain. `--debug` lets errors propagate
so that a full traceback is shown.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
import sys
from typing import TYPE_CHECKING, TextIO

from mdingest.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "configure_logging",
    "debug_enabled",
    "diagnostic_lines",
    "emit_error",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

LIBRARY_LOGGER = "mdingest"


@dataclass(slots=True)
class CLIState:
    """Verbosity, traceback mode and consoles of the running command."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _consoles: dict[str, Console] = field(default_factory=dict, init=False, repr=False)

    def _bound(self, name: str, stream: TextIO, **kwargs: object) -> Console:
        # Consoles follow the current sys streams.
        from rich.console import Console

        console = self._consoles.get(name)
        if console is None or console.file is not stream:
            console = Console(file=stream, **kwargs)
            self._consoles[name] = console
        return console

    @property
    def console(self) -> Console:
        return self._bound("stdout", sys.stdout)

    @property
    def err_console(self) -> Console:
        return self._bound("stderr", sys.stderr, highlight=False)


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("mdingest_cli_state", default=None)


def get_cli_state(*, create: bool = True) -> CLIState:
    """Return the state of the current command, creating it on first use."""
    state = _STATE_VAR.get()
    if state is not None:
        return state
    if not create:
        raise RuntimeError("CLI state is not initialised for this context.")
    state = CLIState()
    _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int | None = None, debug: bool | None = None) -> CLIState:
    state = get_cli_state()
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def debug_enabled() -> bool:
    state = _STATE_VAR.get()
    return state is not None and state.show_tracebacks


def configure_logging(verbosity: int) -> None:
    """Send library records to stderr: INFO for ``-v``, DEBUG for ``-vv``."""
    if verbosity <= 0:
        return

    from rich.logging import RichHandler

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(logging.INFO if verbosity == 1 else logging.DEBUG)
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(console=get_cli_state().err_console, show_path=False, markup=False)
    )


def diagnostic_lines(exception: BaseException, verbosity: int) -> list[str]:
    """Return the extra lines printed under an error at ``verbosity``."""
    if verbosity < 1:
        return []

    lines = [f"type: {type(exception).__name__}"]
    extension = getattr(exception, "extension", None)
    if extension:
        phase = getattr(exception, "phase", None)
        lines.append(f"extension: {extension}" + (f" ({phase})" if phase else ""))
    pattern = getattr(exception, "pattern", None)
    if pattern:
        lines.append(f"pattern: {pattern}")

    cause = exception.__cause__ or exception.__context__
    causes = exception_messages(cause) if cause is not None else []
    if verbosity >= 2 and causes:
        lines.append("caused by:")
        lines.extend(f"  {entry}" for entry in causes)
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``level: message`` on stderr followed by verbosity-gated details."""
    from rich.text import Text

    state = get_cli_state()
    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None:
        details = diagnostic_lines(exception, state.verbosity)
        if details:
            text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)
