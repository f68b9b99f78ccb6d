"""Extension hooks invoked around Markdown rendering.

Each document-model extension may carry an :class:`ExtensionSpec` with two
optional hooks:

`setup(context, engine)`
: Called before rendering with the call's private ``MarkdownIt`` engine. Use
  it to register plugins or replace render rules.

`update_dom(context, tree)`
: Called after rendering with the parsed markup tree. Use it to rewrite the
  generic markup into the shape the extension's node type is parsed from.

Hooks run in extension registration order. ``context`` is a
:class:`HookContext` holding the editor handle and the extension's options.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from importlib import metadata
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from bs4 import BeautifulSoup
    from markdown_it import MarkdownIt


logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "mdingest.extensions"


@dataclass(frozen=True, slots=True)
class HookContext:
    """Context handed to every hook call."""

    editor: Any
    options: Mapping[str, Any]


SetupHook = Callable[[HookContext, "MarkdownIt"], None]
UpdateDomHook = Callable[[HookContext, "BeautifulSoup"], None]


@dataclass(frozen=True, slots=True)
class ExtensionSpec:
    """Parse-time capabilities of an extension."""

    setup: SetupHook | None = None
    update_dom: UpdateDomHook | None = None


@dataclass(frozen=True, slots=True)
class Extension:
    """Document-model extension as seen by the Markdown parser."""

    name: str
    options: Mapping[str, Any] = field(default_factory=dict)
    markdown: ExtensionSpec | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def configure(self, **options: Any) -> Extension:
        """Return a copy of the extension with ``options`` merged in."""
        merged = {**self.options, **options}
        return replace(self, options=merged)


class ExtensionRegistry:
    """Ordered registry of extensions, iterated in registration order."""

    def __init__(self, extensions: Iterable[Extension] = ()) -> None:
        self._extensions: list[Extension] = []
        for extension in extensions:
            self.register(extension)

    def register(self, extension: Extension) -> None:
        if any(existing.name == extension.name for existing in self._extensions):
            raise ConfigurationError(
                f"Extension '{extension.name}' is already registered.",
                extension=extension.name,
            )
        self._extensions.append(extension)

    def __iter__(self) -> Iterator[Extension]:
        return iter(tuple(self._extensions))

    def __len__(self) -> int:
        return len(self._extensions)

    def names(self) -> list[str]:
        return [extension.name for extension in self._extensions]

    @classmethod
    def from_entry_points(
        cls,
        extensions: Iterable[Extension] = (),
        *,
        group: str = ENTRY_POINT_GROUP,
    ) -> ExtensionRegistry:
        """Build a registry from ``extensions`` followed by installed entry points."""
        registry = cls(extensions)
        entry_points = metadata.entry_points().select(group=group)
        for entry_point in sorted(entry_points, key=lambda ep: ep.name):
            try:
                payload = entry_point.load()
            except Exception as exc:
                raise ConfigurationError(
                    f"Unable to load extension entry point '{entry_point.name}': {exc}",
                    extension=entry_point.name,
                ) from exc
            extension = payload
            if callable(payload) and not isinstance(payload, Extension):
                extension = payload()
            if not isinstance(extension, Extension):
                raise ConfigurationError(
                    f"Entry point '{entry_point.name}' did not provide an Extension.",
                    extension=entry_point.name,
                )
            registry.register(extension)
        return registry


def run_setup_hooks(extensions: Iterable[Extension], editor: Any, engine: MarkdownIt) -> None:
    """Run every ``setup`` hook against the call's engine."""
    for extension, hook in _iter_hooks(extensions, "setup"):
        _call_hook(extension, "setup", hook, editor, engine)


def run_update_dom_hooks(extensions: Iterable[Extension], editor: Any, tree: BeautifulSoup) -> None:
    """Run every ``update_dom`` hook against the rendered tree."""
    for extension, hook in _iter_hooks(extensions, "update_dom"):
        _call_hook(extension, "update_dom", hook, editor, tree)


def _iter_hooks(
    extensions: Iterable[Extension], phase: str
) -> Iterator[tuple[Extension, Callable[[HookContext, Any], None]]]:
    for extension in extensions:
        spec = extension.markdown
        if spec is None:
            continue
        hook = getattr(spec, phase)
        if hook is not None:
            yield extension, hook


def _call_hook(
    extension: Extension,
    phase: str,
    hook: Callable[[HookContext, Any], None],
    editor: Any,
    target: Any,
) -> None:
    logger.debug("Running %s hook of extension '%s'", phase, extension.name)
    context = HookContext(editor=editor, options=extension.options)
    try:
        hook(context, target)
    except Exception as exc:
        raise ConfigurationError(
            f"Extension '{extension.name}' failed during {phase}: {exc}",
            extension=extension.name,
            phase=phase,
        ) from exc


__all__ = [
    "ENTRY_POINT_GROUP",
    "Extension",
    "ExtensionRegistry",
    "ExtensionSpec",
    "HookContext",
    "SetupHook",
    "UpdateDomHook",
    "run_setup_hooks",
    "run_update_dom_hooks",
]
