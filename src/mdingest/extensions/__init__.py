"""Central registry for the extensions bundled with mdingest."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any

from mdingest.core.extensions import Extension


__all__ = [
    "BundledExtension",
    "available_extensions",
    "default_extensions",
    "get_bundled_extension",
    "load_extension",
]


def _load_attribute(path: str) -> Any:
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        msg = f"Extension entry '{path}' must use the 'module:attribute' format."
        raise ValueError(msg)
    module = import_module(module_name)
    target: Any = module
    for chunk in attribute.split("."):
        target = getattr(target, chunk)
    return target


def _normalise_slug(value: str) -> str:
    slug = value.split(":", 1)[0].lower().replace("-", "_")
    return slug.removeprefix("mdingest.extensions.")


@dataclass(frozen=True, slots=True)
class BundledExtension:
    """Describe where a bundled extension lives."""

    slug: str
    entry: str
    description: str | None = None


_EXTENSIONS: dict[str, BundledExtension] = {
    "code_block": BundledExtension(
        slug="code_block",
        entry="mdingest.extensions.code_block:CodeBlock",
        description="Removes the trailing line feed inside rendered code blocks.",
    ),
    "task_list": BundledExtension(
        slug="task_list",
        entry="mdingest.extensions.task_list:TaskList",
        description="Turns '- [ ]' list items into task list markup.",
    ),
}

_DEFAULT_SLUGS = ("code_block", "task_list")


def available_extensions() -> list[BundledExtension]:
    """Return the bundled extensions sorted by slug."""
    return [_EXTENSIONS[key] for key in sorted(_EXTENSIONS)]


def get_bundled_extension(name: str) -> BundledExtension:
    """Look up a bundled extension by slug or qualified module name."""
    slug = _normalise_slug(name)
    try:
        return _EXTENSIONS[slug]
    except KeyError as exc:
        raise KeyError(f"No bundled extension named '{name}'.") from exc


def load_extension(name: str, **options: Any) -> Extension:
    """Import a bundled extension, optionally overriding its options."""
    entry = get_bundled_extension(name)
    extension: Extension = _load_attribute(entry.entry)
    return extension.configure(**options) if options else extension


def default_extensions() -> list[Extension]:
    """Return the extensions enabled when no editor is supplied."""
    return [load_extension(slug) for slug in _DEFAULT_SLUGS]
