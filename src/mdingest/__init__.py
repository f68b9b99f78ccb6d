"""Primary public API for mdingest."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from mdingest.api import create_parser, ingest, insert_content, set_content
from mdingest.core.config import MarkdownOptions, load_options
from mdingest.core.editor import Editor
from mdingest.core.exceptions import (
    ConfigurationError,
    GuardPatternError,
    IngestError,
    MalformedMarkupError,
)
from mdingest.core.extensions import Extension, ExtensionRegistry, ExtensionSpec, HookContext
from mdingest.core.parser import ConversionRequest, MarkdownParser
from mdingest.core.placeholders import PlaceholderGuard, PlaceholderTable
from mdingest.core.schema import NodeType, Schema, default_schema


try:
    __version__ = _pkg_version("mdingest")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ConfigurationError",
    "ConversionRequest",
    "Editor",
    "Extension",
    "ExtensionRegistry",
    "ExtensionSpec",
    "GuardPatternError",
    "HookContext",
    "IngestError",
    "MalformedMarkupError",
    "MarkdownOptions",
    "MarkdownParser",
    "NodeType",
    "PlaceholderGuard",
    "PlaceholderTable",
    "Schema",
    "__version__",
    "create_parser",
    "default_schema",
    "ingest",
    "insert_content",
    "load_options",
    "set_content",
]
