"""Handle exposing the editor state the parser reads."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .extensions import Extension, ExtensionRegistry
from .schema import Schema, default_schema


@dataclass(slots=True)
class Editor:
    """Schema and extension registry of a document-model editor.

    The handle is passed to every extension hook as ``context.editor``.
    """

    schema: Schema = field(default_factory=default_schema)
    extensions: ExtensionRegistry = field(default_factory=ExtensionRegistry)

    @classmethod
    def create(
        cls,
        extensions: Iterable[Extension] = (),
        *,
        schema: Schema | None = None,
    ) -> Editor:
        return cls(
            schema=schema if schema is not None else default_schema(),
            extensions=ExtensionRegistry(extensions),
        )


__all__ = ["Editor"]
