"""High-level entry points for Markdown ingestion."""

from __future__ import annotations

from .ingest import create_parser, ingest, insert_content, set_content


__all__ = ["create_parser", "ingest", "insert_content", "set_content"]
