"""Core ingestion pipeline: configuration, schema, hooks and normalization."""
