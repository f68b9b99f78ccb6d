"""Adapters around third-party libraries used by the pipeline."""
