"""User interfaces for mdingest."""
