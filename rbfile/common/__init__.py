"""Shared building blocks: errors, models, settings and low-level file helpers."""
