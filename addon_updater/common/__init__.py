"""Shared constants, errors, settings and logging helpers."""
