"""Shared utilities: logging and upload validation."""
