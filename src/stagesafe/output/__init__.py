"""Reporters — Rich terminal output and JSON payload."""
