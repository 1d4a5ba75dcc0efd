"""Gladius CLI — Typer-based command-line interface.

Provides the ``gladius`` command with subcommands for printing the composed
version, inspecting build metadata and manifest attributes, and running the
packaging steps.

All output uses Rich for formatted terminal display.
"""
