"""
Output utilities for kd.

Diagnostics go to stderr through a Rich console with verbosity control.
Stdout carries nothing but the serialized manifest document, so kd can be
piped straight into kubectl.
"""

import sys
from enum import IntEnum
from typing import Any, Optional, TextIO

import yaml
from rich.console import Console
from rich.markup import escape


class Verbosity(IntEnum):
    """Verbosity levels for output."""

    QUIET = 0  # Only errors
    NORMAL = 1  # Standard output with colors
    VERBOSE = 2  # Detailed output including resource summaries


class OutputManager:
    """
    Centralized diagnostics output for kd.

    All messages are written to stderr.
    """

    def __init__(self, verbosity: Verbosity = Verbosity.NORMAL):
        """
        Initialize the output manager.

        Args:
            verbosity: Verbosity level for output
        """
        self.verbosity = verbosity
        self.console = Console(stderr=True, soft_wrap=True)

    def error(self, message: str, suggestion: Optional[str] = None) -> None:
        """Print an error message in red."""
        self.console.print(f"[red]✗ {escape(message)}[/red]", highlight=False)
        if suggestion and self.verbosity >= Verbosity.NORMAL:
            self.console.print(f"[yellow]{escape(suggestion)}[/yellow]", highlight=False)

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        if self.verbosity != Verbosity.QUIET:
            self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]", highlight=False)

    def verbose(self, message: str) -> None:
        """Print a verbose message (only shown in VERBOSE mode)."""
        if self.verbosity >= Verbosity.VERBOSE:
            self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)


# Global output manager instance
_output_manager: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """
    Get the global output manager instance.

    Returns:
        OutputManager instance
    """
    global _output_manager
    if _output_manager is None:
        _output_manager = OutputManager()
    return _output_manager


def set_output(manager: OutputManager) -> None:
    """Set the global output manager instance."""
    global _output_manager
    _output_manager = manager


def dump_manifests(document: dict[str, Any]) -> str:
    """Serialize a manifest document to block-style YAML."""
    return yaml.safe_dump(document, default_flow_style=False)


def write_manifests(document: dict[str, Any], stream: Optional[TextIO] = None) -> None:
    """
    Write a manifest document as YAML.

    Args:
        document: Manifest document, usually a v1 List
        stream: Destination, defaults to sys.stdout
    """
    if stream is None:
        stream = sys.stdout
    stream.write(dump_manifests(document))
    stream.flush()
