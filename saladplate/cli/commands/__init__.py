"""CLI command handlers."""

from .render import render_files

__all__ = ['render_files']
