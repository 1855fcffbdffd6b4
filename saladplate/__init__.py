"""
Saladplate: a text templating engine.

Replaces ${{ VAR }} with environment variables, $<< file >> with the
templated contents of another file, and $(( command )) with a command's
standard output.
"""

from .engine import BIN, STDIN, Options, TemplateEngine, effective_directory, normalize_newlines, template
from .exceptions import (
    CommandError,
    ConfigValidationError,
    IncludeCycleError,
    IncludeError,
    TemplateError,
    ValidationError,
)

__version__ = "1.2.0"

__all__ = [
    "BIN",
    "STDIN",
    "Options",
    "TemplateEngine",
    "effective_directory",
    "normalize_newlines",
    "template",
    "CommandError",
    "ConfigValidationError",
    "IncludeCycleError",
    "IncludeError",
    "TemplateError",
    "ValidationError",
    "__version__",
]
