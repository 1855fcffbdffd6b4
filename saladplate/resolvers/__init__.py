"""
Host environment boundary.
Variable lookup, file reads, and command execution used by the engine.
"""

from .environment import EnvironmentResolver
from .includes import IncludeReader, read_text
from .commands import CommandRunner, decode_output

__all__ = [
    "EnvironmentResolver",
    "IncludeReader",
    "read_text",
    "CommandRunner",
    "decode_output",
]
