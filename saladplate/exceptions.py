"""Saladplate exceptions."""

from pathlib import Path
from typing import List, Optional, Sequence, Union
from dataclasses import dataclass


class TemplateError(Exception):
    """Base class for failures that abort a template operation.

    The CLI maps ``exit_code`` onto the process exit status for the
    document that failed.
    """

    exit_code = 1

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class IncludeError(TemplateError):
    """Raised when an included file cannot be read."""

    def __init__(self, path: Union[str, Path], source: Optional[str] = None, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"cannot include {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, source)


class IncludeCycleError(IncludeError):
    """Raised when an include refers back to a file already being templated."""

    def __init__(self, path: Union[str, Path], chain: Sequence[str], source: Optional[str] = None):
        self.chain = list(chain)
        cycle = " -> ".join(self.chain + [str(path)])
        super().__init__(path, source, f"include cycle detected ({cycle})")


class CommandError(TemplateError):
    """Raised when a command exits non-zero, is killed, or cannot be spawned."""

    def __init__(
        self,
        command: str,
        cwd: Union[str, Path],
        returncode: Optional[int] = None,
        stderr: str = "",
        source: Optional[str] = None,
        reason: str = "",
    ):
        self.command = command
        self.cwd = str(cwd)
        self.returncode = returncode
        self.signal = -returncode if returncode is not None and returncode < 0 else None
        self.stderr = stderr

        if reason:
            detail = reason
        elif self.signal is not None:
            detail = f"terminated by signal {self.signal}"
        else:
            detail = f"exited with status {returncode}"

        message = f"command {command!r} failed in {self.cwd}: {detail}"
        if stderr.strip():
            message += f"\n{stderr.rstrip()}"
        super().__init__(message, source)


@dataclass
class ValidationError:
    """Single configuration validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class ConfigValidationError(Exception):
    """Raised when an options file fails validation.

    Carries every problem found so the CLI can report them together and
    exit with the validation status.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            prefix = f"{error.path}: " if error.path else ""
            messages.append(f"Validation error: {prefix}{error.message}")

        super().__init__("\n".join(messages))
