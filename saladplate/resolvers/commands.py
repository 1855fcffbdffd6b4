"""
Command execution for $(( command )) markers.

Commands run through the system shell with the effective directory of the
current document as working directory. Standard output is captured whole and
returned unmodified; standard error is kept for error reporting.
"""

import asyncio
import logging
from pathlib import Path
from typing import Mapping, Optional

from ..exceptions import CommandError


logger = logging.getLogger(__name__)


def decode_output(data: bytes) -> str:
    """Decode captured output; undecodable bytes are replaced rather than fatal."""
    return data.decode('utf-8', errors='replace')


class CommandRunner:
    """Runs shell commands and captures their standard output."""

    async def run(
        self,
        command: str,
        cwd: Path,
        env: Optional[Mapping[str, str]] = None,
        source: Optional[str] = None,
    ) -> str:
        """
        Run ``command`` and return its standard output.

        Args:
            command: Shell command line
            cwd: Working directory
            env: Child environment (default: inherit)
            source: Document containing the command, for error messages

        Returns:
            Captured stdout, including any trailing newline

        Raises:
            CommandError: On spawn failure, non-zero exit, or signal termination
        """
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd),
                env=dict(env) if env is not None else None,
            )
        except OSError as e:
            raise CommandError(command, cwd, source=source, reason=e.strerror or str(e)) from e

        stdout, stderr = await process.communicate()
        stderr_text = decode_output(stderr)

        if process.returncode != 0:
            raise CommandError(
                command,
                cwd,
                returncode=process.returncode,
                stderr=stderr_text,
                source=source,
            )

        if stderr_text:
            logger.debug(f"{source}: {command!r} wrote to stderr: {stderr_text.rstrip()}")

        return decode_output(stdout)
