"""Output routing for rendered documents."""

import re
import sys
from pathlib import Path
from typing import IO, Optional

from saladplate.engine import is_stdin


EXTENSION_PATTERN = re.compile(r'\.[^.]+$')


class OutputCoordinator:
    """
    Owns where rendered documents are written for one batch.

    With ``output`` every document is appended to that file; with
    ``directory`` each document gets its own file; otherwise everything goes
    to standard output. The combined handle is opened on first write and
    released by ``close()``.
    """

    def __init__(
        self,
        output: Optional[str] = None,
        directory: Optional[str] = None,
        suffix: Optional[str] = None,
        stream: Optional[IO[str]] = None,
    ):
        """
        Initialize coordinator.

        Args:
            output: Combined output file; overrides directory and suffix
            directory: Directory for per-document output files
            suffix: Replacement extension for per-document files
            stream: Combined stream when no output file is given (default: sys.stdout)
        """
        self.output = Path(output) if output else None
        self.directory = Path(directory) if directory and not output else None
        self.suffix = suffix
        self._stream = stream
        self._handle: Optional[IO[str]] = None
        self._owns_handle = False

    def destination_for(self, source: Optional[str]) -> str:
        """Name of the destination a document from ``source`` is written to."""
        if self.output:
            return str(self.output)
        if self.directory:
            return str(self._directory_path(self.directory, source))
        return "<stdout>"

    def _directory_path(self, directory: Path, source: Optional[str]) -> Path:
        name = "stdin" if is_stdin(source) else Path(source).name
        if self.suffix:
            name = EXTENSION_PATTERN.sub(lambda _: self.suffix, name)
        return directory / name

    def _combined(self) -> IO[str]:
        if self._handle is None:
            if self.output:
                self.output.parent.mkdir(parents=True, exist_ok=True)
                self._handle = open(self.output, 'w', encoding='utf-8', newline='')
                self._owns_handle = True
            else:
                self._handle = self._stream or sys.stdout
        return self._handle

    def write(self, source: Optional[str], text: str) -> str:
        """
        Write a rendered document.

        Returns:
            The destination name
        """
        if self.directory:
            path = self._directory_path(self.directory, source)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
            return str(path)

        self._combined().write(text)
        return self.destination_for(source)

    def close(self) -> None:
        """Release the combined handle, if one was opened."""
        if self._handle is None:
            return
        if self._owns_handle:
            self._handle.close()
        else:
            self._handle.flush()
        self._handle = None
        self._owns_handle = False

    def __enter__(self) -> "OutputCoordinator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
