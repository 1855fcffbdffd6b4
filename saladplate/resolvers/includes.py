"""File reads for $<< path >> markers."""

import asyncio
from pathlib import Path
from typing import Optional, Union

from ..exceptions import IncludeError


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 file without translating line endings."""
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


class IncludeReader:
    """Reads included files off the event loop."""

    async def read(self, path: Path, source: Optional[str] = None) -> str:
        """
        Read the full text of ``path``.

        Args:
            path: File to read
            source: Document containing the include, for error messages

        Returns:
            File contents

        Raises:
            IncludeError: If the file is missing, unreadable, or not UTF-8
        """
        try:
            return await asyncio.to_thread(read_text, path)
        except OSError as e:
            raise IncludeError(path, source, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise IncludeError(path, source, f"not valid UTF-8 ({e.reason})") from e
