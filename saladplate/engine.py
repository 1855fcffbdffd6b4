"""
Substitution engine.

Runs three sequential passes over a document (variables, includes, commands)
and normalizes trailing newlines. Each pass lexes its input, resolves every
marker concurrently, then reassembles the text in document order. Included
files are templated recursively relative to their own directory.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import IncludeCycleError
from .markers import Marker, MarkerKind, PASS_ORDER, assemble, find_unterminated, markers, scan
from .resolvers import CommandRunner, EnvironmentResolver, IncludeReader


logger = logging.getLogger(__name__)

BIN = "saladplate"

# Source location for documents read from standard input.
STDIN = "/dev/stdin"

SourceLocation = Union[str, Path, None]


@dataclass
class Options:
    """Templating options."""
    debug: bool = False
    environment: Dict[str, str] = field(default_factory=dict)


def is_stdin(source: SourceLocation) -> bool:
    return source is None or str(source) == STDIN


def source_name(source: SourceLocation) -> str:
    return STDIN if is_stdin(source) else str(source)


def effective_directory(source: SourceLocation) -> Path:
    """
    Directory used for relative includes and as command working directory.

    Standard input uses the current working directory; files use their parent.
    """
    if is_stdin(source):
        return Path.cwd()
    return Path(source).parent


def include_path(source: SourceLocation, payload: str) -> Path:
    """
    Path of an include, always under the effective directory.

    A leading separator does not escape the directory: ``$<</etc/x>>`` in
    ``docs/a.txt`` reads ``docs/etc/x``.
    """
    return effective_directory(source) / payload.lstrip("/" + os.sep)


def normalize_newlines(text: str) -> str:
    """Collapse trailing newlines to exactly one; empty text stays empty."""
    if not text:
        return text
    return text.rstrip('\n') + '\n'


class TemplateEngine:
    """
    Resolves ${{ }}, $<< >> and $(( )) markers in documents.

    Holds no per-document state; one engine can template many documents
    concurrently.
    """

    def __init__(
        self,
        options: Optional[Options] = None,
        environment: Optional[EnvironmentResolver] = None,
        reader: Optional[IncludeReader] = None,
        runner: Optional[CommandRunner] = None,
    ):
        """
        Initialize engine.

        Args:
            options: Templating options
            environment: Variable resolver (default: process env + options.environment)
            reader: Include reader
            runner: Command runner
        """
        self.options = options or Options()
        self.environment = environment or EnvironmentResolver(self.options.environment)
        self.reader = reader or IncludeReader()
        self.runner = runner or CommandRunner()

    async def template(self, content: str, source: SourceLocation = None) -> str:
        """
        Template ``content`` read from ``source``.

        Args:
            content: Document text
            source: Path the document was read from, or None/STDIN

        Returns:
            Fully resolved text

        Raises:
            TemplateError: If any include or command fails
        """
        chain: Tuple[str, ...] = ()
        if not is_stdin(source):
            chain = (self._identity(Path(source)),)
        return await self._template(content, source, chain)

    async def _template(self, content: str, source: SourceLocation, chain: Tuple[str, ...]) -> str:
        self._warn_unterminated(content, source)
        for kind in PASS_ORDER:
            content = await self._run_pass(content, kind, source, chain)
        return normalize_newlines(content)

    async def _run_pass(
        self,
        text: str,
        kind: MarkerKind,
        source: SourceLocation,
        chain: Tuple[str, ...],
    ) -> str:
        spans = scan(text, kind)
        found = markers(spans)
        if not found:
            return text

        if kind is MarkerKind.VARIABLE:
            resolutions = [self._resolve_variable(marker, source) for marker in found]
        elif kind is MarkerKind.INCLUDE:
            resolutions = await self._gather([self._resolve_include(marker, source, chain) for marker in found])
        else:
            resolutions = await self._gather([self._resolve_exec(marker, source) for marker in found])

        return assemble(spans, resolutions)

    def _warn_unterminated(self, content: str, source: SourceLocation) -> None:
        # Only the document's own text; included files report their own.
        for kind in PASS_ORDER:
            for offset in find_unterminated(scan(content, kind), kind):
                logger.warning(f"{source_name(source)}: unmatched {kind.value} marker at offset {offset} left as is")

    async def _gather(self, resolutions: Sequence[Awaitable[str]]) -> List[str]:
        # Let every sibling finish before failing so no task is left running;
        # the left-most failure wins.
        results = await asyncio.gather(*resolutions, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    def _resolve_variable(self, marker: Marker, source: SourceLocation) -> str:
        if self.options.debug:
            logger.debug(f"{source_name(source)}: evaluating {marker.payload} for replacement...")
        return self.environment.resolve(marker.payload)

    async def _resolve_include(self, marker: Marker, source: SourceLocation, chain: Tuple[str, ...]) -> str:
        include = include_path(source, marker.payload)
        if self.options.debug:
            logger.debug(f"{source_name(source)}: reading {include} for replacement...")

        identity = self._identity(include)
        if identity in chain:
            raise IncludeCycleError(include, chain, source_name(source))

        content = await self.reader.read(include, source_name(source))
        return await self._template(content, include, chain + (identity,))

    async def _resolve_exec(self, marker: Marker, source: SourceLocation) -> str:
        cwd = effective_directory(source)
        if self.options.debug:
            logger.debug(f"{source_name(source)}: executing {marker.payload} for replacement...")
        return await self.runner.run(
            marker.payload,
            cwd,
            env=self.environment.child_env(),
            source=source_name(source),
        )

    @staticmethod
    def _identity(path: Path) -> str:
        return os.path.realpath(path)


async def template(content: str, source: SourceLocation = None, options: Optional[Options] = None) -> str:
    """
    Replace variables, file includes, and command executions in ``content``.

    ``content`` is assumed to have been read from ``source`` (a path, or
    None / STDIN for standard input). Trailing newlines are collapsed so
    the output ends with exactly one.
    """
    return await TemplateEngine(options).template(content, source)
