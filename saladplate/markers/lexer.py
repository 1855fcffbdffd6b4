"""
Marker lexing and reassembly.

Splits a pass's input text into an ordered sequence of literal and marker
spans, and stitches resolved marker text back in original order.

Grammars (delimiters are literal, non-nesting, non-escapable):
- variable: ${{ NAME }}
- include:  $<< path/to/file >>
- exec:     $(( shell command ))
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Union


class MarkerKind(str, Enum):
    """Marker kinds, in the order their passes run."""
    VARIABLE = "variable"
    INCLUDE = "include"
    EXEC = "exec"


# The payload excludes every character of the closing delimiter, so matching
# stops at the first closer and an empty payload never matches.
GRAMMARS: Dict[MarkerKind, re.Pattern] = {
    MarkerKind.VARIABLE: re.compile(r'\$\{\{([^}]+)\}\}'),
    MarkerKind.INCLUDE: re.compile(r'\$<<([^>]+)>>'),
    MarkerKind.EXEC: re.compile(r'\$\(\(([^)]+)\)\)'),
}

OPENERS: Dict[MarkerKind, str] = {
    MarkerKind.VARIABLE: '${{',
    MarkerKind.INCLUDE: '$<<',
    MarkerKind.EXEC: '$((',
}

PASS_ORDER = (MarkerKind.VARIABLE, MarkerKind.INCLUDE, MarkerKind.EXEC)


@dataclass(frozen=True)
class Literal:
    """Text copied to the output unchanged."""
    text: str
    start: int


@dataclass(frozen=True)
class Marker:
    """A matched placeholder."""
    kind: MarkerKind
    payload: str  # Inner text, trimmed
    raw: str  # Full matched span including delimiters
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.raw)


Span = Union[Literal, Marker]


def scan(text: str, kind: MarkerKind) -> List[Span]:
    """
    Split text into literal and marker spans for one pass.

    Args:
        text: Pass input
        kind: Marker kind this pass resolves

    Returns:
        Spans covering the whole of ``text`` in order; empty literals are omitted
    """
    spans: List[Span] = []
    position = 0

    for match in GRAMMARS[kind].finditer(text):
        if match.start() > position:
            spans.append(Literal(text[position:match.start()], position))
        spans.append(Marker(
            kind=kind,
            payload=match.group(1).strip(),
            raw=match.group(0),
            start=match.start(),
        ))
        position = match.end()

    if position < len(text):
        spans.append(Literal(text[position:], position))

    return spans


def markers(spans: Sequence[Span]) -> List[Marker]:
    """Markers of a span sequence, in document order."""
    return [span for span in spans if isinstance(span, Marker)]


def assemble(spans: Sequence[Span], resolutions: Sequence[str]) -> str:
    """
    Rebuild text from spans, replacing each marker with its resolution.

    Args:
        spans: Output of ``scan``
        resolutions: One string per marker, in document order

    Returns:
        The pass output

    Raises:
        ValueError: If the number of resolutions does not match the markers
    """
    count = sum(1 for span in spans if isinstance(span, Marker))
    if count != len(resolutions):
        raise ValueError(f"Expected {count} resolutions, got {len(resolutions)}")

    parts = []
    replacements = iter(resolutions)
    for span in spans:
        if isinstance(span, Marker):
            parts.append(next(replacements))
        else:
            parts.append(span.text)
    return "".join(parts)


def find_unterminated(spans: Sequence[Span], kind: MarkerKind) -> List[int]:
    """
    Offsets of openers for ``kind`` left in literal text.

    These are markers that did not match the grammar (unterminated, or
    empty) and will pass through verbatim.
    """
    opener = OPENERS[kind]
    offsets = []
    for span in spans:
        if not isinstance(span, Literal):
            continue
        index = span.text.find(opener)
        while index != -1:
            offsets.append(span.start + index)
            index = span.text.find(opener, index + len(opener))
    return offsets
