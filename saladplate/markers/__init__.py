"""
Marker grammars and lexing.
Discovery is pure: resolution lives in saladplate.resolvers.
"""

from .lexer import (
    GRAMMARS,
    OPENERS,
    PASS_ORDER,
    Literal,
    Marker,
    MarkerKind,
    Span,
    assemble,
    find_unterminated,
    markers,
    scan,
)

__all__ = [
    "GRAMMARS",
    "OPENERS",
    "PASS_ORDER",
    "Literal",
    "Marker",
    "MarkerKind",
    "Span",
    "assemble",
    "find_unterminated",
    "markers",
    "scan",
]
