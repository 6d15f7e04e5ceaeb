"""Token types for the Jens line lexer.

The lexer works one source line at a time. Each line becomes exactly one
Token whose type tells the parser how the line participates in the grammar:

    greeting = Hello, ${name}!     DECLARATION (one-liner, value carries body)
    main =                         DECLARATION (opens a multi-line body)
        line one                   TEXT
                                   EMPTY
    # notes                        COMMENT (only meaningful between templates)
    ----                           TERMINATOR

Whether a line is a body line or a top-level line depends on parser state,
so the lexer reports the raw classification and the parser decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Classification of a single source line."""

    DECLARATION = "declaration"
    TERMINATOR = "terminator"
    EMPTY = "empty"
    COMMENT = "comment"
    TEXT = "text"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A classified source line.

    Attributes:
        type: Line classification.
        value: Line text without its line break.
        lineno: 1-based line number.
        col_offset: 0-based column of the interesting part of the line (the
            start of inline content for one-liners, 0 otherwise).
        name: Template name of a DECLARATION token.
        inline: Inline content of a one-liner declaration, or None.
        width: Number of dashes of a TERMINATOR token.
    """

    type: TokenType
    value: str
    lineno: int
    col_offset: int = 0
    name: str | None = None
    inline: str | None = None
    width: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"
