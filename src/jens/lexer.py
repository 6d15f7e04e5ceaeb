"""Lexer for Jens template files.

Works in two phases:

1. ``tokenize()`` classifies every source line (declaration, terminator,
   empty, comment, text). Indentation is structural, so this phase only
   looks at whole lines.
2. ``scan_segments()`` scans the content of one body line for
   ``${name}`` placeholders and ``\\$`` escapes. It never sees indentation.

Keeping the phases apart means the escape/placeholder grammar stays the same
whatever mix of spaces and tabs a template uses.

Example:
    >>> [t.type.name for t in tokenize("x = ${y}\\n")]
    ['DECLARATION', 'EOF']
    >>> scan_segments("a ${b} \\\\$c")
    (Data(value='a '), Name(name='b'), Data(value=' '), Data(value='$'), Data(value='c'))

"""

from __future__ import annotations

import re

from jens._types import Token, TokenType
from jens.nodes import Data, Name, Segment

# Compiled once at import (immutable, shared across threads)
IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DECLARATION_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)[ \t]*=[ \t]*(.*)\Z")
_TERMINATOR_RE = re.compile(r"(-+)[ \t]*\Z")
_INDENT_RE = re.compile(r"[ \t]*")
_SEGMENT_RE = re.compile(r"\\\$|\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def split_lines(source: str) -> list[str]:
    """Split source on ``\\n`` and drop a trailing ``\\r`` from each line.

    A final line break does not start an extra line. Other characters that
    ``str.splitlines()`` treats as line boundaries are kept as content.
    """
    lines = source.split("\n")
    if lines and lines[-1] == "" and source.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def classify_line(line: str, lineno: int) -> Token:
    """Classify one source line (without its line break)."""
    if not line.strip():
        return Token(TokenType.EMPTY, line, lineno)

    match = _TERMINATOR_RE.match(line)
    if match:
        return Token(TokenType.TERMINATOR, line, lineno, width=len(match.group(1)))

    match = _DECLARATION_RE.match(line)
    if match:
        inline = match.group(2)
        return Token(
            TokenType.DECLARATION,
            line,
            lineno,
            col_offset=match.start(2),
            name=match.group(1),
            inline=inline if inline.strip() else None,
        )

    if line.lstrip().startswith("#"):
        return Token(TokenType.COMMENT, line, lineno)

    return Token(TokenType.TEXT, line, lineno)


def tokenize(source: str) -> list[Token]:
    """Classify every line of ``source``; the list always ends with EOF."""
    lines = split_lines(source)
    tokens = [classify_line(line, lineno) for lineno, line in enumerate(lines, 1)]
    tokens.append(Token(TokenType.EOF, "", len(lines) + 1))
    return tokens


def split_indentation(line: str) -> tuple[str, str]:
    """Split a body line into (leading spaces/tabs, remaining content)."""
    end = _INDENT_RE.match(line).end()
    return line[:end], line[end:]


def scan_segments(text: str, lineno: int = 0, col_offset: int = 0) -> tuple[Segment, ...]:
    """Scan line content into Data and Name segments.

    - ``${identifier}`` becomes a Name segment.
    - ``\\$`` becomes its own ``Data("$")`` segment; whatever follows is
      ordinary text, so ``\\${x}`` yields ``Data("$")``, ``Data("{x}")``.
    - Everything else is literal; adjacent literal text is one segment.

    A ``$`` that does not open a well-formed placeholder, and a backslash
    not followed by ``$``, are plain text.
    """
    segments: list[Segment] = []
    pos = 0
    for match in _SEGMENT_RE.finditer(text):
        start = match.start()
        if start > pos:
            segments.append(Data(text[pos:start], lineno=lineno, col_offset=col_offset + pos))
        name = match.group(1)
        if name is None:
            segments.append(Data("$", lineno=lineno, col_offset=col_offset + start))
        else:
            segments.append(Name(name, lineno=lineno, col_offset=col_offset + start))
        pos = match.end()
    if pos < len(text):
        segments.append(Data(text[pos:], lineno=lineno, col_offset=col_offset + pos))
    return tuple(segments)
