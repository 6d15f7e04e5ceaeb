"""Terminal colors for Jens diagnostics.

Syntax errors and runtime errors are printed with ANSI colors when stdout is
a terminal. Colors follow semantic roles rather than raw color names so the
exception classes only say *what* a piece of text is:

    >>> hint("Hint:")          # green when colors are on
    >>> location("api.jens:4")  # cyan

Respects:
    - NO_COLOR (https://no-color.org/) disables colors
    - FORCE_COLOR enables colors even when NO_COLOR is set or stdout is not a TTY
"""

from __future__ import annotations

import os
import re
import sys

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
}

# Semantic role → ANSI styles
_ROLES: dict[str, tuple[str, ...]] = {
    "error_code": ("bright_red", "bold"),
    "location": ("cyan",),
    "line_number": ("yellow",),
    "error_line": ("bright_red",),
    "hint": ("green",),
    "dim": ("dim",),
}

_ANSI_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


# Decided once at import
_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *styles: str) -> str:
    """Wrap text in ANSI codes for ``styles``; plain text when colors are off."""
    if not _USE_COLORS:
        return text
    prefix = "".join(_CODES.get(style, "") for style in styles)
    if not prefix:
        return text
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_RE.sub("", text)


def _role(name: str, text: str) -> str:
    return colorize(text, *_ROLES[name])


def error_code(text: str) -> str:
    return _role("error_code", text)


def location(text: str) -> str:
    return _role("location", text)


def line_number(text: str) -> str:
    return _role("line_number", text)


def error_line(text: str) -> str:
    return _role("error_line", text)


def hint(text: str) -> str:
    return _role("hint", text)


def dim_text(text: str) -> str:
    return _role("dim", text)


def format_error_header(code: str | None, message: str) -> str:
    """``J-PAR-001: message`` with the code highlighted, or just the message."""
    if code:
        return f"{error_code(code)}: {message}"
    return message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """One snippet line: ``>  4 | content`` for the error line, `` 3 | content`` otherwise."""
    marker = ">" if is_error else " "
    number = line_number(f"{marker}{lineno:>3}")
    text = error_line(content) if is_error else dim_text(content)
    return f"{number} | {text}"
