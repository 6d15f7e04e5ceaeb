"""Exceptions for the Jens template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError          # Template or template file not found
├── TemplateSyntaxError            # Parse-time grammar error
│   └── ParseError                 # Raised by the parser, carries the Token
└── TemplateRuntimeError           # Composition/render-time error
    └── UnresolvedPlaceholderError # Strict render met a ${placeholder}

Error Messages:
Syntax errors point at the offending line of the template file:

    ```
    Syntax Error: Template 'main' is never terminated
      --> templates/api.jens:3
       |
      3 | main =
       |
    Hint: Close the template with a line of dashes, e.g. '----'
    ```

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum

from jens.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for Jens errors.

    Format: J-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (composition/rendering), TPL (lookup/loading)
    """

    # Parser errors (J-PAR-xxx)
    INVALID_DECLARATION = "J-PAR-001"
    UNTERMINATED_TEMPLATE = "J-PAR-002"
    UNEXPECTED_TERMINATOR = "J-PAR-003"
    DUPLICATE_TEMPLATE = "J-PAR-004"

    # Runtime errors (J-RUN-xxx)
    RUNTIME_ERROR = "J-RUN-001"
    UNRESOLVED_PLACEHOLDER = "J-RUN-002"

    # Template loading errors (J-TPL-xxx)
    TEMPLATE_NOT_FOUND = "J-TPL-001"
    SYNTAX_ERROR = "J-TPL-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'runtime', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in Rust-inspired diagnostic style with colors."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
            if is_error and self.column is not None:
                caret = " " * self.column + "^"
                parts.append(f"{terminal.dim_text('     |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.

    Returns:
        SourceSnippet with surrounding context lines.
    """
    all_lines = source.split("\n")
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i].rstrip("\r")) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


class TemplateError(Exception):
    """Base exception for all Jens template errors.

    All template-related exceptions inherit from this class, enabling
    broad exception handling:

        >>> try:
        ...     env.get_file("api.jens").template("main")
        ... except TemplateError as e:
        ...     log.error(f"Template error: {e}")

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short, human-readable summary.

        Produces a clean diagnostic string suitable for terminal display,
        without Python traceback noise.
        """
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{terminal.error_code(self.code.value)}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """Template name or template file could not be found.

    Raised by ``TemplateFile.template(name)`` for an unknown template name
    and by loaders when no source exists for a file name.

    Example:
            >>> file.template("entyr")
        TemplateNotFoundError: Template 'entyr' not found. Did you mean 'entry'?

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, message: str, name: str | None = None):
        self.message = message
        self.name = name
        super().__init__(message)

    @classmethod
    def missing(
        cls,
        kind: str,
        name: str,
        available: Sequence[str],
        location: str | None = None,
    ) -> TemplateNotFoundError:
        """``<kind> '<name>' not found [in <location>]`` plus a did-you-mean or the choices."""
        msg = f"{kind} '{name}' not found"
        if location:
            msg += f" in {location}"
        matches = get_close_matches(name, available, n=1, cutoff=0.6)
        if matches:
            msg += f". Did you mean '{matches[0]}'?"
        elif available:
            msg += f". Available: {', '.join(available[:10])}"
            if len(available) > 10:
                msg += f" ... ({len(available)} total)"
        return cls(msg, name=name)


class TemplateSyntaxError(TemplateError):
    """Parse-time grammar error in template source.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line. If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.filename = filename
        self.source = source
        self.col_offset = col_offset
        self.suggestion = suggestion
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        location = self.filename or self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _format_message(self) -> str:
        header = f"Syntax Error: {self.message}\n  --> {self.location}"

        # Show source snippet when available
        if self.source and self.lineno:
            lines = self.source.split("\n")
            if 0 < self.lineno <= len(lines):
                error_line = lines[self.lineno - 1].rstrip("\r")
                header += f"\n   |\n{self.lineno:>3} | {error_line}"
                if self.col_offset is not None:
                    header += f"\n   | {' ' * self.col_offset}^"

        if self.suggestion:
            header += f"\n\nHint: {self.suggestion}"

        return header

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        parts: list[str] = [
            terminal.format_error_header(self.code.value if self.code else None, self.message),
            f"  --> {terminal.location(self.location)}",
        ]

        if self.source and self.lineno:
            snippet = build_source_snippet(
                self.source, self.lineno, context_lines=1, column=self.col_offset
            )
            parts.append(snippet.format())

        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")

        return "\n".join(parts)


class TemplateRuntimeError(TemplateError):
    """Error raised while composing or rendering a Block.

    Attributes:
        message: Error description
        template_name: Name of the template the Block came from, if known
        suggestion: Actionable fix suggestion

    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Template: {self.template_name}")
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        """Format runtime error as structured terminal diagnostic."""
        parts: list[str] = [
            terminal.format_error_header(
                self.code.value if self.code else None, f"Runtime Error: {self.message}"
            )
        ]
        if self.template_name:
            parts.append(f"  Template: {terminal.location(self.template_name)}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)


class UnresolvedPlaceholderError(TemplateRuntimeError):
    """Strict rendering found placeholders that were never set.

    Non-strict rendering prints unresolved placeholders as ``${name}`` so
    they are easy to spot in generated output; ``render(strict=True)``
    raises this error instead.

    Example:
            >>> file.template("entry").set("key", "a").render(strict=True)
        UnresolvedPlaceholderError: Unresolved placeholder(s): value

    """

    code: ErrorCode | None = ErrorCode.UNRESOLVED_PLACEHOLDER

    def __init__(self, names: tuple[str, ...], *, template_name: str | None = None):
        self.names = names
        listed = ", ".join(names)
        super().__init__(
            f"Unresolved placeholder(s): {listed}",
            template_name=template_name,
            suggestion=f"Call .set() for {listed} before rendering",
        )
