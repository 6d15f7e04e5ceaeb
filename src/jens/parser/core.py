"""Template file parser.

Consumes the line tokens produced by ``jens.lexer.tokenize`` and builds the
ordered list of ``TemplateDef`` nodes.

Grammar (line oriented, whitespace significant):

    file        := (blank | comment | template)*
    template    := one_liner | declaration body* terminator
    one_liner   := NAME '=' content
    declaration := NAME '='
    body        := any line that is not a terminator
    terminator  := '-'+

The terminator's dash count is the template's indentation baseline
(``indent_ignored``): a body indented by four spaces is closed with ``----``.
Body lines are never reinterpreted, so a body may contain lines that look
like declarations, comments, or indented dash runs.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from jens._types import Token, TokenType
from jens.environment.exceptions import ErrorCode
from jens.lexer import IDENTIFIER_RE, scan_segments, split_indentation, tokenize
from jens.nodes import TemplateDef, TemplateLine
from jens.parser.errors import ParseError

logger = logging.getLogger(__name__)


class Parser:
    """Parse template source into template definitions.

    Thread-safe: each Parser instance owns its token list and cursor; create
    one per source text.

    Example:
            >>> defs = Parser("greeting = Hello, ${name}!\\n").parse()
            >>> defs[0].name, defs[0].placeholder_names
            ('greeting', ('name',))

    """

    __slots__ = ("_allow_duplicates", "_filename", "_name", "_pos", "_source", "_tokens")

    def __init__(
        self,
        source: str,
        name: str | None = None,
        filename: str | None = None,
        *,
        allow_duplicates: bool = True,
    ):
        self._source = source
        self._name = name
        self._filename = filename
        self._allow_duplicates = allow_duplicates
        self._tokens = tokenize(source)
        self._pos = 0

    def parse(self) -> list[TemplateDef]:
        """Parse the whole source.

        Raises:
            ParseError: On a malformed declaration, a stray terminator, an
                unterminated template, or a duplicate name when duplicates
                are not allowed.
        """
        templates: list[TemplateDef] = []
        seen: dict[str, int] = {}

        while True:
            token = self._advance()
            if token.type == TokenType.EOF:
                break
            if token.type in (TokenType.EMPTY, TokenType.COMMENT):
                continue
            if token.type == TokenType.DECLARATION:
                template = self._parse_template(token)
                self._check_duplicate(template, token, seen)
                templates.append(template)
                continue
            if token.type == TokenType.TERMINATOR:
                raise self._error(
                    "Terminator line outside of a template",
                    token,
                    suggestion="Every '---' line must close a template opened with 'name ='",
                    code=ErrorCode.UNEXPECTED_TERMINATOR,
                )
            raise self._declaration_error(token)

        logger.debug(f"Parsed {len(templates)} template(s) from {self._location}")
        return templates

    # -- helpers -------------------------------------------------------------

    @property
    def _location(self) -> str:
        return self._filename or self._name or "<template>"

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type != TokenType.EOF:
            self._pos += 1
        return token

    def _parse_template(self, declaration: Token) -> TemplateDef:
        name = declaration.name or ""
        if declaration.inline is not None:
            segments = scan_segments(
                declaration.inline, declaration.lineno, declaration.col_offset
            )
            line = TemplateLine(
                "", segments, lineno=declaration.lineno, col_offset=declaration.col_offset
            )
            return TemplateDef(name, 0, (line,), lineno=declaration.lineno)

        lines: list[TemplateLine] = []
        while True:
            token = self._advance()
            if token.type == TokenType.EOF:
                raise self._error(
                    f"Template '{name}' is never terminated",
                    declaration,
                    col_offset=0,
                    suggestion="Close the template with a line of dashes, e.g. '----'",
                    code=ErrorCode.UNTERMINATED_TEMPLATE,
                )
            if token.type == TokenType.TERMINATOR:
                return TemplateDef(
                    name, token.width, tuple(lines), lineno=declaration.lineno
                )
            lines.append(self._parse_body_line(token))

    def _parse_body_line(self, token: Token) -> TemplateLine:
        if token.type == TokenType.EMPTY:
            return TemplateLine(lineno=token.lineno)
        indentation, content = split_indentation(token.value)
        segments = scan_segments(content, token.lineno, len(indentation))
        return TemplateLine(indentation, segments, lineno=token.lineno)

    def _check_duplicate(self, template: TemplateDef, token: Token, seen: dict[str, int]) -> None:
        first = seen.setdefault(template.name, token.lineno)
        if first == token.lineno:
            return
        if not self._allow_duplicates:
            raise self._error(
                f"Duplicate template name '{template.name}' (first defined on line {first})",
                token,
                suggestion="Rename one of the templates",
                code=ErrorCode.DUPLICATE_TEMPLATE,
            )
        logger.warning(
            f"Template '{template.name}' in {self._location}:{token.lineno} "
            f"shadows the definition on line {first}; lookups return the first one"
        )

    def _declaration_error(self, token: Token) -> ParseError:
        line = token.value
        if line[:1] in (" ", "\t"):
            return self._error(
                "Indented line outside of a template",
                token,
                suggestion="Body lines must follow a 'name =' declaration",
                code=ErrorCode.INVALID_DECLARATION,
            )
        ident = IDENTIFIER_RE.match(line)
        if ident:
            return self._error(
                "Expected '=' after template name",
                token,
                col_offset=ident.end(),
                suggestion=f"Write '{ident.group()} =' to start a template",
                code=ErrorCode.INVALID_DECLARATION,
            )
        return self._error(
            "Expected a template declaration 'name ='",
            token,
            code=ErrorCode.INVALID_DECLARATION,
        )

    def _error(
        self,
        message: str,
        token: Token,
        *,
        col_offset: int | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ) -> ParseError:
        if col_offset is not None:
            token = replace(token, col_offset=col_offset)
        return ParseError(
            message,
            token,
            source=self._source,
            filename=self._filename,
            name=self._name,
            suggestion=suggestion,
            code=code,
        )


def parse(
    source: str,
    *,
    name: str | None = None,
    filename: str | None = None,
    allow_duplicates: bool = True,
) -> list[TemplateDef]:
    """Parse template source into its template definitions, in source order."""
    return Parser(source, name, filename, allow_duplicates=allow_duplicates).parse()
