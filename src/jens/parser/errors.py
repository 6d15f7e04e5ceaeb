"""Parser error handling for Jens.

Provides ParseError, a TemplateSyntaxError that remembers the line token it
was raised for.
"""

from __future__ import annotations

from jens._types import Token
from jens.environment.exceptions import ErrorCode, TemplateSyntaxError


class ParseError(TemplateSyntaxError):
    """Grammar error with the offending line token attached.

    Displays errors with source code snippets and visual pointers:

        Syntax Error: Expected '=' after template name
          --> api.jens:4:0
           |
          4 | entry
           | ^

    """

    def __init__(
        self,
        message: str,
        token: Token,
        source: str | None = None,
        filename: str | None = None,
        name: str | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.token = token
        super().__init__(
            message,
            lineno=token.lineno,
            name=name,
            filename=filename,
            source=source,
            col_offset=token.col_offset,
            suggestion=suggestion,
            code=code,
        )
