"""Template file parser for Jens.

Turns template source into ``TemplateDef`` nodes. Errors are raised as
``ParseError`` (a ``TemplateSyntaxError``) with the offending line attached.
"""

from jens.parser.core import Parser, parse
from jens.parser.errors import ParseError

__all__ = ["ParseError", "Parser", "parse"]
