"""Jens: indentation-aware text generation from named templates.

Templates are plain example output with ``${placeholders}``; all logic
(iteration, choices, formatting) lives in the host program, which fills
placeholders with strings or with other filled templates.

Quickstart:
    >>> import jens
    >>> file = jens.from_string('''
    ... entry = "${key}": "${value}",
    ...
    ... main =
    ...     var MAP = {
    ...         ${entries}
    ...     };
    ... ----
    ... ''')
    >>> entries = jens.Block.join_map(
    ...     [("smile", "🙂"), ("robot", "🤖")],
    ...     lambda kv, pos: file.template("entry").set("key", kv[0]).set("value", kv[1]),
    ... )
    >>> print(file.template("main").set("entries", entries))
    var MAP = {
        "smile": "🙂",
        "robot": "🤖",
    };

Architecture:
Template Source → Lexer → Parser → TemplateDef nodes → TemplateFile → Block → text

Pipeline stages:
1. **Lexer**: classifies source lines, then scans body content for
   ``${name}`` placeholders and ``\\$`` escapes
2. **Parser**: builds immutable ``TemplateDef`` nodes (name, indentation
   baseline, lines of segments)
3. **TemplateFile**: name-based lookup; every lookup creates a new Block
4. **Block**: ``set``/``join``/``join_map`` compose a tree that renders with
   nested blocks aligned under the column they were inserted at

Thread-Safety:
Parsed files and template definitions are immutable and may be shared.
Blocks are owned by whoever builds them and are not meant to be mutated
from several threads at once.

"""

from jens._types import Token, TokenType
from jens.block import (
    Block,
    Content,
    First,
    Last,
    Line,
    Nested,
    Nth,
    Only,
    Placeholder,
    Position,
)
from jens.environment import (
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    PackageLoader,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnresolvedPlaceholderError,
    build_source_snippet,
)
from jens.nodes import TemplateDef, TemplateLine
from jens.parser import ParseError, parse
from jens.template import TemplateFile, TemplateFunction

__version__ = "0.3.0"


def from_string(
    source: str,
    *,
    name: str | None = None,
    allow_duplicates: bool = True,
) -> TemplateFile:
    """Parse template source into a TemplateFile.

    Raises:
        TemplateSyntaxError: If the source does not follow the grammar.
    """
    return TemplateFile.parse(source, name=name, allow_duplicates=allow_duplicates)


__all__ = [
    "Block",
    "Content",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "First",
    "Last",
    "Line",
    "Nested",
    "Nth",
    "Only",
    "PackageLoader",
    "ParseError",
    "Placeholder",
    "Position",
    "SourceSnippet",
    "TemplateDef",
    "TemplateError",
    "TemplateFile",
    "TemplateFunction",
    "TemplateLine",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "UnresolvedPlaceholderError",
    "__version__",
    "build_source_snippet",
    "from_string",
    "parse",
]
