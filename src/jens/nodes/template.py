"""Template definition nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass

from jens.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Data(Node):
    """Literal text inside a template line."""

    value: str


@dataclass(frozen=True, slots=True)
class Name(Node):
    """Placeholder reference: ${name}"""

    name: str


Segment = Data | Name


@dataclass(frozen=True, slots=True)
class TemplateLine(Node):
    """One body line: raw leading whitespace plus its scanned segments.

    An empty line (whitespace only in the source) has no indentation and
    no segments.
    """

    indentation: str = ""
    segments: tuple[Segment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.indentation and not self.segments


@dataclass(frozen=True, slots=True)
class TemplateDef(Node):
    """A named template parsed from a template file.

    Attributes:
        name: Lookup key, unique by convention but not enforced by default.
        indent_ignored: Leading indentation characters stripped from every
            line when the definition is turned into a Block.
        lines: Body lines in source order.

    Example:
        ```
        greeting =
            Hello, ${name}!
        ----
        ```
        parses to ``TemplateDef("greeting", 4, (TemplateLine("    ",
        (Data("Hello, "), Name("name"), Data("!"))),))``.

    """

    name: str
    indent_ignored: int = 0
    lines: tuple[TemplateLine, ...] = ()

    @property
    def placeholder_names(self) -> tuple[str, ...]:
        """Placeholder names in order of first appearance, without duplicates."""
        seen: dict[str, None] = {}
        for line in self.lines:
            for segment in line.segments:
                if isinstance(segment, Name):
                    seen.setdefault(segment.name)
        return tuple(seen)
