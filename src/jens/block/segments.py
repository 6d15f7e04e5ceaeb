"""Line segments and lines of a Block.

A Line is a list of segments, each one of:

- ``Content(text)``: literal text, never modified,
- ``Placeholder(name)``: unresolved substitution point,
- ``Nested(block)``: a sub-Block owned by this line.

Segments are frozen. The only state change a line ever sees is a
``Placeholder`` being swapped for a ``Nested`` segment by ``Line.set``;
nothing turns back into a ``Placeholder``, so a name is resolved at most
once per Block.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from itertools import chain
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jens.block.core import Block


@dataclass(frozen=True, slots=True)
class Content:
    """Literal text."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Unresolved placeholder; renders as ``${name}``."""

    name: str

    @property
    def marker(self) -> str:
        return f"${{{self.name}}}"


@dataclass(frozen=True, slots=True)
class Nested:
    """A Block embedded in a line."""

    block: Block


LineSegment = Content | Placeholder | Nested


def whitespace_of(prefix: str) -> str:
    """Replace every character with a space, keeping tabs as tabs."""
    return "".join("\t" if c == "\t" else " " for c in prefix)


@dataclass(slots=True)
class Line:
    """A single line of a Block.

    Blocks embedded in a line keep the column they were inserted at: every
    line after the first is indented by the whitespace equivalent of what
    was printed before the insertion point.
    """

    segments: list[LineSegment] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> Line:
        return cls([Content(text)])

    def set(self, placeholder_name: str, content: Block) -> None:
        """Replace matching placeholders with private copies of ``content``."""
        for i, segment in enumerate(self.segments):
            if isinstance(segment, Placeholder) and segment.name == placeholder_name:
                self.segments[i] = Nested(content.clone())

    def clone(self) -> Line:
        return Line(
            [
                Nested(segment.block.clone()) if isinstance(segment, Nested) else segment
                for segment in self.segments
            ]
        )

    def placeholders(self) -> list[str]:
        """Unresolved placeholder names in this line and its nested blocks."""
        return list(iter_placeholders([self]))

    def write_to(self, append: Callable[[str], None], prefix: str) -> None:
        """Write this line through ``append``.

        ``prefix`` is the indentation inherited from the enclosing Block.
        Content text extends it, so a nested Block lines up under the column
        where it was inserted.
        """
        write_lines([self], append, prefix)


def iter_placeholders(lines: Iterable[Line]) -> Iterator[str]:
    """Yield unresolved placeholder names depth-first, in document order."""
    stack: list[Iterator[LineSegment]] = [chain.from_iterable(line.segments for line in lines)]
    while stack:
        segment = next(stack[-1], None)
        if segment is None:
            stack.pop()
        elif isinstance(segment, Placeholder):
            yield segment.name
        elif isinstance(segment, Nested):
            stack.append(chain.from_iterable(line.segments for line in segment.block.lines))


class _LinesFrame:
    __slots__ = ("lines", "prefix", "started")

    def __init__(self, lines: Iterable[Line], prefix: str) -> None:
        self.lines = iter(lines)
        self.prefix = prefix
        self.started = False


class _SegmentsFrame:
    __slots__ = ("segments", "prefix")

    def __init__(self, segments: Iterable[LineSegment], prefix: str) -> None:
        self.segments = iter(segments)
        self.prefix = prefix


def write_lines(lines: Iterable[Line], append: Callable[[str], None], prefix: str = "") -> None:
    """Write ``lines`` through ``append``; lines after the first start with ``prefix``.

    Nested Blocks are walked with an explicit stack, so nesting depth is not
    limited by the interpreter's recursion limit.
    """
    stack: list[_LinesFrame | _SegmentsFrame] = [_LinesFrame(lines, prefix)]
    while stack:
        frame = stack[-1]
        if isinstance(frame, _LinesFrame):
            line = next(frame.lines, None)
            if line is None:
                stack.pop()
                continue
            if frame.started:
                append("\n")
                append(frame.prefix)
            frame.started = True
            stack.append(_SegmentsFrame(line.segments, frame.prefix))
            continue

        segment = next(frame.segments, None)
        if segment is None:
            stack.pop()
        elif isinstance(segment, Content):
            frame.prefix += segment.text
            append(segment.text)
        elif isinstance(segment, Placeholder):
            append(segment.marker)
        elif isinstance(segment, Nested):
            stack.append(_LinesFrame(segment.block.lines, whitespace_of(frame.prefix)))
        else:
            raise TypeError(f"Unexpected line segment: {segment!r}")
