"""Block composition and rendering.

Re-exports the runtime value types so that ``from jens.block import Block``
works for host programs.
"""

from jens.block.core import Block
from jens.block.position import First, Last, Nth, Only, Position, position_of, with_positions
from jens.block.segments import Content, Line, LineSegment, Nested, Placeholder, whitespace_of

__all__ = [
    "Block",
    "Content",
    "First",
    "Last",
    "Line",
    "LineSegment",
    "Nested",
    "Nth",
    "Only",
    "Placeholder",
    "Position",
    "position_of",
    "whitespace_of",
    "with_positions",
]
