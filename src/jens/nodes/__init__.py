"""Parsed template model for Jens.

Template source is parsed once into immutable nodes:

    TemplateDef(name, indent_ignored, lines)
    └── TemplateLine(indentation, segments)
        ├── Data(value)     literal text
        └── Name(name)      placeholder reference

Blocks are built from these nodes on every lookup; the nodes themselves are
never mutated.
"""

from jens.nodes.base import Node
from jens.nodes.template import Data, Name, Segment, TemplateDef, TemplateLine

__all__ = [
    "Data",
    "Name",
    "Node",
    "Segment",
    "TemplateDef",
    "TemplateLine",
]
