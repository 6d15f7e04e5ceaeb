"""Base node class for the Jens template model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all parsed template nodes.

    All nodes track their source location for error reporting.
    Nodes are immutable for thread-safety.

    Locations do not take part in equality, so two nodes parsed from
    different places compare equal when their content does.

    """

    lineno: int = field(default=0, compare=False, repr=False)
    col_offset: int = field(default=0, compare=False, repr=False)
