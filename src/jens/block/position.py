"""Position markers for ``Block.join_map``.

A mapper passed to ``Block.join_map`` receives every item together with
its position in the sequence:

    ============  ===================================
    ``Only()``    the sequence has exactly one item
    ``First()``   first of two or more items
    ``Nth(i)``    neither first nor last, 0-based i
    ``Last()``    last of two or more items
    ============  ===================================

The markers are a closed set of small frozen dataclasses. Test them with
``isinstance`` or use the ``first``/``last`` flags:

    ```python
    def entry(item, position):
        comma = "" if position.last else ","
        return file.template("entry").set("key", item.key).set("comma", comma)
    ```

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class First:
    """First item of a sequence with two or more items."""

    @property
    def first(self) -> bool:
        return True

    @property
    def last(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Nth:
    """Item that is neither first nor last."""

    index: int

    @property
    def first(self) -> bool:
        return False

    @property
    def last(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Last:
    """Last item of a sequence with two or more items."""

    @property
    def first(self) -> bool:
        return False

    @property
    def last(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Only:
    """The single item of a one-item sequence (first and last at once)."""

    @property
    def first(self) -> bool:
        return True

    @property
    def last(self) -> bool:
        return True


Position = First | Nth | Last | Only


def position_of(index: int, length: int) -> Position:
    """Position marker of item ``index`` in a sequence of ``length`` items."""
    if not 0 <= index < length:
        raise IndexError(f"index {index} out of range for {length} item(s)")
    if length == 1:
        return Only()
    if index == 0:
        return First()
    if index == length - 1:
        return Last()
    return Nth(index)


def with_positions(items: Sequence[Any]) -> Iterator[tuple[Any, Position]]:
    """Yield ``(item, position)`` pairs for a materialised sequence."""
    length = len(items)
    for i, item in enumerate(items):
        yield item, position_of(i, length)
