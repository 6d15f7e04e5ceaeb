"""Block: the composable, renderable value host programs build output from.

A Block is a list of Lines; a Line is a list of segments (``Content``,
``Placeholder``, ``Nested``). Blocks are created from parsed templates,
filled with ``set()``, combined with ``join()``/``join_map()`` and finally
rendered to text.

Architecture:
    ```
    Block
    └── Line
        ├── Content("function ")
        ├── Placeholder("name")        → set("name", ...) → Nested(Block)
        └── Nested(Block)              rendered under the current column
    ```

Ownership:
The tree is strictly owned: ``set()`` stores a private copy of its value for
every placeholder it replaces, and ``join()`` stores a copy of every block it
is given. Mutating a Block after handing it to ``set()`` or ``join()`` does
not affect the Blocks it was put into.

Rendering:
Rendering uses the StringBuilder pattern (``buf.append`` + ``"".join``).
Each nested Block is rendered with the whitespace equivalent of everything
already printed on its line as prefix, so multi-line fragments stay aligned:

    >>> body = Block(["a();", "b();"])
    >>> wrapper = Block([Line([Content("  "), Nested(body)]), Line.from_text("}")])
    >>> print(wrapper)
      a();
      b();
    }

Rendering, cloning, equality and ``placeholders()`` walk nested Blocks with an
explicit stack, so nesting depth is not bounded by the recursion limit.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from jens.block.position import Position, with_positions
from jens.block.segments import (
    Content,
    Line,
    Nested,
    Placeholder,
    iter_placeholders,
    write_lines,
)
from jens.environment.exceptions import UnresolvedPlaceholderError
from jens.nodes import Name

if TYPE_CHECKING:
    from jens.nodes import TemplateDef


class Block:
    """One or many lines of text with substitutable placeholders.

    Construction:
        - ``Block()`` / ``Block.empty()``: no lines, renders as ``""``
        - ``Block("text")``: a single line holding the text
        - ``Block(["a", Line(...), ...])``: one line per item
        - ``Block.from_template(definition)``: fresh instance of a parsed template

    Methods:
        set(name, value): Resolve a placeholder (chainable)
        join(blocks): One line per block
        join_map(items, mapper): Map with position markers, then join
        render(strict=False): Produce the final text (also ``str(block)``)
        placeholders(): Names of placeholders still unresolved
        clone(): Independent deep copy

    Example:
        >>> entry = Block.from_template(file.definition("entry"))
        >>> entry.set("key", "smile").set("value", "🙂").render()
        '"smile": "🙂",'

    """

    __slots__ = ("lines", "name")

    def __init__(
        self,
        lines: str | Iterable[Line | str] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        if lines is None:
            self.lines: list[Line] = []
        elif isinstance(lines, str):
            self.lines = [Line.from_text(lines)]
        else:
            self.lines = [Line.from_text(x) if isinstance(x, str) else x for x in lines]
        self.name = name

    # -- construction --------------------------------------------------------

    @classmethod
    def empty(cls) -> Block:
        return cls()

    @classmethod
    def from_text(cls, text: str) -> Block:
        """Single-line, single-Content Block.

        The text is kept verbatim; embedded newlines are not split into lines.
        """
        return cls([Line.from_text(text)])

    @classmethod
    def from_template(cls, definition: TemplateDef) -> Block:
        """Materialise a fresh Block from a parsed template definition.

        Each template line keeps only the indentation beyond the template's
        baseline, as a leading Content segment. A line indented less than the
        baseline keeps no indentation at all.
        """
        indent_ignored = definition.indent_ignored
        lines: list[Line] = []
        for template_line in definition.lines:
            segments: list[Any] = []
            if len(template_line.indentation) > indent_ignored:
                segments.append(Content(template_line.indentation[indent_ignored:]))
            for segment in template_line.segments:
                if isinstance(segment, Name):
                    segments.append(Placeholder(segment.name))
                else:
                    segments.append(Content(segment.value))
            lines.append(Line(segments))
        return cls(lines, name=definition.name)

    @classmethod
    def join(cls, blocks: Iterable[Block | str]) -> Block:
        """Join blocks as separate lines, one line per block.

        Each line holds its own copy of the block, as with ``set()``.
        """
        return cls([Line([Nested(_coerce(block).clone())]) for block in blocks])

    @classmethod
    def join_map(
        cls,
        items: Iterable[Any],
        mapper: Callable[[Any, Position], Block | str],
    ) -> Block:
        """Map every item to a Block, then join the results.

        The mapper is called as ``mapper(item, position)`` where position is
        ``First()``, ``Nth(i)``, ``Last()`` or ``Only()``. With no items the
        mapper is never called and the result is an empty Block.

        Example:
            >>> Block.join_map(["a", "b"], lambda x, pos: x + ("" if pos.last else ",")).render()
            'a,\\nb'
        """
        return cls.join(mapper(item, position) for item, position in with_positions(list(items)))

    # -- composition ---------------------------------------------------------

    def set(self, placeholder_name: str, content: Block | str) -> Block:
        """Replace every unresolved ``${placeholder_name}`` in this Block.

        A string is wrapped as a single-line Block. Each replaced placeholder
        receives its own copy of ``content``. Names that do not occur, or
        that were already set, are ignored. Placeholders inside nested Blocks
        belong to those Blocks and are not touched.

        Returns:
            This Block, so calls can be chained.

        Raises:
            TypeError: If ``content`` is neither a Block nor a str.
        """
        block = _coerce(content)
        for line in self.lines:
            line.set(placeholder_name, block)
        return self

    def placeholders(self) -> tuple[str, ...]:
        """Unresolved placeholder names, nested ones included, first appearance first."""
        return tuple(dict.fromkeys(iter_placeholders(self.lines)))

    def clone(self) -> Block:
        """Independent deep copy, usable for separate substitution."""
        root = Block(_copy_lines(self.lines), name=self.name)
        pending = [root]
        while pending:
            block = pending.pop()
            for line in block.lines:
                for i, segment in enumerate(line.segments):
                    if isinstance(segment, Nested):
                        inner = Block(_copy_lines(segment.block.lines), name=segment.block.name)
                        line.segments[i] = Nested(inner)
                        pending.append(inner)
        return root

    __copy__ = clone

    def __deepcopy__(self, memo: dict[int, Any]) -> Block:
        return self.clone()

    # -- rendering -----------------------------------------------------------

    def write_to(self, append: Callable[[str], None], prefix: str = "") -> None:
        """Write every line through ``append``; lines after the first start with ``prefix``."""
        write_lines(self.lines, append, prefix)

    def render(self, *, strict: bool = False) -> str:
        """Render the Block to text.

        Unresolved placeholders render as ``${name}`` so gaps are visible in
        the output.

        Args:
            strict: Raise instead of rendering unresolved placeholders.

        Raises:
            UnresolvedPlaceholderError: In strict mode, if any placeholder
                is unresolved.
        """
        if strict:
            names = self.placeholders()
            if names:
                raise UnresolvedPlaceholderError(names, template_name=self.name)
        buf: list[str] = []
        self.write_to(buf.append)
        return "".join(buf)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        pending = [(self.lines, other.lines)]
        while pending:
            left, right = pending.pop()
            if len(left) != len(right):
                return False
            for a, b in zip(left, right):
                if len(a.segments) != len(b.segments):
                    return False
                for x, y in zip(a.segments, b.segments):
                    if isinstance(x, Nested) and isinstance(y, Nested):
                        pending.append((x.block.lines, y.block.lines))
                    elif x != y:
                        return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Block({self.lines!r})"


def _copy_lines(lines: list[Line]) -> list[Line]:
    return [Line(list(line.segments)) for line in lines]


def _coerce(value: Block | str) -> Block:
    if isinstance(value, Block):
        return value
    if isinstance(value, str):
        return Block.from_text(value)
    raise TypeError(f"Expected Block or str, got {type(value).__name__}")
