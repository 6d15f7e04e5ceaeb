"""Tests for Block construction, substitution and composition."""

from __future__ import annotations

import copy

import pytest

from jens import Block, Content, Line, Nested, Placeholder, from_string

from .sources import template


def make(body: str, *, dashes: int = 4) -> Block:
    return from_string(template(body, dashes=dashes)).template("main")


class TestConstruction:
    def test_empty(self):
        assert Block().lines == []
        assert Block.empty().render() == ""

    def test_from_text(self):
        block = Block.from_text("hello")
        assert block.lines == [Line([Content("hello")])]

    def test_from_text_keeps_newlines_verbatim(self):
        block = Block.from_text("a\nb")
        assert len(block.lines) == 1
        assert block.render() == "a\nb"

    def test_from_string_argument(self):
        assert Block("x") == Block.from_text("x")

    def test_from_list(self):
        block = Block(["a", Line([Placeholder("b")])])
        assert block.lines == [Line([Content("a")]), Line([Placeholder("b")])]

    def test_from_template_strips_baseline(self):
        block = make("    a\n      b\n    c")
        assert block.lines == [
            Line([Content("a")]),
            Line([Content("  "), Content("b")]),
            Line([Content("c")]),
        ]

    def test_from_template_shallow_line_keeps_no_indentation(self):
        block = make("  shallow\n    deep")
        assert block.render() == "shallow\ndeep"

    def test_from_template_blank_line(self):
        block = make("    a\n\n    b")
        assert block.lines[1] == Line([])
        assert block.render() == "a\n\nb"

    def test_from_template_placeholders(self):
        block = from_string("t = x ${y} z\n").template("t")
        assert block.lines == [Line([Content("x "), Placeholder("y"), Content(" z")])]

    def test_from_template_name(self):
        assert make("    a").name == "main"


class TestSet:
    def test_string(self):
        block = Block([Line([Content("a "), Placeholder("x")])])
        block.set("x", "b")
        assert block.render() == "a b"

    def test_returns_self(self):
        block = Block([Line([Placeholder("x")])])
        assert block.set("x", "y") is block

    def test_chain(self):
        block = from_string("t = ${a}-${b}\n").template("t")
        assert block.set("a", "1").set("b", "2").render() == "1-2"

    def test_every_occurrence(self):
        block = from_string("t = ${a} and ${a}\n").template("t")
        assert block.set("a", "x").render() == "x and x"

    def test_multiple_lines(self):
        block = make("    ${a}\n    -${a}-")
        assert block.set("a", "x").render() == "x\n-x-"

    def test_unknown_name_is_ignored(self):
        block = from_string("t = ${a}\n").template("t")
        assert block.set("b", "x").render() == "${a}"

    def test_resolved_placeholder_is_not_reset(self):
        block = from_string("t = ${a}\n").template("t")
        block.set("a", "first").set("a", "second")
        assert block.render() == "first"

    def test_content_is_never_substituted(self):
        block = from_string("t = \\${a} ${b}\n").template("t")
        block.set("b", "${a}").set("a", "x")
        assert block.render() == "${a} ${a}"

    def test_block_value(self):
        inner = Block(["one", "two"])
        outer = from_string("t = [${x}]\n").template("t").set("x", inner)
        assert outer.render() == "[one\n two]"

    def test_stores_a_copy(self):
        inner = Block([Line([Placeholder("late")])])
        outer = Block([Line([Placeholder("x")])]).set("x", inner)
        inner.set("late", "changed")
        assert outer.render() == "${late}"

    def test_each_occurrence_gets_its_own_copy(self):
        outer = from_string("t = ${x} ${x}\n").template("t")
        outer.set("x", Block([Line([Placeholder("y")])]))
        first, second = (s.block for s in outer.lines[0].segments if isinstance(s, Nested))
        assert first is not second

    def test_nested_placeholders_are_not_touched(self):
        inner = Block([Line([Placeholder("name")])])
        outer = Block([Line([Placeholder("slot"), Placeholder("name")])]).set("slot", inner)
        outer.set("name", "top")
        assert outer.render() == "${name}top"

    @pytest.mark.parametrize("value", [1, None, ["a"], b"x"])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError, match="Expected Block or str"):
            Block([Line([Placeholder("x")])]).set("x", value)


class TestJoin:
    def test_one_line_per_block(self):
        joined = Block.join([Block("a"), Block("b"), Block("c")])
        assert joined.render() == "a\nb\nc"
        assert len(joined.lines) == 3

    def test_strings(self):
        assert Block.join(["a", "b"]).render() == "a\nb"

    def test_empty(self):
        joined = Block.join([])
        assert joined.lines == []
        assert joined.render() == ""

    def test_multi_line_blocks(self):
        joined = Block.join([Block(["a", "b"]), Block("c")])
        assert joined.render() == "a\nb\nc"

    def test_empty_block_gives_empty_line(self):
        assert Block.join([Block("a"), Block(), Block("b")]).render() == "a\n\nb"

    def test_generator(self):
        assert Block.join(Block(str(i)) for i in range(3)).render() == "0\n1\n2"

    def test_same_block_twice_is_copied(self):
        block = Block([Line([Placeholder("x")])])
        joined = Block.join([block, block])
        nested = [line.segments[0].block for line in joined.lines]
        assert all(b is not block for b in nested)
        assert nested[0] is not nested[1]
        assert nested == [block, block]

    def test_later_set_does_not_reach_joined(self):
        block = Block([Line([Placeholder("p")])])
        joined = Block.join([block])
        block.set("p", "changed")
        assert joined.render() == "${p}"
        assert block.render() == "changed"

    def test_block_in_two_joins_is_not_shared(self):
        block = Block([Line([Placeholder("p")])])
        first = Block.join([block])
        second = Block.join([block])
        first.lines[0].segments[0].block.set("p", "one")
        assert first.render() == "one"
        assert second.render() == "${p}"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            Block.join(["a", 3])


class TestPlaceholders:
    def test_in_order(self):
        block = from_string("t = ${b} ${a} ${b}\n").template("t")
        assert block.placeholders() == ("b", "a")

    def test_shrinks_as_values_are_set(self):
        block = from_string("t = ${a} ${b}\n").template("t")
        block.set("a", "x")
        assert block.placeholders() == ("b",)

    def test_includes_nested(self):
        outer = Block([Line([Placeholder("x")])]).set("x", Block([Line([Placeholder("y")])]))
        assert outer.placeholders() == ("y",)

    def test_none(self):
        assert Block("text").placeholders() == ()


class TestCloneAndEquality:
    def test_clone_is_independent(self):
        block = Block([Line([Placeholder("x")])])
        clone = block.clone()
        clone.set("x", "value")
        assert block.render() == "${x}"
        assert clone.render() == "value"

    def test_clone_copies_nested(self):
        block = Block([Line([Placeholder("x")])]).set("x", Block([Line([Placeholder("y")])]))
        clone = block.clone()
        clone.lines[0].segments[0].block.set("y", "filled")
        assert block.render() == "${y}"

    def test_copy_module(self):
        block = Block([Line([Placeholder("x")])], name="t")
        for duplicate in (copy.copy(block), copy.deepcopy(block)):
            assert duplicate == block
            assert duplicate is not block
            assert duplicate.lines[0] is not block.lines[0]
            assert duplicate.name == "t"

    def test_equality_is_structural(self):
        assert Block(["a", "b"]) == Block(["a", "b"])
        assert Block(["a", "b"]) != Block(["a", "b", "c"])
        assert Block("a") != "a"

    def test_same_text_different_structure(self):
        assert Block.join(["a"]) != Block("a")
        assert Block.join(["a"]).render() == Block("a").render()

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Block())

    def test_repr(self):
        assert repr(Block("a")) == "Block([Line(segments=[Content(text='a')])])"
