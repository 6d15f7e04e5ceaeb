"""Typed template functions.

A TemplateFunction binds one template definition and takes the template's
placeholders as parameters, in order of first appearance:

    ```
    type_def =
        ${field_name}: ${field_type};
    ----
    ```

    >>> type_def = file.function("type_def")
    >>> type_def("count", "number").render()
    'count: number;'
    >>> type_def(field_type="string", field_name="title").render()
    'title: string;'

Arguments left out keep their placeholder unresolved, so a function can be
called with only some values and finished later with ``Block.set``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jens.block import Block

if TYPE_CHECKING:
    from jens.nodes import TemplateDef


class TemplateFunction:
    """Callable producing a fresh Block of one template per call."""

    __slots__ = ("_definition", "_parameters")

    def __init__(self, definition: TemplateDef):
        self._definition = definition
        self._parameters = definition.placeholder_names

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def parameters(self) -> tuple[str, ...]:
        return self._parameters

    def __call__(self, *args: Block | str, **kwargs: Block | str) -> Block:
        """Build the template with the given placeholder values.

        Raises:
            TypeError: On too many positional arguments, an unknown keyword,
                or a value given both positionally and by keyword.
        """
        params = self._parameters
        if len(args) > len(params):
            raise TypeError(
                f"{self.name}() takes {len(params)} positional argument(s) "
                f"but {len(args)} were given"
            )
        values = dict(zip(params, args, strict=False))
        for key, value in kwargs.items():
            if key not in params:
                raise TypeError(f"{self.name}() got an unexpected keyword argument '{key}'")
            if key in values:
                raise TypeError(f"{self.name}() got multiple values for argument '{key}'")
            values[key] = value

        block = Block.from_template(self._definition)
        for key, value in values.items():
            block.set(key, value)
        return block

    def __repr__(self) -> str:
        return f"<TemplateFunction {self.name}({', '.join(self._parameters)})>"
