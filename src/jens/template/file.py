"""TemplateFile: the registry of templates parsed from one source text.

A TemplateFile is immutable after parsing and safe to share between threads.
Every lookup builds a new Block, so callers never share mutable state:

    >>> file = TemplateFile.parse(source, filename="api.jens")
    >>> a = file.template("entry")
    >>> b = file.template("entry")
    >>> a is b
    False

Lookups scan definitions in source order and the first match wins, which
is what makes duplicate names harmless (later definitions are unreachable).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from jens.block import Block
from jens.environment.exceptions import TemplateNotFoundError
from jens.nodes import TemplateDef
from jens.parser import parse
from jens.template.functions import TemplateFunction


class TemplateFile:
    """Templates parsed from one template file, in source order.

    Attributes:
        name: Logical name the file was loaded under (for error messages)
        filename: Source path, if file-backed

    Methods:
        parse(source): Parse template source into a TemplateFile
        template(name): Fresh Block for a template, raising if missing
        get(name): Fresh Block for a template, or None
        function(name): TemplateFunction taking the template's placeholders

    """

    __slots__ = ("_filename", "_name", "_templates")

    def __init__(
        self,
        templates: Iterable[TemplateDef],
        name: str | None = None,
        filename: str | None = None,
    ):
        self._templates = tuple(templates)
        self._name = name
        self._filename = filename

    @classmethod
    def parse(
        cls,
        source: str,
        *,
        name: str | None = None,
        filename: str | None = None,
        allow_duplicates: bool = True,
    ) -> TemplateFile:
        """Parse template source.

        Raises:
            TemplateSyntaxError: If the source does not follow the grammar.
        """
        templates = parse(source, name=name, filename=filename, allow_duplicates=allow_duplicates)
        return cls(templates, name=name, filename=filename)

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def templates(self) -> tuple[TemplateDef, ...]:
        return self._templates

    @property
    def names(self) -> tuple[str, ...]:
        """Template names in source order, each listed once."""
        return tuple(dict.fromkeys(t.name for t in self._templates))

    def definition(self, name: str) -> TemplateDef | None:
        """First template definition called ``name``."""
        for t in self._templates:
            if t.name == name:
                return t
        return None

    def get(self, name: str) -> Block | None:
        """Fresh Block for template ``name``, or None if there is none."""
        definition = self.definition(name)
        if definition is None:
            return None
        return Block.from_template(definition)

    def template(self, name: str) -> Block:
        """Fresh Block for template ``name``.

        Raises:
            TemplateNotFoundError: If the file has no template called ``name``.
        """
        return Block.from_template(self._require(name))

    def placeholder_names(self, name: str) -> tuple[str, ...]:
        """Placeholder names of template ``name``, in order of first appearance."""
        return self._require(name).placeholder_names

    def function(self, name: str) -> TemplateFunction:
        """Callable building template ``name`` from its placeholder values.

        Example:
            >>> type_def = file.function("type_def")
            >>> type_def.parameters
            ('field_name', 'field_type')
            >>> type_def("title", "string").render()
            'title: string;'
        """
        return TemplateFunction(self._require(name))

    def functions(self) -> dict[str, TemplateFunction]:
        """One TemplateFunction per template name (first definition wins)."""
        functions: dict[str, TemplateFunction] = {}
        for t in self._templates:
            if t.name not in functions:
                functions[t.name] = TemplateFunction(t)
        return functions

    def _require(self, name: str) -> TemplateDef:
        definition = self.definition(name)
        if definition is not None:
            return definition

        raise TemplateNotFoundError.missing(
            "Template", name, self.names, location=self._filename or self._name
        )

    def __contains__(self, name: object) -> bool:
        return any(t.name == name for t in self._templates)

    def __iter__(self) -> Iterator[TemplateDef]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        location = self._filename or self._name or "<string>"
        return f"<TemplateFile {location!s} templates={list(self.names)}>"
