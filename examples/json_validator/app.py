"""JSON validator generator -- file-based templates and nested join_map.

Loads ``templates/validator.jens`` with FileSystemLoader and generates a
TypeScript module per JSON type. Each module nests three joined field lists,
and the modules themselves are joined into ``main``. All logic (type names,
serializer choice) lives here; the template is plain TypeScript.

Run:
    python app.py
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jens import Block, Environment, FileSystemLoader


@dataclass(frozen=True)
class Json:
    """JSON value type: ``string``, ``number``, ``array`` of item, or ``object`` module."""

    kind: str
    item: Json | None = None
    module: str | None = None

    @property
    def ts_type(self) -> str:
        if self.kind == "array":
            return f"{self.item.ts_type}[]"
        if self.kind == "object":
            return f"{self.module}.T"
        return self.kind

    @property
    def serialize_func(self) -> str:
        if self.kind == "array":
            return f"serialize_array({self.item.serialize_func})"
        if self.kind == "object":
            return f"{self.module}.serialize"
        return "noop"

    @property
    def deserialize_func(self) -> str:
        if self.kind == "array":
            return f"deserialize_array({self.item.deserialize_func})"
        if self.kind == "object":
            return f"{self.module}.deserialize"
        return f"deserialize_{self.kind}"


STRING = Json("string")
NUMBER = Json("number")


def array(item: Json) -> Json:
    return Json("array", item=item)


def obj(module: str) -> Json:
    return Json("object", module=module)


@dataclass
class TsType:
    name: str
    fields: list[tuple[str, Json]]


TYPES = [
    TsType("Book", [("title", STRING)]),
    TsType("LibraryMeta", [("founded_year", NUMBER), ("name", STRING)]),
    TsType("Library", [("count", NUMBER), ("meta", obj("LibraryMeta")), ("books", array(obj("Book")))]),
]

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir))
file = env.get_file("validator.jens")

type_def = file.function("type_def")
serialize_field = file.function("serialize_field")
deserialize_field = file.function("deserialize_field")
type_module = file.function("type_module")


def module(t: TsType, _position) -> Block:
    return type_module(
        type_name=t.name,
        type_def_fields=Block.join_map(t.fields, lambda f, _: type_def(f[0], f[1].ts_type)),
        serialize_fields=Block.join_map(
            t.fields, lambda f, _: serialize_field(f[0], f[1].serialize_func)
        ),
        deserialize_fields=Block.join_map(
            t.fields, lambda f, _: deserialize_field(f[0], f[1].deserialize_func)
        ),
    )


def generate(types: list[TsType]) -> Block:
    return file.template("main").set("modules", Block.join_map(types, module))


output = generate(TYPES).render(strict=True)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
