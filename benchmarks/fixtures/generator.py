"""Template source and synthetic schemas shared by the benchmarks."""

from __future__ import annotations

# One-liners plus nested multi-line templates, in the shape of a code generator
GENERATOR_SOURCE = """\
# Benchmark templates

main =
  // Generated file
  ${modules}
--

module =
  export module ${name} {
    export interface T {
      ${fields}
    }

    export function serialize(value: T) {
      return {
        ${serializers}
      };
    }
  }
--

field = ${name}: ${type};
serializer = ${name}: ${func}(value.${name}),
"""


def make_types(module_count: int, field_count: int) -> list[tuple[str, list[tuple[str, str]]]]:
    """Synthetic type schema: ``module_count`` modules of ``field_count`` fields."""
    return [
        (f"Type{m}", [(f"field_{f}", "string" if f % 2 else "number") for f in range(field_count)])
        for m in range(module_count)
    ]
