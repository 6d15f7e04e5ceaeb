"""Emoji map -- join_map over data, nested at the embedding column.

A one-liner template produces each entry; the multi-line ``main`` template
places the joined entries where ``${entries}`` sits, so every entry lines up
under the first one. The position marker drops the comma after the last
entry.

Run:
    python app.py
"""

from jens import Block, from_string

SOURCE = """\
entry = "${key}": "${value}"${comma}

main =
    var MAP = {
        ${entries}
    };
----
"""

EMOJI = [
    ("smile", "🙂"),
    ("frown", "☹️"),
    ("scream", "😱"),
    ("robot", "🤖"),
]

file = from_string(SOURCE, name="emoji.jens")
entry = file.function("entry")


def build(items) -> Block:
    entries = Block.join_map(
        items,
        lambda kv, position: entry(kv[0], kv[1], "" if position.last else ","),
    )
    return file.template("main").set("entries", entries)


output = build(EMOJI).render(strict=True)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
