"""Hello World -- the simplest jens example.

Parse a template file from a string, fill a placeholder and render.
No templates directory needed.

Run:
    python app.py
"""

import jens

file = jens.from_string("greeting = Hello, ${name}!\n")

# Every lookup is a fresh Block
output = file.template("greeting").set("name", "World").render()


def main() -> None:
    print(output)
    print()

    # Same template, different values
    for name in ["Jens", "Block", "Python"]:
        print(file.template("greeting").set("name", name))


if __name__ == "__main__":
    main()
