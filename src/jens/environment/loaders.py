"""Where an Environment finds template files.

A loader maps a file name such as ``"typescript/validator.jens"`` to its
source text and, when the file lives on disk, a path used in error
messages. Any object with ``get_source`` and ``list_templates`` will do.

Misses raise ``TemplateNotFoundError`` with a did-you-mean suggestion
taken from ``list_templates()``.
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from jens.environment.exceptions import TemplateNotFoundError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

DEFAULT_EXTENSIONS = (".jens",)


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Template files under one or more directories.

    Directories are tried in order and the first one holding ``name`` wins,
    so a project directory can override files from a shared one:

        >>> FileSystemLoader(["codegen/custom", "codegen/default"])

    Only files with one of ``extensions`` are listed; ``get_source`` loads
    any file name it is given.
    """

    __slots__ = ("_encoding", "_extensions", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        encoding: str = "utf-8",
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding
        self._extensions = extensions

    def get_source(self, name: str) -> tuple[str, str]:
        for base in self._paths:
            path = base / name
            if path.is_file():
                return path.read_text(self._encoding), str(path)
        raise TemplateNotFoundError.missing(
            "Template file",
            name,
            self.list_templates(),
            location=", ".join(str(p) for p in self._paths),
        )

    def list_templates(self) -> list[str]:
        found: set[str] = set()
        for base in self._paths:
            if not base.is_dir():
                continue
            found.update(
                path.relative_to(base).as_posix()
                for path in base.rglob("*")
                if path.is_file() and path.suffix in self._extensions
            )
        return sorted(found)


class DictLoader:
    """Template sources held in a dict, keyed by file name.

    Sources have no path, so errors name the file instead.
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._mapping[name], None
        except KeyError:
            raise TemplateNotFoundError.missing(
                "Template file", name, self.list_templates()
            ) from None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class PackageLoader:
    """Template files shipped inside an installed package.

    ``PackageLoader("my_codegen")`` reads from ``my_codegen/templates/``
    through ``importlib.resources``, so it also works for zipped installs.
    Importing ``package_name`` may raise ``ModuleNotFoundError``.
    """

    __slots__ = ("_encoding", "_extensions", "_package_name", "_package_path")

    def __init__(
        self,
        package_name: str,
        package_path: str = "templates",
        encoding: str = "utf-8",
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ):
        self._package_name = package_name
        self._package_path = package_path
        self._encoding = encoding
        self._extensions = extensions

    @property
    def _location(self) -> str:
        return f"{self._package_name}/{self._package_path}"

    def _root(self) -> Traversable:
        root = importlib.resources.files(self._package_name)
        for part in self._package_path.split("/"):
            if part:
                root = root.joinpath(part)
        return root

    def get_source(self, name: str) -> tuple[str, str]:
        try:
            source = self._root().joinpath(name).read_text(self._encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise TemplateNotFoundError.missing(
                "Template file",
                name,
                self.list_templates(),
                location=f"package '{self._location}'",
            ) from e
        return source, f"{self._location}/{name}"

    def list_templates(self) -> list[str]:
        found: list[str] = []
        pending: list[tuple[Traversable, str]] = [(self._root(), "")]
        while pending:
            directory, prefix = pending.pop()
            if not directory.is_dir():
                continue
            for item in directory.iterdir():
                if item.name.startswith((".", "__")):
                    continue
                name = f"{prefix}{item.name}"
                if item.is_dir():
                    pending.append((item, f"{name}/"))
                elif any(item.name.endswith(ext) for ext in self._extensions):
                    found.append(name)
        return sorted(found)
