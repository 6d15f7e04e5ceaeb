"""Environment, loaders and exceptions for Jens."""

from jens.environment.core import Environment
from jens.environment.exceptions import (
    ErrorCode,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnresolvedPlaceholderError,
    build_source_snippet,
)
from jens.environment.loaders import DictLoader, FileSystemLoader, Loader, PackageLoader

__all__ = [
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "Loader",
    "PackageLoader",
    "SourceSnippet",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "UnresolvedPlaceholderError",
    "build_source_snippet",
]
