"""Template registry and typed template functions."""

from jens.template.file import TemplateFile
from jens.template.functions import TemplateFunction

__all__ = ["TemplateFile", "TemplateFunction"]
