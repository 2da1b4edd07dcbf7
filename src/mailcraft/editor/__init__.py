"""Glue between assistant suggestions and the template editor."""

from .bridge import TemplateBridge
from .template_editor import TemplateEditor

__all__ = ["TemplateBridge", "TemplateEditor"]
