"""
Template discovery and rendering.
"""

from .engine import TemplateEngine
from .pages import OUTPUT_SUFFIX, SourceTemplate, discover_templates
from .partials import PartialCatalog, PartialId, UnknownPartial

__all__ = [
    "OUTPUT_SUFFIX",
    "PartialCatalog",
    "PartialId",
    "SourceTemplate",
    "TemplateEngine",
    "UnknownPartial",
    "discover_templates",
]
