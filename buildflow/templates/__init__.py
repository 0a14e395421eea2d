"""Template registry, resolution table and template store."""

from .registry import (
    RESOLUTION_TABLE,
    Resolution,
    TemplateVariant,
    all_combinations,
    all_variants,
    lookup,
    missing_combinations,
)
from .store import TemplateStore, get_template_store

__all__ = [
    "RESOLUTION_TABLE",
    "Resolution",
    "TemplateVariant",
    "all_combinations",
    "all_variants",
    "lookup",
    "missing_combinations",
    "TemplateStore",
    "get_template_store",
]
