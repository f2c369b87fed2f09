"""Per-file symbolic extraction over JavaScript and TypeScript syntax trees."""

from __future__ import annotations

from .bindings import BindingTable
from .calls import CallSiteMatcher
from .extractor import FileExtractor
from .imports import ImportResolver, resolve_import
from .tree_sitter import ParsedSource, SourceParser

__all__ = [
    "BindingTable",
    "CallSiteMatcher",
    "FileExtractor",
    "ImportResolver",
    "ParsedSource",
    "SourceParser",
    "resolve_import",
]
