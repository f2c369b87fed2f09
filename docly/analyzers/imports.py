"""Relative import resolution for JavaScript and TypeScript modules."""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Probe order is significant: ``x.ts`` must win over ``x/index.ts``.
_CANDIDATE_SUFFIXES: Tuple[str, ...] = ("", ".ts", ".js", "/index.ts", "/index.js")


def resolve_import(importer: str, specifier: str) -> Optional[str]:
    """Resolve ``specifier`` as imported from ``importer`` to an absolute file path.

    Only relative specifiers (``./`` or ``../``) are considered; package and
    path-mapped imports return None, as does a specifier with no matching file.
    """
    if not specifier.startswith("."):
        return None
    base_dir = os.path.dirname(os.path.abspath(importer))
    raw = os.path.normpath(os.path.join(base_dir, specifier))
    for suffix in _CANDIDATE_SUFFIXES:
        candidate = raw + suffix
        if os.path.isfile(candidate):
            return candidate
    return None


class ImportResolver:
    """Memoising wrapper around :func:`resolve_import` for a single run."""

    def __init__(self) -> None:
        self._cache: Dict[Tuple[str, str], Optional[str]] = {}

    def resolve(self, importer: str, specifier: str) -> Optional[str]:
        key = (os.path.dirname(os.path.abspath(importer)), specifier)
        if key not in self._cache:
            self._cache[key] = resolve_import(importer, specifier)
        return self._cache[key]


__all__ = ["ImportResolver", "resolve_import"]
