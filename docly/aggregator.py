"""Cross-file merge of per-file extracts and router prefix propagation."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Tuple

from .logging import get_logger
from .models import (
    AggregatedDocument,
    FileExtract,
    GlobalMiddleware,
    LocalMiddleware,
    MiddlewareSummary,
    RouteDeclaration,
    ServerConfig,
)

RouterPrefixMap = Dict[str, List[str]]

logger = get_logger("aggregator")


def join_path(prefix: str, route: str) -> str:
    """Join a mount prefix and a route path with exactly one slash between them."""
    clean_prefix = prefix[:-1] if prefix.endswith("/") else prefix
    clean_route = route if route.startswith("/") else f"/{route}"
    return clean_prefix + clean_route


def build_prefix_map(extracts: Iterable[FileExtract]) -> RouterPrefixMap:
    """Map each mounted file to the paths it is mounted at, following import aliases."""
    prefixes: RouterPrefixMap = {}
    for extract in extracts:
        for alias, mount_paths in extract.mounts.items():
            target = extract.imports.get(alias)
            if target is None:
                continue
            prefixes.setdefault(target, []).extend(mount_paths)
    return prefixes


def apply_route_prefixes(
    routes: Sequence[RouteDeclaration], prefixes: RouterPrefixMap
) -> List[RouteDeclaration]:
    """Rewrite routes from mounted files, one copy per mount path."""
    updated: List[RouteDeclaration] = []
    for route in routes:
        mounts = prefixes.get(route.source_file)
        if not mounts:
            updated.append(route)
            continue
        for mount in mounts:
            updated.append(replace(route, path=join_path(mount, route.path)))
    return updated


def merge_server_config(extracts: Iterable[FileExtract]) -> ServerConfig:
    """Merge ``listen`` details field by field; later files win."""
    config = ServerConfig()
    for extract in extracts:
        for key, value in extract.api_details.items():
            setattr(config, key, value)
    return config


def merge_middlewares(extracts: Iterable[FileExtract]) -> MiddlewareSummary:
    global_: List[GlobalMiddleware] = []
    local: Dict[str, Tuple[LocalMiddleware, ...]] = {}
    for extract in extracts:
        global_.extend(extract.middlewares.global_)
        for name, entries in extract.middlewares.local.items():
            local[name] = tuple(entries)
    return MiddlewareSummary(global_=tuple(global_), local=local)


def aggregate(extracts: Sequence[FileExtract]) -> AggregatedDocument:
    """Fold per-file extracts, in discovery order, into one document."""
    prefixes = build_prefix_map(extracts)
    if prefixes:
        logger.debug("Applying mount prefixes to %d file(s)", len(prefixes))
    routes = [route for extract in extracts for route in extract.routes]
    return AggregatedDocument(
        api_details=merge_server_config(extracts),
        routes=tuple(apply_route_prefixes(routes, prefixes)),
        middlewares=merge_middlewares(extracts),
    )


__all__ = [
    "RouterPrefixMap",
    "aggregate",
    "apply_route_prefixes",
    "build_prefix_map",
    "join_path",
    "merge_middlewares",
    "merge_server_config",
]
