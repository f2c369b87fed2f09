"""JSON rendering of aggregated API documents."""

from __future__ import annotations

import json
from typing import Any, Dict

from ..models import AggregatedDocument, RouteDeclaration, ServerConfig


def _server_to_dict(config: ServerConfig) -> Dict[str, Any]:
    return {
        "portNumber": config.port_number,
        "isPortEnv": config.is_port_env,
        "host": config.host,
        "backlog": config.backlog,
    }


def _route_to_dict(route: RouteDeclaration) -> Dict[str, Any]:
    return {
        "path": route.path,
        "method": route.method,
        "router": route.router,
        "sourceFile": route.source_file,
        "middleware": list(route.middleware),
        "description": route.description,
    }


def document_to_dict(document: AggregatedDocument) -> Dict[str, Any]:
    """Return the JSON-ready mapping using the published camelCase field names."""
    middlewares = document.middlewares
    return {
        "apiDetails": _server_to_dict(document.api_details),
        "routes": [_route_to_dict(route) for route in document.routes],
        "middlewares": {
            "global": [{"name": entry.name} for entry in middlewares.global_],
            "local": {
                name: [{"path": entry.path} for entry in entries]
                for name, entries in middlewares.local.items()
            },
        },
    }


def render_json(document: AggregatedDocument) -> str:
    return json.dumps(document_to_dict(document), indent=2)


__all__ = ["document_to_dict", "render_json"]
