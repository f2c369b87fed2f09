"""HTML rendering of aggregated API documents."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import AggregatedDocument, RouteDeclaration

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_PAGE_TEMPLATE = "apidoc.html.j2"


def group_by_method(routes: List[RouteDeclaration]) -> Dict[str, List[RouteDeclaration]]:
    """Group routes by uppercased method, keeping first-appearance order."""
    grouped: Dict[str, List[RouteDeclaration]] = {}
    for route in routes:
        grouped.setdefault(route.method.upper(), []).append(route)
    return grouped


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html(document: AggregatedDocument) -> str:
    """Render the single-page API overview; more than two methods switch to columns."""
    template = _environment().get_template(_PAGE_TEMPLATE)
    return template.render(
        details=document.api_details,
        global_middleware=document.middlewares.global_,
        groups=group_by_method(list(document.routes)),
    )


__all__ = ["group_by_method", "render_html"]
