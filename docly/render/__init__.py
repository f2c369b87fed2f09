"""Renderers for aggregated API documents."""

from __future__ import annotations

from .html import render_html
from .json_doc import document_to_dict, render_json

__all__ = ["document_to_dict", "render_html", "render_json"]
