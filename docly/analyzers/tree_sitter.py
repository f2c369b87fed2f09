"""Tree-sitter powered parsing for JavaScript and TypeScript sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..logging import get_logger

_GRAMMAR_BY_SUFFIX = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


@dataclass
class ParsedSource:
    """A syntax tree together with the bytes it was parsed from."""

    path: str
    tree: Tree
    source_bytes: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


class SourceParser:
    """Parses source text into tree-sitter trees, never raising on bad syntax."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}
        self.logger = get_logger("parser")

    def parse(self, source: str, path: str = "<memory>.ts") -> ParsedSource:
        source_bytes = source.encode("utf-8")
        parser = self._get_parser(self.grammar_for(path))
        tree = parser.parse(source_bytes)
        if tree.root_node.has_error:
            self.logger.debug("Syntax errors in %s; extracting from partial tree", path)
        return ParsedSource(path=path, tree=tree, source_bytes=source_bytes)

    @staticmethod
    def grammar_for(path: str) -> str:
        lower = path.lower()
        for suffix, grammar in _GRAMMAR_BY_SUFFIX.items():
            if lower.endswith(suffix):
                return grammar
        return "typescript"

    def _get_parser(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is not None:
            return parser
        parser = Parser(_load_language(grammar))
        self._parsers[grammar] = parser
        return parser


def _load_language(grammar: str) -> Language:
    if grammar == "javascript":
        return Language(tree_sitter_javascript.language())
    if grammar == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


__all__ = ["ParsedSource", "SourceParser"]
