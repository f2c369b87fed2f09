"""Per-file extraction: bindings, imports and call-site facts in one pass."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import DoclyConfig
from ..logging import get_logger
from ..models import FileExtract
from .bindings import BindingTable
from .calls import CallSiteMatcher
from .imports import ImportResolver
from .syntax import (
    Call,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    Literal,
    VariableDeclaration,
    iter_statements,
)
from .tree_sitter import ParsedSource, SourceParser


class FileExtractor:
    """Extracts a :class:`FileExtract` from one source file.

    All state built while walking a file (binding table, role sets, import
    aliases) is local to that call and returned on the extract.
    """

    def __init__(
        self,
        config: DoclyConfig | None = None,
        *,
        parser: SourceParser | None = None,
        resolver: ImportResolver | None = None,
        resolve_mounts: Optional[bool] = None,
    ) -> None:
        self.config = config or DoclyConfig()
        self.parser = parser or SourceParser()
        self.resolver = resolver or ImportResolver()
        self.resolve_mounts = self.config.resolve_mounts if resolve_mounts is None else resolve_mounts
        self.logger = get_logger("extractor")

    def extract_file(self, path: str | Path) -> FileExtract:
        file_path = str(path)
        source = Path(file_path).read_text(encoding="utf-8", errors="replace")
        return self.extract_source(source, file_path)

    def extract_source(self, source: str, path: str) -> FileExtract:
        return self.extract_tree(self.parser.parse(source, path))

    def extract_tree(self, parsed: ParsedSource) -> FileExtract:
        extract = FileExtract(file=parsed.path)
        table = BindingTable(self.config.framework)
        matcher = CallSiteMatcher(
            table,
            extract,
            marker=self.config.description_marker,
            resolve_mounts=self.resolve_mounts,
        )

        for statement in iter_statements(parsed):
            if isinstance(statement, VariableDeclaration):
                table.declare(statement)
                self._record_require(statement, extract)
            elif isinstance(statement, ImportDeclaration):
                if statement.alias and statement.source:
                    self._record_import(extract, statement.alias, statement.source)
            elif isinstance(statement, ExpressionStatement):
                matcher.visit(statement)

        extract.bindings = table.bindings
        extract.servers = frozenset(table.servers)
        extract.routers = frozenset(table.routers)
        self.logger.debug(
            "%s: %d bindings, %d routes, %d imports",
            parsed.path,
            len(extract.bindings),
            len(extract.routes),
            len(extract.imports),
        )
        return extract

    def _record_require(self, statement: VariableDeclaration, extract: FileExtract) -> None:
        if len(statement.declarators) != 1:
            return
        declarator = statement.declarators[0]
        init = declarator.init
        if (
            declarator.name
            and isinstance(init, Call)
            and isinstance(init.callee, Identifier)
            and init.callee.name == "require"
            and init.arguments
            and isinstance(init.arguments[0], Literal)
            and init.arguments[0].kind == "string"
        ):
            self._record_import(extract, declarator.name, init.arguments[0].value)

    def _record_import(self, extract: FileExtract, alias: str, specifier: str) -> None:
        resolved = self.resolver.resolve(extract.file, specifier)
        if resolved is not None:
            extract.imports[alias] = resolved


__all__ = ["FileExtractor"]
