"""Pipeline orchestration: discover, extract, aggregate, render."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .aggregator import aggregate
from .analyzers import FileExtractor, ImportResolver, SourceParser
from .config import DoclyConfig
from .logging import get_logger
from .models import AggregatedDocument, FileExtract
from .render import render_html, render_json
from .scanner import SourceScanner


@dataclass
class RunOutcome:
    """Result of a documentation run."""

    document: AggregatedDocument
    json_path: Path
    html_path: Path


class Orchestrator:
    """Coordinates a single sequential extraction run over a source tree."""

    def __init__(
        self,
        config: DoclyConfig | None = None,
        scanner: SourceScanner | None = None,
        parser: SourceParser | None = None,
        *,
        resolve_mounts: Optional[bool] = None,
    ) -> None:
        self.config = config or DoclyConfig()
        self.scanner = scanner or SourceScanner(self.config)
        self.parser = parser or SourceParser()
        self.resolve_mounts = self.config.resolve_mounts if resolve_mounts is None else resolve_mounts
        self.logger = get_logger("orchestrator")

    def extract(self, path: str | Path) -> List[FileExtract]:
        root = Path(path).expanduser().resolve()
        self.logger.info("Starting extraction for %s", root)
        files = self.scanner.scan(root)
        self.logger.debug("Scanner discovered %d source files", len(files))

        extractor = FileExtractor(
            self.config,
            parser=self.parser,
            resolver=ImportResolver(),
            resolve_mounts=self.resolve_mounts,
        )
        extracts: List[FileExtract] = []
        for file in files:
            self.logger.debug("Extracting %s", file)
            extracts.append(extractor.extract_file(file))
        return extracts

    def build(self, path: str | Path) -> AggregatedDocument:
        """Return the aggregated document for the source tree at ``path``."""
        document = aggregate(self.extract(path))
        self.logger.info(
            "Documented %d route(s), %d global middleware",
            len(document.routes),
            len(document.middlewares.global_),
        )
        return document

    def write_outputs(
        self, document: AggregatedDocument, output_dir: str | Path | None = None
    ) -> tuple[Path, Path]:
        target = Path(output_dir) if output_dir is not None else Path.cwd()
        target.mkdir(parents=True, exist_ok=True)
        json_path = target / self.config.output.json
        html_path = target / self.config.output.html
        json_path.write_text(render_json(document), encoding="utf-8")
        html_path.write_text(render_html(document), encoding="utf-8")
        self.logger.info("Wrote %s and %s", json_path, html_path)
        return json_path, html_path

    def run(self, path: str | Path, output_dir: str | Path | None = None) -> RunOutcome:
        document = self.build(path)
        json_path, html_path = self.write_outputs(document, output_dir)
        return RunOutcome(document=document, json_path=json_path, html_path=html_path)


__all__ = ["Orchestrator", "RunOutcome"]
