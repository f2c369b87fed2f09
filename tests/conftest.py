from __future__ import annotations

from pathlib import Path

import pytest

from docly.analyzers import FileExtractor
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a throwaway source tree rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def extractor() -> FileExtractor:
    return FileExtractor()
