"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from docly.orchestrator import Orchestrator
from docly.service import create_app
from tests._fixtures.project_builder import ProjectBuilder


class _RecordingFactory:
    def __init__(self) -> None:
        self.calls: list[Optional[bool]] = []

    def __call__(self, resolve_mounts: Optional[bool] = None) -> Orchestrator:
        self.calls.append(resolve_mounts)
        return Orchestrator(resolve_mounts=resolve_mounts)


@pytest.fixture
def factory() -> _RecordingFactory:
    return _RecordingFactory()


@pytest.fixture
def client(factory: _RecordingFactory) -> TestClient:
    return TestClient(create_app(factory))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_extract_returns_document(
    client: TestClient, factory: _RecordingFactory, project_builder: ProjectBuilder
) -> None:
    project_builder.write(
        {
            "server.ts": """
                const app = express();
                app.use(cors());
                app.post("/items", auth, create);
            """,
        }
    )
    response = client.post(
        "/extract", json={"path": str(project_builder.path()), "resolve_mounts": True}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["routes"][0]["path"] == "/items"
    assert payload["routes"][0]["middleware"] == ["auth"]
    assert payload["middlewares"]["global"] == [{"name": "cors"}]
    assert factory.calls == [True]


def test_extract_missing_path_returns_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/extract", json={"path": str(tmp_path / "missing")})
    assert response.status_code == 404
    assert "Folder not found" in response.json()["detail"]
