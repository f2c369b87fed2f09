"""FastAPI application entrypoint for docly service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..orchestrator import Orchestrator
from ..render import document_to_dict


class ExtractRequest(BaseModel):
    path: str
    resolve_mounts: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator(resolve_mounts: Optional[bool] = None) -> Orchestrator:
    return Orchestrator(resolve_mounts=resolve_mounts)


def create_app(
    orchestrator_factory: Callable[..., Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing docly extraction."""

    app = FastAPI(title="Docly Service", version="1.0.0")

    async def get_factory() -> Callable[..., Orchestrator]:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract")
    async def extract(
        payload: ExtractRequest,
        factory: Callable[..., Orchestrator] = Depends(get_factory),
    ) -> Dict[str, Any]:
        def _run() -> Dict[str, Any]:
            orchestrator = factory(resolve_mounts=payload.resolve_mounts)
            return document_to_dict(orchestrator.build(payload.path))

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
