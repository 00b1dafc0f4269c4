"""FastAPI application -- entry point for the hub."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from apkhub import __version__
from apkhub.config import HubConfig
from apkhub.deps import HubContext
from apkhub.errors import HubError
from apkhub.extractor import ArtifactExtractor
from apkhub.routes import catalog, delete, pages, qr, upload


def create_app(
    config: HubConfig | None = None,
    extractor: ArtifactExtractor | None = None,
) -> FastAPI:
    """Build the app around one registry loaded from ``config.metadata_path``."""
    config = config or HubConfig()
    context = HubContext.from_config(config, extractor)

    app = FastAPI(
        title="APK Hub",
        version=__version__,
        description="Catalog and download server for Android build artifacts.",
    )
    app.state.context = context

    @app.exception_handler(HubError)
    async def hub_error(request: Request, exc: HubError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        missing = [".".join(str(p) for p in e["loc"][1:]) for e in exc.errors()]
        return JSONResponse(
            status_code=400,
            content={"detail": f"Invalid or missing fields: {', '.join(missing)}"},
        )

    # Include all routers
    app.include_router(pages.router)
    app.include_router(upload.router)
    app.include_router(delete.router)
    app.include_router(catalog.router)
    app.include_router(qr.router)

    app.mount("/static", StaticFiles(directory=config.static_dir), name="static")
    app.mount("/downloads", StaticFiles(directory=config.uploads_dir), name="downloads")

    @app.get("/health")
    async def health():
        """Unauthenticated health-check endpoint."""
        return {"status": "ok"}

    return app
