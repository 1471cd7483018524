"""Stockroom FastAPI application.

Serves the item, take-item and transaction APIs, plus the built front-end
(``STOCKROOM_STATIC_DIR``) with ``index.html`` as the fallback for client-side
routes.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3000
"""

import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from stockroom.api import item_router, register_exception_handlers, take_router, transaction_router
from stockroom.config import Settings
from stockroom.domain import Stockroom, build_stockroom
from stockroom.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def _mount_frontend(app: FastAPI, static_dir: Path) -> None:
    """Serve files from ``static_dir``; unknown GET paths get ``index.html``."""
    root = static_dir.resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not found")


def create_app(stockroom: Stockroom, static_dir: Path | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stockroom.persistence.initialize()
        logger.info("Stockroom ready", persistence=type(stockroom.persistence).__name__)
        yield

    app = FastAPI(
        title="Stockroom API",
        description="Inventory items and an audit ledger of stock takes",
        lifespan=lifespan,
    )
    app.state.stockroom = stockroom

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind request identifiers to every log line emitted while handling it."""
        clear_context()
        add_context(request_id=uuid.uuid4().hex, method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)

    app.include_router(item_router)
    app.include_router(take_router)
    app.include_router(transaction_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok"})

    # Registered last so API routes take precedence over the catch-all.
    if static_dir is not None and static_dir.is_dir():
        _mount_frontend(app, static_dir)

    return app


# ---------------------------------------------------------------------------
# Module-level application for uvicorn
# ---------------------------------------------------------------------------
settings = Settings.from_env()
configure_logging(settings.log_dir)

app = create_app(build_stockroom(settings), static_dir=settings.static_dir)
