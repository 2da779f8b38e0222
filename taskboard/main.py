"""Taskboard API - FastAPI application"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .errors import BoardError
from .routes import boards, columns, drag, tasks, users
from .services.drag import DragSession
from .services.storage import Storage
from .services.store import BoardStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create configured FastAPI app.

    The store is opened on startup unless one was already placed on
    ``app.state``, which is how the tests supply an in-memory store.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        storage = None
        if getattr(app.state, "store", None) is None:
            storage = Storage(Path(settings.database_path))
            store = BoardStore(storage, seed=settings.seed_sample_data)
            store.initialize()
            app.state.store = store
            app.state.drag = DragSession(store)
        logger.info(f"Starting {settings.app_name}")
        yield
        logger.info(f"Shutting down {settings.app_name}")
        if storage is not None:
            storage.close()

    app = FastAPI(
        title=settings.app_name,
        description="Task board API: boards, columns, tasks and drag reconciliation",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError):
        """Rejected board operations become client errors"""
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message}
        )

    app.include_router(boards.router, prefix="/boards", tags=["boards"])
    app.include_router(columns.router, prefix="/boards", tags=["columns"])
    app.include_router(users.router, prefix="/boards", tags=["users"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(drag.router, prefix="/drag", tags=["drag"])

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": settings.app_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
