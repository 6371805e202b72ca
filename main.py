"""Main entrypoint and application factory for the Billed service.

This module initializes the FastAPI application, configures logging, creates the bills table, and exposes the
Scalar API reference endpoint for interactive OpenAPI documentation. It also includes the main entrypoint for
running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import SQLAlchemyError

from billed.api.routes import router
from billed.core.db import Base, get_engine
from billed.core.settings import get_settings
from billed.core.utils import add_file_handler, ensure_dir, get_logger


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    log_dir = get_settings().log_dir
    ensure_dir(log_dir)
    logger = add_file_handler(Path(log_dir) / "billed.log")
    logger.setLevel(logging.INFO)


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler to create the bills table."""
    _ = app  # Silence unused argument warning
    logger = get_logger()
    try:
        Base.metadata.create_all(get_engine())
    except SQLAlchemyError:
        logger.exception("Failed to create bills table")
        raise
    yield


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Billed API",
    description="""
    Billed lets employees submit expense bills with a receipt image and review the bills they submitted.

    **Pages:**
    - `GET /employee/bills`: The connected employee's bills, newest first.
    - `GET /employee/bill/new`: New-bill form; `POST` submits it with its receipt.
    - `GET /receipts/{{key}}`: Stored receipt image.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.include_router(router)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> HTMLResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
