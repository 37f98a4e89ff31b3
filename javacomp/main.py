from __future__ import annotations

import os
from typing import Final

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from javacomp.api.routes import router as api_router
from javacomp.core.config import get_settings
from javacomp.core.errors import JavaCompError
from javacomp.core.logging import configure_logging
from javacomp.models.schemas import CompileResponse


logger = structlog.get_logger(__name__)


async def _invalid_input_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = CompileResponse(success=False, error="No code provided")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


async def _server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("server_error", path=request.url.path, error=str(exc), exc_info=exc)
    body = CompileResponse(success=False, error=f"Server Error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def create_app() -> FastAPI:
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="Java Compiler API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.add_exception_handler(RequestValidationError, _invalid_input_handler)
    app.add_exception_handler(JavaCompError, _server_error_handler)
    app.add_exception_handler(Exception, _server_error_handler)

    app.include_router(api_router, prefix="/api")
    return app


app: Final[FastAPI] = create_app()


def run() -> None:
    """Run the API using Uvicorn.

    This is for local/dev usage. Production deployments should use a process manager
    and configure workers according to their environment.
    """
    import uvicorn

    host: str = os.environ.get("HOST", "127.0.0.1")
    port_str: str | None = os.environ.get("PORT")
    port: int = int(port_str) if port_str else 8000
    uvicorn.run("javacomp.main:app", host=host, port=port, log_level="info")
