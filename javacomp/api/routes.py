from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, status

from javacomp.core.config import get_settings
from javacomp.models.schemas import CompileRequest, CompileResponse, HealthResponse
from javacomp.services.classifier import CompileResult, Success
from javacomp.services.compiler import compile_and_run


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        message="Java compiler is ready!",
    )


@router.post(
    "/compile",
    response_model=CompileResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def compile_code(req: CompileRequest) -> CompileResponse:
    """Compile and run the submitted Java source in a throwaway workspace.

    Compile and runtime failures are reported in the body with ``success=False``;
    the status code stays 200. Malformed payloads get 400, infrastructure
    failures 500.

    Note: This is not a security boundary. The compiler and the program run as
    ordinary child processes limited only by a wall-clock timeout.
    """
    result: CompileResult = compile_and_run(req.code, get_settings())

    if isinstance(result, Success):
        return CompileResponse(success=True, output=result.output)
    return CompileResponse(success=False, error=result.message)
