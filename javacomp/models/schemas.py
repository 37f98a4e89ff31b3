from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr


class CompileRequest(BaseModel):
    code: StrictStr = Field(..., min_length=1, description="Java source to compile and run.")


class CompileResponse(BaseModel):
    success: bool
    output: StrictStr | None = None
    error: StrictStr | None = None


class HealthResponse(BaseModel):
    status: StrictStr
    timestamp: StrictStr
    message: StrictStr
