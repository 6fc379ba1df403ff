"""Map HTW and validation errors onto the standard error envelope."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from htw_shared.exceptions import HTWError

from htw_api.responses import error_response

logger = structlog.get_logger()

STATUS_BY_CODE: dict[str, int] = {
    "structure": 400,
    "missing_columns": 400,
    "unsupported_file": 400,
    "not_found": 404,
    "backend": 502,
    "batch_write": 502,
}


def status_for(exc: HTWError) -> int:
    return STATUS_BY_CODE.get(exc.code, 500)


async def htw_error_handler(request: Request, exc: HTWError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("request_error", path=request.url.path, code=exc.code, error=str(exc))
    return JSONResponse(
        status_code=status,
        content=error_response(exc.code, exc.message, details=exc.to_details()),
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=error_response(
            "validation_error",
            "Invalid field values",
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTWError, htw_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
