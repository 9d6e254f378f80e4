"""FastAPI app for the article risk console."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError

from .config import get_settings
from .errors import ApiError, error_response
from .observability import configure_logging
from .routes import router

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.service_name, version=settings.service_version)
app.include_router(router)


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    return error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=exc.trace_id or request.headers.get("x-trace-id"),
        details=exc.details,
    )


@app.exception_handler(HTTPException)
async def handle_http_exception(request: Request, exc: HTTPException):
    status_to_code = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }
    code = status_to_code.get(exc.status_code, "INTERNAL_SERVER_ERROR")
    return error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=request.headers.get("x-trace-id"),
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", [])),
            "issue": err.get("msg", "invalid value"),
        }
        for err in exc.errors()
    ]
    return error_response(
        status_code=422,
        code="UNPROCESSABLE_ENTITY",
        message="Validation failed.",
        trace_id=request.headers.get("x-trace-id"),
        details=details,
    )
