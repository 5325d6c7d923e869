# app/core/handlers.py
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import BaseAPIException
from app.core.logging import logger
from app.core.templates import templates


def _wants_json(request: Request) -> bool:
    prefix = request.app.state.settings.API_V1_PREFIX
    return request.url.path.startswith(prefix)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Any] = None,
):
    """JSON envelope for the API, the error page for everything else."""
    if _wants_json(request):
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "error": {
                    "code": code,
                    "message": message,
                    "details": details
                }
            },
        )
    return templates.TemplateResponse(
        request=request,
        name="error.html",
        context={
            "status_code": status_code,
            "code": code,
            "message": message,
            "details": details,
        },
        status_code=status_code,
    )


# 1. Errors raised by our own code
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


# 2. Validation errors raised by FastAPI/pydantic on bad input
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details: Dict[str, str] = {}
    for error in exc.errors():
        # "body.email" -> "email"
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        details[field] = error["msg"]

    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Input validation failed",
        details,
    )


# 3. Standard HTTP errors (unknown URL, wrong method, ...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))


# 4. Anything else
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)

    debug = request.app.state.settings.DEBUG
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please contact support.",
        str(exc) if debug else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
