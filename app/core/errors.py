from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import UserHubError, ValidationError
from app.core.logging import get_logger
from app.schemas.response import ErrorResponse
from app.core.config import settings

logger = get_logger(__name__)


def _error_content(message: str, details=None) -> dict:
    return ErrorResponse(message=message, details=details).model_dump(exclude_none=True)


def format_validation_errors(errors: list) -> str:
    """
    Flattens a pydantic error list into one readable line.

    Example:
        "User validation failed: age: Input should be a valid integer"
    """
    parts = []
    for error in errors:
        if error.get("type") == "json_invalid":
            parts.append("body is not valid JSON")
            continue
        # Drop the leading "body" segment FastAPI adds to body fields
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        msg = error.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)

    if not parts:
        return "User validation failed"
    return "User validation failed: " + ", ".join(parts)


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(UserHubError)
    async def userhub_exception_handler(request: Request, exc: UserHubError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.code}: {exc.message}",
                extra={"method": request.method, "url": str(request.url)}
            )
        else:
            logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(exc.message, jsonable_encoder(exc.details))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles malformed request bodies as a 400 ValidationError.
        """
        errors = jsonable_encoder(exc.errors())
        return await userhub_exception_handler(
            request, ValidationError(format_validation_errors(errors), details=errors)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = "An internal error occurred. Please try again later." if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=_error_content(message)
        )
