from typing import Any, cast

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from blognote.errors import FieldError, UserError, ValidationError

logger = structlog.get_logger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, errors: list[FieldError] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type and field errors for machine parsing."""
    content: dict[str, Any] = {"message": message}
    if error_type:
        content["type"] = error_type
    if errors:
        content["errors"] = [error.model_dump() for error in errors]
    return JSONResponse(status_code=status_code, content=content)


def field_name(loc: tuple[int | str, ...]) -> str:
    """Dotted field path without the leading "body"/"query"/"path" part."""
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with the status code each one carries."""
    error = cast(UserError, exc)
    errors = error.errors if isinstance(error, ValidationError) else None
    return create_json_error_response(
        status_code=error.status_code, message=str(error), error_type=error.error_type, errors=errors
    )


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Render FastAPI request validation failures in the same envelope as ValidationError."""
    errors = [
        FieldError(field=field_name(error["loc"]), message=error["msg"])
        for error in cast(RequestValidationError, exc).errors()
    ]
    error = ValidationError("Invalid input", errors)
    return create_json_error_response(
        status_code=error.status_code, message=str(error), error_type=error.error_type, errors=error.errors
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.error("unexpected_error", exc_info=exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
