import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from todostore.errors import CollisionError, CorruptStateError, NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, NotFoundError):
        return create_json_error_response(status_code=404, message=str(exc), error_type="not_found")
    return create_json_error_response(status_code=400, message=str(exc), error_type="bad_request")


async def store_error_handler(_: Request, exc: Exception) -> Response:
    """Handle StoreError subclasses as bad requests, without exposing file paths."""
    if isinstance(exc, CorruptStateError):
        error_type = "corrupt_state"
    elif isinstance(exc, StorageIOError):
        error_type = "storage_io_error"
    elif isinstance(exc, CollisionError):
        error_type = "collision"
    else:
        error_type = "store_error"

    logger.error("Store error: %s", exc)
    return create_json_error_response(
        status_code=400, message="The todo store could not complete the request.", error_type=error_type
    )


async def validation_error_handler(_: Request, exc: Exception) -> Response:
    """Handle malformed request bodies (400)."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors)
    return create_json_error_response(
        status_code=400, message=message or "Invalid request", error_type="validation_error"
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
