"""Error types raised by the service layer and the handlers that render them."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

STORAGE_UNAVAILABLE = "storage unavailable"


class FilesManagerError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(FilesManagerError):
    """No token, unknown token, or the token's user does not exist."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationFailedError(FilesManagerError):
    """Upload payload rejected; the message is the client-facing reason."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(FilesManagerError):
    """Record is absent or owned by someone else. The two are indistinguishable."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class BackendUnavailableError(FilesManagerError):
    """Cache or document store could not be reached."""

    def __init__(self, message: str = STORAGE_UNAVAILABLE):
        super().__init__(message)


class PersistenceFailedError(FilesManagerError):
    """File content could not be written to local storage."""

    def __init__(self, message: str = STORAGE_UNAVAILABLE):
        super().__init__(message)


async def handle_files_manager_errors(request: Request, exc: FilesManagerError) -> JSONResponse:
    """Render a service error as `{"error": <message>}` with its status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests (for example a body that is not JSON) are client errors."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Invalid record",
            "detail": [{"msg": error["msg"], "loc": list(error["loc"])} for error in errors],
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
