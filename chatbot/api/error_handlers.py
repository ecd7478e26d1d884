from typing import Dict, NoReturn, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chatbot.domain.result import Err, ErrorKind
from chatbot.utils.exceptions import (
    AppException,
    GENERIC_ERROR_MESSAGE,
    InternalErrorException,
    NotFoundException,
    ValidationException
)
from chatbot.utils.logger import get_logger

logger = get_logger(__name__)

MALFORMED_BODY_MESSAGE = "Malformed request body"

ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.CLASSIFICATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_error(error: Err, resource_id: Optional[str] = None) -> NoReturn:
    """
    Translate a failed Result into the matching application exception.

    Args:
        error: Failed result
        resource_id: Identifier the request was about, if any

    Raises:
        AppException: Always
    """
    if error.kind is ErrorKind.VALIDATION:
        raise ValidationException(error.message)
    if error.kind is ErrorKind.NOT_FOUND:
        raise NotFoundException("TrainingRecord", resource_id or "", message=error.message)
    raise InternalErrorException(
        details={"kind": error.kind.value, "reason": error.message, "resource_id": resource_id}
    )


async def handle_app_exception(request: Request, exc: AppException) -> Response:
    """
    Render application exceptions.

    404 has no body, 422 carries the validation message, everything else
    gets the generic error message only.
    """
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"Application exception: {exc.message}",
            extra={"status_code": exc.status_code, "details": exc.details, "path": request.url.path}
        )
        return JSONResponse(status_code=exc.status_code, content={"error": GENERIC_ERROR_MESSAGE})

    logger.info(
        f"Client error: {exc.message}",
        extra={"status_code": exc.status_code, "path": request.url.path}
    )
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render unparseable request bodies with the same {error} shape as record validation."""
    logger.info(
        "Rejected malformed request",
        extra={"path": request.url.path, "errors": exc.errors()}
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": MALFORMED_BODY_MESSAGE}
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={"path": request.url.path}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE}
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, handle_app_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unhandled_exception)
