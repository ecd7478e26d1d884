from typing import Any, Dict, Optional

from fastapi import status

GENERIC_ERROR_MESSAGE = "Internal Error, Sorry"


# Exceptions rendered as HTTP responses by the API error handlers

class AppException(Exception):
    """
    Base class for errors that end a request.

    Subclasses pick the status code; ``details`` go to the logs only.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppException):
    """Rejected training record. The message is returned as ``{"error": message}``."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid training record"


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} {resource_id} not found",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class InternalErrorException(AppException):
    """Store or classification failure."""


# Errors raised below the API layer

class DocumentStoreError(Exception):
    """A document store backend call failed."""


class DatabaseConnectionError(DocumentStoreError):
    """The document store could not be reached."""


class ClassifierNotTrainedError(RuntimeError):
    """A classifier was queried before training finished."""
