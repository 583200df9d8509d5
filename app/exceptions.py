from typing import Any, Mapping, Optional
from uuid import UUID


class SmartMealError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    error_code = "INTERNAL_SERVER_ERROR"
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(SmartMealError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    error_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class NotFoundError(SmartMealError):
    """Raised when a requested resource was not found (or is not owned by the caller)."""

    http_status = 404
    error_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(SmartMealError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    error_code = "CONFLICT"
    default_message = "Conflict"


class UnauthorizedError(SmartMealError):
    """Raised when authentication or authorization fails."""

    http_status = 401
    error_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class NotAuthenticatedError(UnauthorizedError):
    """Raised when an operation needs a current user and there is none.

    Always raised before any data is read or written.
    """

    error_code = "NOT_AUTHENTICATED"
    default_message = "Not authenticated"


class FetchFailureError(SmartMealError):
    """Raised when a read from the store fails.

    Operations that raise this have not written anything yet.
    """

    http_status = 502
    error_code = "FETCH_FAILURE"
    default_message = "Failed to read from the data store"


class WriteFailureError(SmartMealError):
    """Raised when creating a shopping list or inserting its items fails.

    If the list row was created before the failure, ``list_id`` holds its id.
    That list is left in place with zero or partial items; deleting it is up
    to the caller.
    """

    http_status = 502
    error_code = "WRITE_FAILURE"
    default_message = "Failed to write to the data store"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
        list_id: Optional[UUID] = None,
    ):
        super().__init__(message, details, code)
        self.list_id = list_id

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.list_id is not None:
            payload["list_id"] = str(self.list_id)
        return payload
