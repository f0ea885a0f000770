from typing import Any, Mapping, Optional


class PizzeriaError(Exception):
    """Base class for errors raised by the catalog and pizza services.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (entity type, name, identifier)
        code: machine-readable error code, defaults to the class ``default_code``
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "INTERNAL_SERVER_ERROR"
    default_message = "Unexpected error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(PizzeriaError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class InvalidCompositionError(ServiceValidationError):
    """Raised when sauce or topping placements do not cover the entire pizza."""

    default_code = "INVALID_COMPOSITION"
    default_message = "Pizza sauces and toppings must cover entire pizza"


class NotFoundError(PizzeriaError):
    """Raised when a requested ingredient or pizza was not found."""

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(PizzeriaError):
    """Raised when an active ingredient with the same name and category already exists."""

    http_status = 409
    default_code = "CONFLICT"
    default_message = "Conflict"


class UnavailableError(PizzeriaError):
    """Raised when the relational store cannot be reached or fails mid-operation."""

    http_status = 503
    default_code = "SERVICE_UNAVAILABLE"
    default_message = "Data store unavailable"
