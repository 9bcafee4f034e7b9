"""
Shared HTTP error classes and utilities for the contact manager services.

Provides:
- Base exception class for API errors
- Common subclasses (Validation, BadRequest, NotFound, Conflict, Service)
- Utility to convert exceptions to envelope responses
- FastAPI exception handler registration

Every error leaves the service as an ``ApiResponse`` envelope with
``success=false``, a human-readable message and a list of granular errors.

Common Usage Patterns:
=====================

Basic Exception Usage:
>>> from services.common.http_errors import ConflictError, NotFoundError
>>>
>>> # Resource not found
>>> error = NotFoundError("Contact", errors=["The requested contact does not exist."])
>>>
>>> # Uniqueness violation
>>> error = ConflictError(
...     "Duplicate contact detected",
...     errors=["A contact with the phone number '555-1234' already exists."],
... )

FastAPI Integration:
>>> from fastapi import FastAPI
>>> from services.common.http_errors import register_exception_handlers
>>>
>>> app = FastAPI()
>>> register_exception_handlers(app)

Error Code Taxonomy:
===================
- VALIDATION_FAILED : Field-level input validation errors (400)
- BAD_REQUEST : Invalid request parameters (400)
- NOT_FOUND : Resource not found (404)
- ALREADY_EXISTS : Uniqueness violation (409)
- INTERNAL_ERROR : Server-side failures (500)
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from services.common.logging_config import get_logger, log_http_error, request_id_var
from services.common.responses import ApiResponse

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for the contact manager services."""

    # ==========================================
    # CLIENT ERRORS (4xx)
    # ==========================================
    VALIDATION_FAILED = "VALIDATION_FAILED"  # HTTP 400 - Input validation failed
    BAD_REQUEST = "BAD_REQUEST"  # HTTP 400 - Invalid request parameters
    NOT_FOUND = "NOT_FOUND"  # HTTP 404 - Resource not found
    ALREADY_EXISTS = "ALREADY_EXISTS"  # HTTP 409 - Resource already exists

    # ==========================================
    # SERVICE ERRORS (5xx)
    # ==========================================
    INTERNAL_ERROR = "INTERNAL_ERROR"  # HTTP 500 - Generic internal error


def current_request_id() -> str:
    """Return the request id bound to the current context, or a fresh one."""
    request_id = request_id_var.get()
    if request_id and request_id != "uninitialized":
        return request_id
    return str(uuid.uuid4())


class ContactsAPIException(Exception):
    """
    Base exception class for all contact manager API errors.

    Carries everything needed to build a failure envelope: the HTTP status,
    a human-readable message and the granular error strings shown to users.

    Attributes:
        message: Human-readable error message
        errors: Granular error strings
        error_type: Categorization of the error (validation_error, not_found, etc.)
        error_code: Specific error code from the ErrorCode enum
        status_code: HTTP status code to return
        details: Additional context, logged but never returned to clients
        request_id: Identifier for request tracing

    Example:
        >>> error = ContactsAPIException(
        ...     message="Contact not found",
        ...     errors=["The requested contact does not exist."],
        ...     error_type="not_found",
        ...     error_code=ErrorCode.NOT_FOUND,
        ...     status_code=404,
        ... )
        >>> error.to_response().status_code
        404
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        error_type: str = "internal_error",
        error_code: Optional[ErrorCode] = None,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.errors = list(errors) if errors else [message]
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.request_id = request_id or current_request_id()
        super().__init__(self.message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert exception to a failure envelope."""
        return ApiResponse[Any].fail(
            message=self.message,
            errors=self.errors,
            status_code=self.status_code,
        )


# Common subclasses
class ValidationError(ContactsAPIException):
    """
    Exception for field-level input validation errors (HTTP 400).

    Raised with every violated constraint message at once, so clients can
    show all problems in a single round trip.

    Examples:
        >>> error = ValidationError(["The Name field is required."])
        >>> error.message
        'Validation failed'
    """

    def __init__(
        self,
        errors: List[str],
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            errors=errors,
            error_type="validation_error",
            error_code=ErrorCode.VALIDATION_FAILED,
            status_code=400,
            details=details,
        )


class BadRequestError(ContactsAPIException):
    """Exception for invalid request parameters such as paging values (HTTP 400)."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            errors=errors,
            error_type="bad_request",
            error_code=ErrorCode.BAD_REQUEST,
            status_code=400,
            details=details,
        )


class NotFoundError(ContactsAPIException):
    """
    Exception for resource not found errors (HTTP 404 by default).

    Examples:
        >>> error = NotFoundError("Contact", identifier=42)
        >>> error.message
        'Contact not found'
        >>> error.details["identifier"]
        42
    """

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        errors: Optional[List[str]] = None,
        status_code: int = 404,
        details: Optional[Dict[str, Any]] = None,
    ):
        notfound_details = {
            **(details or {}),
            "resource": resource,
            "identifier": identifier,
        }
        super().__init__(
            message=f"{resource} not found",
            errors=errors,
            error_type="not_found",
            error_code=ErrorCode.NOT_FOUND,
            status_code=status_code,
            details=notfound_details,
        )
        self.resource = resource
        self.identifier = identifier


class ConflictError(ContactsAPIException):
    """Exception for uniqueness violations (HTTP 409)."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            errors=errors,
            error_type="conflict",
            error_code=ErrorCode.ALREADY_EXISTS,
            status_code=409,
            details=details,
        )


class ServiceError(ContactsAPIException):
    """Exception for internal service failures (HTTP 500)."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            errors=errors,
            error_type="service_error",
            error_code=ErrorCode.INTERNAL_ERROR,
            status_code=500,
            details=details,
        )


def _format_validation_issue(issue: Dict[str, Any]) -> str:
    location = [str(part) for part in issue.get("loc", ()) if part != "body"]
    message = issue.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


# Utility to convert exceptions to envelope responses
def exception_to_response(exc: Exception) -> ApiResponse[Any]:
    """
    Convert any exception to a failure envelope.

    1. ContactsAPIException: uses the built-in to_response() method
    2. RequestValidationError: 400 validation envelope, one error per issue
    3. IntegrityError: 409 conflict envelope
    4. HTTPException: normalizes the detail into message and errors
    5. Generic Exception: safe 500 envelope without internal details

    Examples:
        >>> response = exception_to_response(ValueError("boom"))
        >>> response.status_code, response.message
        (500, 'Internal server error')
    """
    if isinstance(exc, ContactsAPIException):
        return exc.to_response()
    elif isinstance(exc, RequestValidationError):
        return ApiResponse[Any].fail(
            message="Validation failed",
            errors=[_format_validation_issue(issue) for issue in exc.errors()],
            status_code=400,
        )
    elif isinstance(exc, IntegrityError):
        return ApiResponse[Any].fail(
            message="Duplicate contact detected",
            errors=["A contact with the same phone number or email already exists."],
            status_code=409,
        )
    elif isinstance(exc, HTTPException):
        detail = exc.detail
        if isinstance(detail, dict):
            message = str(
                detail.get("message")
                or detail.get("detail")
                or detail.get("error")
                or detail
            )
        else:
            message = str(detail) if detail else "HTTP error"
        return ApiResponse[Any].fail(
            message=message, errors=[message], status_code=exc.status_code
        )
    else:
        return ApiResponse[Any].fail(
            message="Internal server error",
            errors=["An unexpected error occurred."],
            status_code=500,
        )


def _envelope_json(response: ApiResponse[Any], status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(by_alias=True, mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers that turn every error into an envelope.

    Behavior:
        - ContactsAPIException: exception's status_code with its errors
        - RequestValidationError: 400 with one entry per invalid input
        - IntegrityError: 409, unique constraint raced past the duplicate check
        - HTTPException (including unknown routes): exception's status_code
          with normalized detail
        - Generic Exception: 500 with a safe message; the exception is logged

    Should be called once, right after creating the FastAPI app.
    """

    @app.exception_handler(ContactsAPIException)
    async def contacts_api_exception_handler(
        request: Request, exc: ContactsAPIException
    ) -> JSONResponse:
        log_http_error(
            exc.error_type,
            exc.message,
            exc.status_code,
            request_id=exc.request_id,
            details={"errors": exc.errors, **exc.details},
            path=request.url.path,
        )
        return _envelope_json(exc.to_response(), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        response = exception_to_response(exc)
        log_http_error(
            "validation_error",
            response.message,
            400,
            details={"errors": response.errors},
            path=request.url.path,
        )
        return _envelope_json(response, 400)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(
        request: Request, exc: IntegrityError
    ) -> JSONResponse:
        response = exception_to_response(exc)
        log_http_error(
            "conflict",
            response.message,
            409,
            details={"error": str(exc.orig)},
            path=request.url.path,
        )
        return _envelope_json(response, 409)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        response = exception_to_response(exc)
        return _envelope_json(response, exc.status_code)

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
        )
        return _envelope_json(exception_to_response(exc), 500)
