"""
Centralized error handling for the flight quote service.

This module provides error codes for every failure the quote pipeline can
produce, consistent error response formatting, and logging with context.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Tuple, Union
from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from flightchecker.models.responses import ErrorResponse


class ErrorCode(str, Enum):
    """Enumeration of error codes for different failure scenarios."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_AIRPORT = "UNKNOWN_AIRPORT"
    DATE_PARSE_ERROR = "DATE_PARSE_ERROR"

    # Provider errors (5xx)
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    NO_LOCATION = "NO_LOCATION"
    NO_SESSION_KEY = "NO_SESSION_KEY"
    DECODE_ERROR = "DECODE_ERROR"
    UNKNOWN_REFERENCE = "UNKNOWN_REFERENCE"
    QUOTES_INCOMPLETE = "QUOTES_INCOMPLETE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ErrorHandler:
    """
    Centralized error handling class with consistent error response formatting.

    Quote pipeline exceptions carry their own ErrorCode; this class maps those
    codes to HTTP statuses and default messages, logs failures with context,
    and builds the ErrorResponse documents returned by the API.
    """

    # Error code to HTTP status code mapping
    ERROR_STATUS_MAPPING: Dict[ErrorCode, int] = {
        ErrorCode.VALIDATION_ERROR: 422,
        ErrorCode.UNKNOWN_AIRPORT: 400,
        ErrorCode.DATE_PARSE_ERROR: 422,

        ErrorCode.TRANSPORT_ERROR: 502,
        ErrorCode.NO_LOCATION: 502,
        ErrorCode.NO_SESSION_KEY: 502,
        ErrorCode.DECODE_ERROR: 502,
        ErrorCode.UNKNOWN_REFERENCE: 502,
        ErrorCode.QUOTES_INCOMPLETE: 504,
        ErrorCode.INTERNAL_SERVER_ERROR: 500,
    }

    # Error code to default message mapping
    ERROR_MESSAGES: Dict[ErrorCode, str] = {
        ErrorCode.VALIDATION_ERROR: "Request validation failed",
        ErrorCode.UNKNOWN_AIRPORT: "Airport code not found in directory",
        ErrorCode.DATE_PARSE_ERROR: "Date or time could not be parsed",
        ErrorCode.TRANSPORT_ERROR: "Pricing provider request failed",
        ErrorCode.NO_LOCATION: "Pricing provider returned no Location header",
        ErrorCode.NO_SESSION_KEY: "No session key found in Location header",
        ErrorCode.DECODE_ERROR: "Pricing provider returned an invalid response",
        ErrorCode.UNKNOWN_REFERENCE: "Pricing provider response has an unresolved reference",
        ErrorCode.QUOTES_INCOMPLETE: "Quotes were not completed in time",
        ErrorCode.INTERNAL_SERVER_ERROR: "An unexpected error occurred",
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ErrorHandler.

        Args:
            logger: Optional logger instance. If not provided, uses the module logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    def get_status_code(self, error_code: ErrorCode) -> int:
        """Get the HTTP status code for an error code"""
        return self.ERROR_STATUS_MAPPING.get(error_code, 500)

    def create_error_response(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> ErrorResponse:
        """
        Create a standardized error response.

        Args:
            error_code: The error code enum value
            message: Optional custom error message. If not provided, uses default message.
            details: Optional additional error details

        Returns:
            ErrorResponse: Standardized error response object
        """
        final_message = message or self.ERROR_MESSAGES.get(error_code, "Unknown error")

        if details:
            final_message = f"{final_message}. Details: {details}"

        return ErrorResponse(
            error=error_code.value,
            message=final_message,
            timestamp=datetime.now(timezone.utc)
        )

    def log_error(
        self,
        error_code: ErrorCode,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log error with context information.

        Args:
            error_code: The error code enum value
            message: Error message
            request: Optional FastAPI request object
            exception: Optional exception that caused the error
            additional_context: Optional additional context information
        """
        context = {
            "error_code": error_code.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if request:
            context.update({
                "method": request.method,
                "url": str(request.url),
            })

        if additional_context:
            context.update(additional_context)

        log_message = f"{error_code.value}: {message}"

        if exception:
            self.logger.error(
                log_message,
                extra={"context": context},
                exc_info=True
            )
        else:
            self.logger.error(
                log_message,
                extra={"context": context}
            )

    def handle_quote_error(
        self,
        error: Exception,
        request: Optional[Request] = None
    ) -> Tuple[ErrorCode, str]:
        """
        Classify a pipeline failure and log it.

        Args:
            error: The exception raised by the quote pipeline
            request: Optional FastAPI request object

        Returns:
            Tuple of (ErrorCode, error_message)
        """
        error_code = getattr(error, "error_code", ErrorCode.INTERNAL_SERVER_ERROR)
        message = str(error) or self.ERROR_MESSAGES[error_code]

        context: Dict[str, Any] = {"quote_error_type": type(error).__name__}
        for attribute in ("status_code", "kind", "identifier", "last_status", "attempts"):
            value = getattr(error, attribute, None)
            if value is not None:
                context[attribute] = value

        self.log_error(
            error_code=error_code,
            message=message,
            request=request,
            exception=error,
            additional_context=context
        )

        return error_code, message

    def create_json_response(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> JSONResponse:
        """
        Create a JSON response for an error.

        Args:
            error_code: The error code enum value
            message: Optional custom error message
            details: Optional additional error details

        Returns:
            JSONResponse: FastAPI JSON response with appropriate status code
        """
        error_response = self.create_error_response(error_code, message, details)

        return JSONResponse(
            status_code=self.get_status_code(error_code),
            content=error_response.model_dump(mode='json')
        )

    def handle_validation_error(
        self,
        error: Union[ValidationError, RequestValidationError],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle Pydantic and FastAPI request validation errors.

        Args:
            error: The validation error, from a model or from request parsing
            request: Optional FastAPI request object

        Returns:
            JSONResponse: Error response for validation failure
        """
        error_details = error.errors()
        message = f"Validation failed: {error_details}"

        self.log_error(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            request=request,
            additional_context={"validation_errors": error_details}
        )

        return self.create_json_response(ErrorCode.VALIDATION_ERROR, message)


# Global error handler instance
error_handler = ErrorHandler()
