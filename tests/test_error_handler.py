"""
Unit tests for the centralized error handler.

This module tests error code to status mapping, error response creation,
logging with context, and classification of quote pipeline exceptions.
"""

import json
import logging
from datetime import datetime
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from flightchecker.core.error_handler import ErrorHandler, ErrorCode
from flightchecker.core.exceptions import (
    DateParseError,
    DecodeError,
    NoLocationError,
    NoSessionKeyError,
    QuoteError,
    QuotesIncompleteError,
    TransportError,
    UnknownAirportError,
    UnknownReferenceError,
)
from flightchecker.models.requests import QuoteRequest
from flightchecker.models.responses import ErrorResponse


class TestErrorCode:
    """Test the ErrorCode enumeration."""

    def test_error_code_values(self):
        """Test that error codes have expected string values."""
        assert ErrorCode.VALIDATION_ERROR.value == "VALIDATION_ERROR"
        assert ErrorCode.TRANSPORT_ERROR.value == "TRANSPORT_ERROR"
        assert ErrorCode.QUOTES_INCOMPLETE.value == "QUOTES_INCOMPLETE"
        assert ErrorCode.UNKNOWN_REFERENCE.value == "UNKNOWN_REFERENCE"

    def test_every_code_has_status_and_message(self):
        for error_code in ErrorCode:
            assert error_code in ErrorHandler.ERROR_STATUS_MAPPING
            assert error_code in ErrorHandler.ERROR_MESSAGES


class TestErrorHandler:
    """Test the ErrorHandler class functionality."""

    @pytest.fixture
    def mock_logger(self):
        """Create a mock logger for testing."""
        return Mock(spec=logging.Logger)

    @pytest.fixture
    def error_handler(self, mock_logger):
        """Create an ErrorHandler instance with mock logger."""
        return ErrorHandler(logger=mock_logger)

    @pytest.fixture
    def mock_request(self):
        """Create a mock FastAPI request object."""
        request = Mock(spec=Request)
        request.method = "POST"
        request.url = "http://localhost:8000/quotes"
        return request

    @pytest.mark.parametrize("error_code, status_code", [
        (ErrorCode.VALIDATION_ERROR, 422),
        (ErrorCode.UNKNOWN_AIRPORT, 400),
        (ErrorCode.DATE_PARSE_ERROR, 422),
        (ErrorCode.TRANSPORT_ERROR, 502),
        (ErrorCode.NO_LOCATION, 502),
        (ErrorCode.NO_SESSION_KEY, 502),
        (ErrorCode.DECODE_ERROR, 502),
        (ErrorCode.UNKNOWN_REFERENCE, 502),
        (ErrorCode.QUOTES_INCOMPLETE, 504),
        (ErrorCode.INTERNAL_SERVER_ERROR, 500),
    ])
    def test_status_codes(self, error_handler, error_code, status_code):
        assert error_handler.get_status_code(error_code) == status_code

    def test_create_error_response_default_message(self, error_handler):
        response = error_handler.create_error_response(ErrorCode.QUOTES_INCOMPLETE)

        assert isinstance(response, ErrorResponse)
        assert response.error == "QUOTES_INCOMPLETE"
        assert response.message == "Quotes were not completed in time"
        assert isinstance(response.timestamp, datetime)

    def test_create_error_response_with_details(self, error_handler):
        response = error_handler.create_error_response(
            ErrorCode.TRANSPORT_ERROR,
            "Search request rejected",
            details={"status_code": 429}
        )

        assert response.message == "Search request rejected. Details: {'status_code': 429}"

    def test_create_json_response(self, error_handler):
        response = error_handler.create_json_response(ErrorCode.UNKNOWN_AIRPORT, "Origin airport code XXX unknown")

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error"] == "UNKNOWN_AIRPORT"
        assert body["message"] == "Origin airport code XXX unknown"
        assert "timestamp" in body

    def test_log_error_with_request_context(self, error_handler, mock_logger, mock_request):
        error_handler.log_error(ErrorCode.DECODE_ERROR, "bad body", request=mock_request)

        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert args[0] == "DECODE_ERROR: bad body"
        context = kwargs["extra"]["context"]
        assert context["method"] == "POST"
        assert context["url"] == "http://localhost:8000/quotes"
        assert "exc_info" not in kwargs

    def test_log_error_with_exception(self, error_handler, mock_logger):
        error_handler.log_error(ErrorCode.TRANSPORT_ERROR, "failed", exception=RuntimeError("boom"))

        assert mock_logger.error.call_args[1]["exc_info"] is True

    def test_handle_validation_error(self, error_handler, mock_logger):
        with pytest.raises(ValidationError) as exc_info:
            QuoteRequest(origin="LHR")

        response = error_handler.handle_validation_error(exc_info.value)

        assert response.status_code == 422
        assert json.loads(response.body)["error"] == "VALIDATION_ERROR"
        mock_logger.error.assert_called_once()

    def test_handle_request_validation_error(self, error_handler, mock_logger, mock_request):
        error = RequestValidationError([{"type": "missing", "loc": ("body", "Destination"), "msg": "Field required"}])

        response = error_handler.handle_validation_error(error, mock_request)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body["error"] == "VALIDATION_ERROR"
        assert "Destination" in body["message"]
        context = mock_logger.error.call_args[1]["extra"]["context"]
        assert context["url"] == "http://localhost:8000/quotes"


class TestHandleQuoteError:
    """Test classification of quote pipeline exceptions."""

    @pytest.fixture
    def mock_logger(self):
        return Mock(spec=logging.Logger)

    @pytest.fixture
    def error_handler(self, mock_logger):
        return ErrorHandler(logger=mock_logger)

    @pytest.mark.parametrize("error, error_code", [
        (TransportError("Search request rejected", status_code=500), ErrorCode.TRANSPORT_ERROR),
        (NoLocationError(), ErrorCode.NO_LOCATION),
        (NoSessionKeyError("wibble"), ErrorCode.NO_SESSION_KEY),
        (DecodeError("Invalid results document"), ErrorCode.DECODE_ERROR),
        (DateParseError("bad date"), ErrorCode.DATE_PARSE_ERROR),
        (UnknownReferenceError("agent id", 12), ErrorCode.UNKNOWN_REFERENCE),
        (QuotesIncompleteError("UpdatesPending", 6), ErrorCode.QUOTES_INCOMPLETE),
        (UnknownAirportError("Origin", "XXX"), ErrorCode.UNKNOWN_AIRPORT),
        (QuoteError("unclassified"), ErrorCode.INTERNAL_SERVER_ERROR),
    ])
    def test_error_codes(self, error_handler, error, error_code):
        code, message = error_handler.handle_quote_error(error)

        assert code == error_code
        assert message == str(error)

    def test_unclassified_exception(self, error_handler):
        code, message = error_handler.handle_quote_error(RuntimeError())

        assert code == ErrorCode.INTERNAL_SERVER_ERROR
        assert message == "An unexpected error occurred"

    def test_context_includes_error_attributes(self, error_handler, mock_logger):
        error_handler.handle_quote_error(QuotesIncompleteError("UpdatesPending", 6))

        context = mock_logger.error.call_args[1]["extra"]["context"]
        assert context["quote_error_type"] == "QuotesIncompleteError"
        assert context["last_status"] == "UpdatesPending"
        assert context["attempts"] == 6
        assert context["error_code"] == "QUOTES_INCOMPLETE"

    def test_context_includes_reference(self, error_handler, mock_logger):
        error_handler.handle_quote_error(UnknownReferenceError("carrier id", 881))

        context = mock_logger.error.call_args[1]["extra"]["context"]
        assert context["kind"] == "carrier id"
        assert context["identifier"] == 881
        assert "status_code" not in context
