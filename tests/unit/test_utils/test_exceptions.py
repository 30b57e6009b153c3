"""
Unit tests for the error taxonomy
"""

import pytest

from utils.exceptions import (
    ErrorKind, HTTP_STATUS_BY_KIND, QuoteServiceError, MethodNotAllowedError, InvalidGameError,
    UpstreamFetchError, NoQuotesFoundError, MalformedResponseError, NotFoundError,
    http_status_for, error_message, create_error_response
)


@pytest.mark.unit
class TestErrorKinds:
    """Test cases for error kind dispatch"""

    def test_every_kind_has_a_status(self):
        assert set(HTTP_STATUS_BY_KIND) == set(ErrorKind)

    @pytest.mark.parametrize("error_cls,kind,status", [
        (MethodNotAllowedError, ErrorKind.METHOD_NOT_ALLOWED, 405),
        (InvalidGameError, ErrorKind.INVALID_GAME, 400),
        (UpstreamFetchError, ErrorKind.UPSTREAM_FETCH_FAILURE, 500),
        (NoQuotesFoundError, ErrorKind.NO_QUOTES_FOUND, 500),
        (MalformedResponseError, ErrorKind.MALFORMED_RESPONSE, 500),
        (NotFoundError, ErrorKind.NOT_FOUND, 404),
        (QuoteServiceError, ErrorKind.INTERNAL, 500),
    ])
    def test_subclass_kind_and_status(self, error_cls, kind, status):
        error = error_cls("boom")

        assert error.kind == kind
        assert error.status_code == status
        assert http_status_for(kind) == status

    def test_explicit_kind_overrides_class_default(self):
        error = QuoteServiceError("gone", kind=ErrorKind.NOT_FOUND)

        assert error.status_code == 404
        assert QuoteServiceError("other").kind == ErrorKind.INTERNAL

    def test_str_includes_kind(self):
        assert str(InvalidGameError("Invalid game: x")) == "[INVALID_GAME] Invalid game: x"

    def test_context_defaults_to_empty_dict(self):
        assert NotFoundError("nope").context == {}
        assert NotFoundError("nope", context={'path': '/x'}).context == {'path': '/x'}


@pytest.mark.unit
class TestErrorMessages:
    """Test cases for response messages"""

    def test_service_error_uses_plain_message(self):
        assert create_error_response(InvalidGameError("Invalid game: x")) == {"error": "Invalid game: x"}

    def test_other_exception_uses_str(self):
        assert error_message(ValueError("bad value")) == "bad value"

    def test_empty_message_falls_back(self):
        assert error_message(RuntimeError()) == "Internal server error"
        assert error_message(QuoteServiceError("")) == "Internal server error"
