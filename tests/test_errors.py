"""Tests for the exception hierarchy."""

from __future__ import annotations

from hateoas_client.errors import (
    ErrorCode,
    ErrorContext,
    HateoasClientError,
    InvalidArgumentError,
    MissingLinkError,
    ReservedParamConflictError,
    TransportError,
    TransportTimeoutError,
    UnboundResourceError,
    WrongResourceKindError,
)


class TestErrorCode:
    def test_categories(self) -> None:
        assert ErrorCode.TRANSPORT_TIMEOUT.category == "transport"
        assert ErrorCode.WRONG_RESOURCE_KIND.category == "usage"
        assert ErrorCode.UNKNOWN.category == "unknown"


class TestHateoasClientError:
    """Tests for the base error and its subclasses."""

    def test_str_is_plain_message(self) -> None:
        error = InvalidArgumentError("Url should be defined")
        assert str(error) == "Url should be defined"
        assert error.error_code is ErrorCode.INVALID_ARGUMENT

    def test_default_message(self) -> None:
        assert str(UnboundResourceError()) == (
            "Resource is not bound to a client, relations can not be resolved"
        )

    def test_hierarchy(self) -> None:
        assert issubclass(ReservedParamConflictError, InvalidArgumentError)
        assert issubclass(TransportTimeoutError, TransportError)
        for error_type in (WrongResourceKindError, MissingLinkError, TransportError):
            assert issubclass(error_type, HateoasClientError)

    def test_extra_context(self) -> None:
        error = MissingLinkError("no link", relation="next", resource="products")
        assert error.relation == "next"
        assert error.context.extra == {"resource": "products"}

    def test_format_verbose(self) -> None:
        error = TransportError(
            "HTTP 500 for GET http://h/x",
            status_code=500,
            context=ErrorContext(request={"method": "GET", "url": "http://h/x"}, response={"status": 500}),
            attempts=3,
        )

        lines = error.format_verbose().splitlines()

        assert lines[0] == "[E102] TransportError: HTTP 500 for GET http://h/x"
        assert "  request:  GET http://h/x" in lines
        assert "  response: HTTP 500" in lines
        assert "  attempts: 3" in lines
        assert "Try:" in lines

    def test_to_dict(self) -> None:
        cause = ValueError("boom")
        error = ReservedParamConflictError("reserved", cause=cause, param="page")

        data = error.to_dict()

        assert data["error_code"] == "E202"
        assert data["category"] == "usage"
        assert data["error_type"] == "ReservedParamConflictError"
        assert data["cause"] == "boom"
        assert data["context"]["extra"] == {"param": "page"}
        assert len(data["suggestions"]) == 2

    def test_custom_suggestions(self) -> None:
        error = WrongResourceKindError("wrong", suggestions=["use get_page"])
        assert error.suggestions == ["use get_page"]
