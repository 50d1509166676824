"""Exception hierarchy for hateoas-client.

All errors derive from HateoasClientError. Each carries an ErrorCode, an
ErrorContext describing the failing request, and suggestions for the caller.

Example:
    try:
        page = await client.get_page("products")
    except WrongResourceKindError as e:
        logger.error(e.format_verbose())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Stable codes: E1xx transport, E2xx usage and resolution, E999 unknown."""

    TRANSPORT_TIMEOUT = "E101"
    TRANSPORT_FAILED = "E102"

    INVALID_ARGUMENT = "E201"
    RESERVED_PARAM_CONFLICT = "E202"
    WRONG_RESOURCE_KIND = "E203"
    MISSING_LINK = "E204"
    UNBOUND_RESOURCE = "E205"
    INVALID_CONFIG = "E206"

    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        return {"1": "transport", "2": "usage"}.get(self.value[1], "unknown")


@dataclass
class ErrorContext:
    """Where an error happened.

    Attributes:
        request: ``method``, ``url`` and ``params`` of the failing request.
        response: ``status`` and decoded ``body`` when the server answered.
        extra: Error specific details such as ``relation`` or ``invalid_params``.
        timestamp: Creation time.
    """

    request: dict[str, Any] | None = None
    response: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"timestamp": self.timestamp.isoformat()}
        for name in ("request", "response", "extra"):
            value = getattr(self, name)
            if value:
                data[name] = value
        return data


class HateoasClientError(Exception):
    """Root of every error raised by hateoas-client.

    ``str(error)`` is exactly the message, so callers can match on it;
    :meth:`format_verbose` adds the code, request, details and suggestions.

    Attributes:
        error_code: ErrorCode of the concrete error type.
        message: Error message.
        context: ErrorContext of the failing call.
        cause: Exception that triggered this one, if any.
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "Unexpected client error"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **details: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or type(self).error_code
        self.context = context or ErrorContext()
        self.context.extra.update(details)
        self.cause = cause
        self._suggestions = suggestions
        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        if self._suggestions is None:
            return list(self.default_suggestions)
        return self._suggestions

    def __str__(self) -> str:
        return self.message

    def format_verbose(self) -> str:
        """Multi-line description for logs and debugging sessions."""
        lines = [f"[{self.error_code.value}] {type(self).__name__}: {self.message}"]
        request = self.context.request or {}
        if request:
            lines.append(f"  request:  {request.get('method', '?')} {request.get('url', '?')}")
        response = self.context.response or {}
        if response:
            lines.append(f"  response: HTTP {response.get('status', '?')}")
        for name, value in self.context.extra.items():
            lines.append(f"  {name}: {value}")
        if self.suggestions:
            lines.append("Try:")
            lines.extend(f"  * {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, e.g. for structured logs."""
        data: dict[str, Any] = {
            "error_code": self.error_code.value,
            "category": self.error_code.category,
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context.to_dict(),
            "suggestions": self.suggestions,
        }
        data["cause"] = None if self.cause is None else str(self.cause)
        return data


class InvalidArgumentError(HateoasClientError):
    """A required argument was None or empty, or out of range."""

    error_code = ErrorCode.INVALID_ARGUMENT
    default_message = "Invalid argument"


class ReservedParamConflictError(InvalidArgumentError):
    """A reserved query key was passed inside the generic ``params`` mapping.

    ``page``, ``size`` and ``sort`` belong in ``GetOption.page_param`` and
    ``projection`` in ``GetOption.projection``.
    """

    error_code = ErrorCode.RESERVED_PARAM_CONFLICT
    default_message = "Reserved param passed with params"
    default_suggestions = [
        "Pass page, size and sort through GetOption(page_param=PageParam(...))",
        "Pass projection through GetOption(projection=...)",
    ]


class WrongResourceKindError(HateoasClientError):
    """The server response classified to a different kind than expected."""

    error_code = ErrorCode.WRONG_RESOURCE_KIND
    default_message = "You try to get wrong resource type."
    default_suggestions = [
        "Check that the endpoint returns the HAL shape you requested",
        "Use get_resource for single resources, get_collection for plain lists "
        "and get_page for paged lists",
    ]

    def __init__(
        self,
        message: str | None = None,
        expected: Any = None,
        actual: Any = None,
        **kwargs: Any,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message, **kwargs)


class MissingLinkError(HateoasClientError):
    """A relation or navigation link is absent from the resource."""

    error_code = ErrorCode.MISSING_LINK
    default_message = "Link is not present on the resource"

    def __init__(self, message: str | None = None, relation: str | None = None, **kwargs: Any) -> None:
        self.relation = relation
        super().__init__(message, **kwargs)


class UnboundResourceError(HateoasClientError):
    """A relation operation was called on a resource built without a client."""

    error_code = ErrorCode.UNBOUND_RESOURCE
    default_message = "Resource is not bound to a client, relations can not be resolved"
    default_suggestions = [
        "Fetch resources through HateoasClient so they can follow their links",
    ]


class ConfigurationError(HateoasClientError):
    """Client configuration is invalid."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid client configuration"


class TransportError(HateoasClientError):
    """The HTTP transport failed or the server answered with an error status.

    Attributes:
        status_code: HTTP status code, or None when no response was received.
        response_body: Decoded response body, if any.
    """

    error_code = ErrorCode.TRANSPORT_FAILED
    default_message = "HTTP request failed"
    default_suggestions = [
        "Verify base_api_url points at a running HAL API",
        "Inspect the response body for the server-side error",
    ]

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        response_body: Any | None = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, **kwargs)


class TransportTimeoutError(TransportError):
    """The HTTP request timed out after all retries."""

    error_code = ErrorCode.TRANSPORT_TIMEOUT
    default_message = "HTTP request timed out"
    default_suggestions = [
        "Increase timeout in the client configuration (HATEOAS_TIMEOUT)",
        "Check if the endpoint is known to be slow",
    ]
