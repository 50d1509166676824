"""hateoas-client error handling.

Custom exception hierarchy with error codes, request context and
troubleshooting suggestions.
"""

from hateoas_client.errors.base import (
    ConfigurationError,
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

__all__ = [
    "ErrorCode",
    "ErrorContext",
    "HateoasClientError",
    "InvalidArgumentError",
    "ReservedParamConflictError",
    "WrongResourceKindError",
    "MissingLinkError",
    "UnboundResourceError",
    "ConfigurationError",
    "TransportError",
    "TransportTimeoutError",
]
