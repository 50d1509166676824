"""Transport Port interface for hateoas-client."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx

Params = httpx.QueryParams | Mapping[str, Any] | None


class TransportPort(ABC):
    """Abstract port for the HTTP transport collaborator.

    Every method returns the decoded JSON body (None for empty bodies) and
    raises a :class:`hateoas_client.errors.TransportError` on network or
    HTTP status failures. Query values are URL-encoded by the transport.

    A string ``body`` is sent verbatim (used for ``text/uri-list`` relation
    bindings); any other body is sent as JSON.
    """

    @abstractmethod
    async def get(
        self,
        url: str,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a GET request."""
        ...

    @abstractmethod
    async def post(
        self,
        url: str,
        body: Any = None,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a POST request."""
        ...

    @abstractmethod
    async def put(
        self,
        url: str,
        body: Any = None,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a PUT request."""
        ...

    @abstractmethod
    async def patch(
        self,
        url: str,
        body: Any = None,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a PATCH request."""
        ...

    @abstractmethod
    async def delete(
        self,
        url: str,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a DELETE request."""
        ...

    async def connect(self) -> None:  # noqa: B027
        """Open underlying connections. No-op by default."""

    async def close(self) -> None:  # noqa: B027
        """Release underlying connections. No-op by default."""
