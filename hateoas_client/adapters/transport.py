"""httpx based transport with bounded request history and retries.

Example:
    >>> from hateoas_client.adapters.transport import HttpxTransport
    >>> async def main():
    ...     async with HttpxTransport(timeout=10.0) as transport:
    ...         raw = await transport.get("http://localhost:8080/api/v1/products")
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from hateoas_client.errors import ErrorContext, InvalidArgumentError, TransportError, TransportTimeoutError
from hateoas_client.ports.transport import Params, TransportPort

logger = logging.getLogger(__name__)

HAL_JSON = "application/hal+json"
URI_LIST = "text/uri-list"

DEFAULT_HEADERS = {"Accept": f"{HAL_JSON}, application/json"}


@dataclass
class RequestRecord:
    """One attempt made by the transport.

    ``status`` is 0 when no response arrived; ``error`` then says why.
    """

    method: str
    url: str
    attempt: int
    status: int = 0
    body: Any | None = None
    elapsed_ms: float = 0.0
    error: str | None = None
    at: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 400


class HttpxTransport(TransportPort):
    """Async transport over ``httpx.AsyncClient``.

    5xx answers, timeouts and connection errors are retried up to
    ``retry_count`` attempts, sleeping ``retry_delay * attempt`` in between.
    Other error statuses raise :class:`TransportError` immediately.

    String bodies go out as ``text/uri-list``, anything else as JSON.

    Attributes:
        timeout: Request timeout in seconds.
        retry_count: Maximum attempts per request.
        retry_delay: Base delay between attempts in seconds.
        default_headers: Headers sent with every request.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        retry_count: int = 3,
        retry_delay: float = 1.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        history_limit: int = 100,
    ) -> None:
        if timeout <= 0:
            raise InvalidArgumentError(f"Invalid timeout: {timeout}", field_name="timeout", value=timeout)
        if retry_count < 1:
            raise InvalidArgumentError(
                f"Invalid retry_count: {retry_count}", field_name="retry_count", value=retry_count
            )
        if retry_delay < 0:
            raise InvalidArgumentError(
                f"Invalid retry_delay: {retry_delay}", field_name="retry_delay", value=retry_delay
            )

        self.timeout = timeout
        self.retry_count = retry_count
        self.retry_delay = retry_delay
        self.default_headers = {**DEFAULT_HEADERS, **(default_headers or {})}
        self._history: deque[RequestRecord] = deque(maxlen=history_limit)
        self._mock_transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.default_headers,
                transport=self._mock_transport,
            )

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def history(self) -> list[RequestRecord]:
        """Recorded attempts, oldest first, at most ``history_limit`` of them."""
        return list(self._history)

    def last_request(self) -> RequestRecord | None:
        return self._history[-1] if self._history else None

    def clear_history(self) -> None:
        self._history.clear()

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        params: Params = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send ``method url`` and return the decoded response body.

        Raises:
            TransportTimeoutError: The last attempt timed out.
            TransportError: Error status, or the last attempt could not connect.
        """
        await self.connect()
        options = _request_options(body, params, headers)
        context = ErrorContext(request={"method": method, "url": url})

        failure: httpx.RequestError | None = None
        for attempt in range(1, self.retry_count + 1):
            response, failure = await self._attempt(method, url, attempt, options)
            retry = response is None or response.is_server_error
            if not retry or attempt == self.retry_count:
                break
            extra = {"method": method, "url": url, "attempt": attempt}
            if response is not None:
                extra["status"] = response.status_code
            reason = "server error" if failure is None else type(failure).__name__
            logger.warning(f"Retrying after {reason}", extra=extra)
            await asyncio.sleep(self.retry_delay * attempt)

        if response is None:
            if isinstance(failure, httpx.TimeoutException):
                raise TransportTimeoutError(context=context, cause=failure, attempts=self.retry_count)
            raise TransportError(
                f"HTTP request failed: {failure}", context=context, cause=failure, attempts=self.retry_count
            )

        payload = _decode(response)
        if response.is_error:
            context.response = {"status": response.status_code, "body": payload}
            raise TransportError(
                f"HTTP {response.status_code} for {method} {url}",
                status_code=response.status_code,
                response_body=payload,
                context=context,
            )
        return payload

    async def _attempt(
        self, method: str, url: str, attempt: int, options: dict[str, Any]
    ) -> tuple[httpx.Response | None, httpx.RequestError | None]:
        assert self._client is not None
        record = RequestRecord(method=method, url=url, attempt=attempt)
        started = time.perf_counter()
        try:
            response = await self._client.request(method, url, **options)
        except httpx.RequestError as e:
            record.error = f"{type(e).__name__}: {e}"
            return None, e
        else:
            record.url = str(response.url)
            record.status = response.status_code
            record.body = _decode(response)
            return response, None
        finally:
            record.elapsed_ms = (time.perf_counter() - started) * 1000
            self._history.append(record)

    async def get(self, url: str, params: Params = None, headers: dict[str, str] | None = None) -> Any:
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self, url: str, body: Any = None, params: Params = None, headers: dict[str, str] | None = None
    ) -> Any:
        return await self.request("POST", url, body=body, params=params, headers=headers)

    async def put(
        self, url: str, body: Any = None, params: Params = None, headers: dict[str, str] | None = None
    ) -> Any:
        return await self.request("PUT", url, body=body, params=params, headers=headers)

    async def patch(
        self, url: str, body: Any = None, params: Params = None, headers: dict[str, str] | None = None
    ) -> Any:
        return await self.request("PATCH", url, body=body, params=params, headers=headers)

    async def delete(self, url: str, params: Params = None, headers: dict[str, str] | None = None) -> Any:
        return await self.request("DELETE", url, params=params, headers=headers)


def _request_options(body: Any, params: Params, headers: dict[str, str] | None) -> dict[str, Any]:
    options: dict[str, Any] = {"params": params, "headers": dict(headers or {})}
    if isinstance(body, str):
        options["content"] = body
        options["headers"].setdefault("Content-Type", URI_LIST)
    elif body is not None:
        options["json"] = body
    return options


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
