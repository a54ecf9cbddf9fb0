"""Instrumented HTTP client with auto-timing and metric emission."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import aiohttp

if TYPE_CHECKING:
    from collections.abc import Callable

    from crocload._internal.types import Headers, Tags


def _noop_callback(metric: RequestMetric) -> None:
    """Default no-op metric callback."""


@dataclass
class RequestMetric:
    """Raw metric emitted for every HTTP request.

    Attributes:
        timestamp: Monotonic timestamp when the request started.
        name: Logical name for metric grouping (e.g., "login").
        method: HTTP method (POST, PUT, ...).
        url: Full request URL.
        status_code: HTTP response status code (0 if the request failed).
        latency_ms: Response time in milliseconds.
        content_length: Size of the response body in bytes.
        error: Error message if the request failed, None otherwise.
        vu_id: Virtual user that made the request.
        tags: Free-form tags such as ``endpoint`` and ``method``.
    """

    timestamp: float
    name: str
    method: str
    url: str
    status_code: int
    latency_ms: float
    content_length: int
    error: str | None = None
    vu_id: int = 0
    tags: Tags = field(default_factory=dict)


class HttpClient:
    """Instrumented async HTTP client wrapping ``aiohttp.ClientSession``.

    Every request is timed until its body has been read and emits a
    ``RequestMetric`` through ``metric_callback``, including requests that
    raise. Transport errors are re-raised to the caller after the metric is
    emitted. Requests are never retried.

    Attributes:
        base_url: Base URL prepended to all request paths.
        headers: Mutable headers dict applied to every request. The scenario
            sets the bearer token here after login.
    """

    def __init__(
        self,
        base_url: str,
        headers: Headers | None = None,
        metric_callback: Callable[[RequestMetric], None] | None = None,
        vu_id: int = 0,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL prepended to all request paths.
            headers: Default headers applied to every request.
            metric_callback: Callback invoked with a ``RequestMetric``
                after each request. Defaults to a no-op.
            vu_id: Virtual user identifier for metric tagging.
            timeout: Total request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.headers: Headers = dict(headers or {})
        self._metric_callback = metric_callback or _noop_callback
        self._vu_id = vu_id
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> HttpClient:
        """Open the underlying aiohttp session."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        # aiohttp re-sends idempotent methods once after a dropped connection;
        # every request must reach the server at most once.
        self._session._retry_connection = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Close the underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def post(
        self,
        path: str,
        *,
        name: str | None = None,
        tags: Tags | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a POST request."""
        return await self._request("POST", path, name=name, tags=tags, **kwargs)

    async def put(
        self,
        path: str,
        *,
        name: str | None = None,
        tags: Tags | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a PUT request."""
        return await self._request("PUT", path, name=name, tags=tags, **kwargs)

    async def patch(
        self,
        path: str,
        *,
        name: str | None = None,
        tags: Tags | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a PATCH request."""
        return await self._request("PATCH", path, name=name, tags=tags, **kwargs)

    async def delete(
        self,
        path: str,
        *,
        name: str | None = None,
        tags: Tags | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send a DELETE request."""
        return await self._request("DELETE", path, name=name, tags=tags, **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        name: str | None = None,
        tags: Tags | None = None,
        **kwargs: object,
    ) -> aiohttp.ClientResponse:
        """Send an HTTP request with auto-timing and metric emission.

        Args:
            method: HTTP method.
            path: URL path appended to base_url.
            name: Logical name for metric grouping. Defaults to the path.
            tags: Extra tags copied onto the emitted metric.
            **kwargs: Additional keyword arguments passed to aiohttp
                (``json=``, ``data=``, ...).

        Returns:
            The aiohttp response object.

        Raises:
            RuntimeError: If the client is used outside of an async context
                manager.
        """
        if self._session is None:
            msg = "HttpClient must be used as an async context manager"
            raise RuntimeError(msg)

        url = f"{self.base_url}{path}"
        start = time.monotonic()
        status_code = 0
        content_length = 0
        error: str | None = None

        try:
            resp = await self._session.request(
                method,
                url,
                headers={**self.headers},
                **kwargs,  # type: ignore[arg-type]
            )
            status_code = resp.status
            # Latency covers receiving the body, not just the headers
            content_length = len(await resp.read())
        except Exception as exc:
            error = f"{type(exc).__name__}: {exc}"
            raise
        finally:
            self._metric_callback(
                RequestMetric(
                    timestamp=start,
                    name=name or path,
                    method=method,
                    url=url,
                    status_code=status_code,
                    latency_ms=(time.monotonic() - start) * 1000,
                    content_length=content_length,
                    error=error,
                    vu_id=self._vu_id,
                    tags=dict(tags or {}),
                )
            )

        return resp
