"""Async HTTP Client for Upstream Data APIs
==========================================

A small reusable HTTP client shared by the VVS Finance, Crypto.com Exchange
and Developer Platform integrations. Supports several named base URLs,
per-endpoint headers and timeouts, and proper async resource management.

Key Features:
- Multiple endpoint support with different base URLs
- Custom headers per endpoint (API keys) or globally
- Automatic JSON parsing with a single error type for callers
- Optional per-endpoint rate limiting
- Optional retries for transport and 5xx errors (off by default)
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import httpx
from loguru import logger

__all__ = ["DataHTTPClient", "HTTPClientError"]


class HTTPClientError(Exception):
    """Raised for network errors, non-2xx answers and non-JSON bodies."""

    def __init__(self, message: str, status_code: int = None, response_text: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class DataHTTPClient:
    """Async HTTP client for upstream data APIs.

    Example:
        ```python
        client = DataHTTPClient()
        await client.add_endpoint("vvs", "https://api.vvs.finance/info/api")
        pairs = await client.get("vvs", "/pairs")

        await client.add_endpoint(
            "platform",
            "https://developer-platform-api.crypto.com/api/v1/cdc-developer-platform",
            headers={"x-api-key": "your_key"},
        )
        ```
    """

    def __init__(
        self,
        default_timeout: float = 30.0,
        default_headers: Optional[Dict[str, str]] = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        default_rate_limit: Optional[float] = None,
    ):
        """Initialize the HTTP client.

        Args:
            default_timeout: Default timeout for all requests in seconds
            default_headers: Default headers applied to all requests
            max_retries: Retry attempts for transport/5xx failures (0 = single attempt)
            retry_delay: Base delay between retry attempts in seconds
            default_rate_limit: Default minimum seconds between requests (None = no limit)
        """
        self._default_timeout = default_timeout
        self._default_headers = default_headers or {}
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._default_rate_limit = default_rate_limit

        self._endpoints: Dict[str, Dict[str, Any]] = {}
        self._clients: Dict[str, httpx.AsyncClient] = {}
        self._last_request_times: Dict[str, float] = {}

        logger.debug(f"Initialized DataHTTPClient with {default_timeout}s timeout")

    async def add_endpoint(
        self,
        name: str,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        rate_limit: Optional[float] = None,
        **client_kwargs: Any,
    ) -> None:
        """Add (or replace) a named endpoint configuration.

        Args:
            name: Unique identifier for this endpoint
            base_url: Base URL for the endpoint
            headers: Additional headers specific to this endpoint
            timeout: Custom timeout for this endpoint (overrides default)
            rate_limit: Minimum seconds between requests to this endpoint
            **client_kwargs: Additional arguments passed to httpx.AsyncClient
        """
        if name in self._endpoints:
            logger.warning(f"Endpoint '{name}' already exists, updating configuration")
            if name in self._clients:
                await self._clients[name].aclose()
                del self._clients[name]

        endpoint_headers = {**self._default_headers}
        if headers:
            endpoint_headers.update(headers)

        self._endpoints[name] = {
            "base_url": base_url,
            "headers": endpoint_headers,
            "timeout": timeout or self._default_timeout,
            "rate_limit": rate_limit if rate_limit is not None else self._default_rate_limit,
            "client_kwargs": client_kwargs,
        }

        logger.debug(f"Added endpoint '{name}' with base URL: {base_url}")

    def has_endpoint(self, name: str) -> bool:
        return name in self._endpoints

    def get_endpoints(self) -> Dict[str, str]:
        """Mapping of endpoint names to their base URLs."""
        return {name: config["base_url"] for name, config in self._endpoints.items()}

    def _get_client(self, endpoint_name: str) -> httpx.AsyncClient:
        """Get or lazily create the httpx client for an endpoint.

        Raises:
            ValueError: If endpoint is not configured
        """
        if endpoint_name not in self._endpoints:
            available = list(self._endpoints.keys())
            raise ValueError(f"Endpoint '{endpoint_name}' not configured. Available: {available}")

        if endpoint_name not in self._clients:
            config = self._endpoints[endpoint_name]

            self._clients[endpoint_name] = httpx.AsyncClient(
                base_url=config["base_url"],
                headers=config["headers"],
                timeout=config["timeout"],
                **config["client_kwargs"],
            )

            logger.debug(f"Created HTTP client for endpoint '{endpoint_name}'")

        return self._clients[endpoint_name]

    async def _apply_rate_limit(self, endpoint_name: str) -> None:
        rate_limit = self._endpoints[endpoint_name].get("rate_limit")
        if rate_limit is None:
            return

        time_since_last = time.time() - self._last_request_times.get(endpoint_name, 0)
        if time_since_last < rate_limit:
            sleep_time = rate_limit - time_since_last
            logger.debug(f"Rate limiting: sleeping {sleep_time:.2f}s for endpoint '{endpoint_name}'")
            await asyncio.sleep(sleep_time)

        self._last_request_times[endpoint_name] = time.time()

    async def get(
        self,
        endpoint_name: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Make a GET request and return the decoded JSON body.

        Raises:
            HTTPClientError: For network errors, HTTP errors or invalid JSON
        """
        return await self._make_request(
            endpoint_name, "GET", path, params=params, headers=headers, timeout=timeout
        )

    async def post(
        self,
        endpoint_name: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Make a POST request with a JSON body and return the decoded JSON body."""
        return await self._make_request(
            endpoint_name, "POST", path, json_data=json_data,
            params=params, headers=headers, timeout=timeout
        )

    async def _make_request(
        self,
        endpoint_name: str,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        client = self._get_client(endpoint_name)
        await self._apply_rate_limit(endpoint_name)

        # httpx treats timeout=None as "no timeout"; only forward explicit overrides
        request_kwargs: Dict[str, Any] = {}
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        last_error = None

        for attempt in range(self._max_retries + 1):
            try:
                logger.debug(f"Making {method} request to {endpoint_name}{path} (attempt {attempt + 1})")

                response = await client.request(
                    method=method,
                    url=path,
                    params=params,
                    json=json_data,
                    headers=headers,
                    **request_kwargs,
                )
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                last_error = HTTPClientError(
                    f"HTTP {e.response.status_code} error: {e.response.text}",
                    e.response.status_code,
                    e.response.text
                )
                # Client errors (4xx) are never retried
                if 400 <= e.response.status_code < 500:
                    break

            except httpx.RequestError as e:
                last_error = HTTPClientError(f"Request failed: {e}")

            else:
                try:
                    return response.json()
                except ValueError as e:
                    raise HTTPClientError(
                        f"Invalid JSON response: {e}", response.status_code, response.text
                    )

            if attempt < self._max_retries:
                delay = self._retry_delay * (attempt + 1)
                logger.debug(f"Retrying request after {delay}s delay")
                await asyncio.sleep(delay)

        logger.error(f"Request to {endpoint_name}{path} failed: {last_error}")
        raise last_error

    async def aclose(self) -> None:
        """Close all HTTP clients and clean up resources."""
        for endpoint_name, client in self._clients.items():
            await client.aclose()
            logger.debug(f"Closed HTTP client for endpoint '{endpoint_name}'")

        self._clients.clear()
        self._endpoints.clear()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
