"""Base API Toolkit Helper Class
===============================

A helper class providing common API business logic for the upstream data
integrations (VVS Finance, Crypto.com Exchange, Developer Platform).
Focuses on API-specific concerns like configuration validation, lazy
endpoint registration and client shutdown, separate from HTTP transport
(DataHTTPClient).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger

from cronosmcp.toolkits.utils.http_client import DataHTTPClient

__all__ = ["BaseAPIToolkit"]


class BaseAPIToolkit:
    """Helper class for API business logic functionality.

    This class should be inherited alongside other base classes:

    Example:
        ```python
        class VVSToolkit(Toolkit, BaseAPIToolkit):
            def __init__(self, config, **kwargs):
                self._init_standard_configuration(
                    http_timeout=config.http.timeout,
                    max_retries=config.http.max_retries,
                )
                self._register_endpoint("vvs", config.endpoints.vvs_base_url)
                super().__init__(name="vvs_toolkit", tools=[...], **kwargs)

            async def get_summary(self):
                await self._ensure_endpoints()
                return await self._http_client.get("vvs", "/summary")
        ```
    """

    def _init_standard_configuration(
        self,
        http_timeout: float = 30.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        http_client: Optional[DataHTTPClient] = None,
    ) -> None:
        """Initialize the HTTP client shared by all calls of this integration.

        Args:
            http_timeout: HTTP request timeout in seconds
            max_retries: Retry attempts for transport/5xx failures
            retry_delay: Delay between retries in seconds
            http_client: Pre-built client (tests inject mocks here)
        """
        self._http_client = http_client or DataHTTPClient(
            default_timeout=http_timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
        )
        self._pending_endpoints: Dict[str, Dict[str, Any]] = {}

        logger.debug(f"Initialized standard configuration: timeout={http_timeout}s, retries={max_retries}")

    def _register_endpoint(
        self,
        name: str,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Queue an endpoint for registration on first use.

        ``DataHTTPClient.add_endpoint`` is a coroutine, so constructors only
        record the endpoint and ``_ensure_endpoints`` registers it later.
        """
        self._pending_endpoints[name] = {
            "base_url": base_url,
            "headers": headers,
            "timeout": timeout,
        }

    async def _ensure_endpoints(self) -> None:
        """Register queued endpoints on the HTTP client."""
        if not self._pending_endpoints:
            return

        for name, config in list(self._pending_endpoints.items()):
            await self._http_client.add_endpoint(name=name, **config)

        logger.debug(f"Setup {len(self._pending_endpoints)} endpoints")
        self._pending_endpoints.clear()

    def _validate_configuration_mapping(
        self,
        value: str,
        config_mapping: Dict[str, Any],
        config_name: str = "configuration"
    ) -> None:
        """Validate a configuration value against a mapping.

        Raises:
            ValueError: If value is not in mapping
        """
        if value not in config_mapping:
            raise ValueError(
                f"Unsupported {config_name} '{value}'. "
                f"Supported: {list(config_mapping.keys())}"
            )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()
