"""
Bing Maps Async Client

This module provides the BingMapsClient class: it authenticates and executes
GET requests against the Bing Maps REST API and decodes JSON responses.
Resource-specific operations live in other modules (see ``locations``).
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, TypeVar, overload
from urllib.parse import urlencode

import httpx

from lib.logging_utils import maskApiKey

from .constants import (
    API_BASE_URL,
    API_KEY_PARAM,
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    USER_AGENT,
    WS_INFO_HEADER,
    WS_INFO_SHOULD_WAIT,
)
from .exceptions import (
    ConfigurationError,
    ConversionDirection,
    ConversionError,
    NetworkError,
    RequestError,
    ResponseReadError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Params = Dict[str, str]
"""Query parameters of a single request"""


def parseShouldWait(headers: httpx.Headers) -> bool:
    """Check whether the service reported a transient overload.

    Args:
        headers: Response headers

    Returns:
        True if any comma-separated segment of any ``X-MS-BM-WS-INFO``
        header value equals "1"
    """
    for segment in headers.get_list(WS_INFO_HEADER, split_commas=True):
        if segment.strip() == WS_INFO_SHOULD_WAIT:
            return True
    return False


class BingMapsClient:
    """Async client for Bing Maps REST API.

    Holds the API key and a shared ``httpx.AsyncClient``. The key is
    read-only after construction, so one client may serve any number of
    concurrent requests.

    Example:
        >>> from lib.bing_maps import BingMapsClient, findByQuery
        >>>
        >>> async with BingMapsClient("your_api_key") as client:
        ...     locations = await findByQuery(client, "1 Microsoft Way, Redmond, WA")
        ...     print(locations[0].point.latlng)

    Attributes:
        baseUrl: Base URL for the API (default: https://dev.virtualearth.net/REST/v1/)
        timeout: Request timeout in seconds (default: 10)
    """

    __slots__ = ("_apiKey", "baseUrl", "timeout", "_httpClient", "_ownsHttpClient")

    def __init__(
        self,
        apiKey: str,
        *,
        baseUrl: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        httpClient: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the Bing Maps client.

        Args:
            apiKey: Bing Maps API key
            baseUrl: Base URL for the API
            timeout: Request timeout in seconds, used only for the client-owned transport
            httpClient: Optional caller-owned transport; it is not closed by ``aclose()``

        Raises:
            ConfigurationError: If apiKey is empty
        """
        if not apiKey or not apiKey.strip():
            raise ConfigurationError("API key cannot be empty")

        self._apiKey = apiKey.strip()
        self.baseUrl = baseUrl if baseUrl.endswith("/") else baseUrl + "/"
        self.timeout = timeout
        self._httpClient = httpClient
        self._ownsHttpClient = httpClient is None

        logger.debug(f"BingMapsClient initialized for {self.baseUrl}")

    @classmethod
    def fromConfig(cls, config: Dict[str, Any], httpClient: Optional[httpx.AsyncClient] = None) -> "BingMapsClient":
        """Create client from the ``[bing-maps]`` configuration section.

        Args:
            config: Dict with ``api-key`` and optional ``base-url`` and ``timeout``
            httpClient: Optional caller-owned transport

        Raises:
            ConfigurationError: If ``api-key`` is missing
        """
        apiKey = config.get("api-key")
        if not apiKey:
            raise ConfigurationError("bing-maps.api-key is not configured")
        return cls(
            apiKey,
            baseUrl=config.get("base-url", API_BASE_URL),
            timeout=config.get("timeout", DEFAULT_TIMEOUT),
            httpClient=httpClient,
        )

    @property
    def apiKey(self) -> str:
        return self._apiKey

    async def __aenter__(self) -> "BingMapsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _getHttpClient(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Returns:
            Configured httpx.AsyncClient instance

        Raises:
            ConfigurationError: If the caller-supplied HTTP client has been closed
        """
        if not self._ownsHttpClient and self._httpClient is not None and self._httpClient.is_closed:
            raise ConfigurationError("Caller-supplied HTTP client is closed")

        if self._httpClient is None or (self._ownsHttpClient and self._httpClient.is_closed):
            self._httpClient = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": CONTENT_TYPE_JSON,
                },
            )
            logger.debug("Created new HTTP client")

        return self._httpClient

    async def aclose(self) -> None:
        """Close the client-owned HTTP client."""
        if self._ownsHttpClient and self._httpClient is not None and not self._httpClient.is_closed:
            await self._httpClient.aclose()
            logger.debug("HTTP client closed")

    def buildUrl(self, path: str, params: Params) -> str:
        """Build full request URL.

        Args:
            path: Path fragment, e.g. "/Locations/47.60000,-122.30000"
            params: Query parameters, keys and values must be strings

        Returns:
            Base URL + path + "?" + urlencoded query string

        Raises:
            ConversionError: If a parameter key or value is not a string
        """
        for k, v in params.items():
            if not isinstance(k, str) or not isinstance(v, str):
                raise ConversionError(
                    f"Query parameter {k!r} must be a string, got {type(v).__name__}",
                    ConversionDirection.ENCODE,
                )
        try:
            query = urlencode(params)
        except (TypeError, UnicodeError) as e:
            raise ConversionError(str(e), ConversionDirection.ENCODE) from e

        return f"{self.baseUrl}{path.lstrip('/')}?{query}"

    @overload
    async def get(self, path: str, params: Params) -> Any: ...

    @overload
    async def get(self, path: str, params: Params, decoder: Callable[[Any], T]) -> T: ...

    async def get(self, path: str, params: Params, decoder: Optional[Callable[[Any], Any]] = None) -> Any:
        """Make authenticated GET request and decode the JSON response.

        NOTE: ``params`` is modified in place: the API key is stored under ``key``,
        replacing any value the caller put there.

        Args:
            path: Path fragment relative to the base URL
            params: Query parameters
            decoder: Optional callable converting parsed JSON into the result type

        Returns:
            Parsed JSON, passed through ``decoder`` if given

        Raises:
            RequestError: Service answered with a non-2xx status
            NetworkError: Transport failure
            ResponseReadError: Response body could not be read
            ConversionError: Request URL could not be encoded or body could not be decoded
            ConfigurationError: Caller-supplied HTTP client is closed
        """
        params[API_KEY_PARAM] = self._apiKey
        url = self.buildUrl(path, params)
        logger.debug(f"Making GET request to {maskApiKey(url)}")

        client = self._getHttpClient()
        try:
            response = await client.get(url)
        except httpx.InvalidURL as e:
            raise ConversionError(f"Invalid request URL: {e}", ConversionDirection.ENCODE) from e
        except (httpx.ReadError, httpx.DecodingError) as e:
            raise ResponseReadError(f"{type(e).__name__}#{e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"{type(e).__name__}#{e}") from e

        if not response.is_success:
            shouldWait = parseShouldWait(response.headers)
            logger.warning(f"API error: {response.status_code}, shouldWait: {shouldWait}")
            raise RequestError(response.status_code, shouldWait)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConversionError(f"Invalid JSON response: {e}", ConversionDirection.DECODE) from e

        logger.debug(f"Request successful: {response.status_code}")
        if decoder is None:
            return data

        try:
            return decoder(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConversionError(
                f"Unexpected response structure: {type(e).__name__}#{e}",
                ConversionDirection.DECODE,
            ) from e
