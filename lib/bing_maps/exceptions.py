"""
Bing Maps API Exceptions

This module contains custom exception classes for errors encountered when
communicating with the Bing Maps REST API.
"""

from enum import StrEnum
from typing import Optional


class ConversionDirection(StrEnum):
    """Which side of the wire a conversion failed on"""

    ENCODE = "encode"
    """Building the request query string"""
    DECODE = "decode"
    """Parsing the response body"""


class BingMapsError(Exception):
    """Base exception class for all Bing Maps client errors.

    All other exceptions in this module inherit from this base class.

    Attributes:
        message: Human-readable error message
    """

    description: str = "error communicating with bing maps"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.description}: {self.message}"


class RequestError(BingMapsError):
    """Raised when Bing Maps answers with a non-2xx HTTP status.

    The response body is not parsed in this case. See
    https://msdn.microsoft.com/en-us/library/ff701703.aspx for status meanings.

    Attributes:
        httpStatus: The HTTP status in the response
        shouldWait: If True, the service may normally have a result for this query
            but the servers are currently overloaded. Wait a few seconds and try again.
    """

    description = "error reported by bing maps"

    def __init__(self, httpStatus: int, shouldWait: bool = False) -> None:
        super().__init__(f"RequestError({httpStatus})")
        self.httpStatus = httpStatus
        self.shouldWait = shouldWait


class NetworkError(BingMapsError):
    """Raised when the HTTP transport fails.

    This includes connection failures, TLS errors, DNS resolution failures
    and timeouts. The underlying httpx exception is kept as ``__cause__``.
    """

    description = "error communicating with bing maps"


class ResponseReadError(BingMapsError):
    """Raised when the response body could not be read."""

    description = "error reading response from bing maps"


class ConversionError(BingMapsError):
    """Raised when converting between the wire format and Python types fails.

    Attributes:
        direction: Whether the failure happened while encoding the request
            or decoding the response
    """

    description = "error converting between wire format and Python types"

    def __init__(self, message: str, direction: ConversionDirection) -> None:
        super().__init__(message)
        self.direction = direction

    def __str__(self) -> str:
        return f"{self.description} ({self.direction}): {self.message}"


class ConfigurationError(BingMapsError):
    """Raised when the client or its configuration is invalid.

    This occurs when the API key is missing or the configuration file
    cannot be loaded.
    """

    description = "bing maps client misconfigured"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path
