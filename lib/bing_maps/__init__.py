"""
Bing Maps Locations API Client Library

This module provides a Python async client library for the Bing Maps
Locations REST API (dev.virtualearth.net) with typed responses and uniform
error reporting.

Example usage:
    from lib.bing_maps import BingMapsClient, ContextParams, FindPoint, findByPoint, findByQuery

    async with BingMapsClient(apiKey="your_api_key") as client:
        # Forward geocoding
        locations = await findByQuery(client, "1 Microsoft Way, Redmond, WA")

        # Reverse geocoding
        locations = await findByPoint(client, FindPoint.fromLatLng(47.64054, -122.12934))
"""

from lib.bing_maps.client import BingMapsClient, Params, parseShouldWait
from lib.bing_maps.enums import Confidence, CultureCode, EntityType, MatchCode
from lib.bing_maps.exceptions import (
    BingMapsError,
    ConfigurationError,
    ConversionDirection,
    ConversionError,
    NetworkError,
    RequestError,
    ResponseReadError,
)
from lib.bing_maps.locations import ContextParams, FindPoint, findByPoint, findByQuery
from lib.bing_maps.models import Address, BoundingBox, LatLng, Location, Point, ResourceSet, Response

__all__ = [
    "BingMapsClient",
    "Params",
    "parseShouldWait",
    "FindPoint",
    "ContextParams",
    "findByPoint",
    "findByQuery",
    "Address",
    "BoundingBox",
    "LatLng",
    "Location",
    "Point",
    "ResourceSet",
    "Response",
    "Confidence",
    "CultureCode",
    "EntityType",
    "MatchCode",
    "BingMapsError",
    "ConfigurationError",
    "ConversionDirection",
    "ConversionError",
    "NetworkError",
    "RequestError",
    "ResponseReadError",
]
