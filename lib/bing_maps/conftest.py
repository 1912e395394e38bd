"""
Shared fixtures for Bing Maps client unit tests.

Requests are served by ``httpx.MockTransport``, so no test touches the network.
"""

from typing import Any, Callable, Dict, List

import httpx
import pytest

from lib.bing_maps import BingMapsClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def locationData() -> Dict[str, Any]:
    """Location resource as returned by /Locations/47.64054,-122.12934"""
    return {
        "__type": "Location:http://schemas.microsoft.com/search/local/ws/rest/v1",
        "name": "1 Microsoft Way, Redmond, WA 98052",
        "point": {"type": "Point", "coordinates": [47.64054, -122.12934]},
        "bbox": [47.636677282429325, -122.13698331308882, 47.644402717570678, -122.12169668691118],
        "entityType": "Address",
        "address": {
            "addressLine": "1 Microsoft Way",
            "adminDistrict": "WA",
            "adminDistrict2": "King County",
            "countryRegion": "United States",
            "formattedAddress": "1 Microsoft Way, Redmond, WA 98052",
            "locality": "Redmond",
            "postalCode": "98052",
        },
        "confidence": "Medium",
        "matchCodes": ["Good"],
    }


@pytest.fixture
def secondLocationData() -> Dict[str, Any]:
    """Neighbourhood-level Location resource"""
    return {
        "name": "Overlake, Redmond, WA",
        "point": {"type": "Point", "coordinates": [47.63571, -122.13501]},
        "bbox": [47.62, -122.15, 47.65, -122.11],
        "entityType": "Neighborhood",
        "address": {
            "adminDistrict": "WA",
            "countryRegion": "United States",
            "countryRegionIso2": "US",
            "formattedAddress": "Overlake, Redmond, WA",
            "locality": "Redmond",
            "neighborhood": "Overlake",
        },
        "confidence": "High",
        "matchCodes": ["Good", "UpHierarchy"],
    }


@pytest.fixture
def envelope() -> Callable[[List[Dict[str, Any]]], Dict[str, Any]]:
    """Wrap resources into a single-resource-set response body"""

    def _envelope(resources: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "authenticationResultCode": "ValidCredentials",
            "brandLogoUri": "http://dev.virtualearth.net/Branding/logo_powered_by.png",
            "copyright": "Copyright © 2024 Microsoft and its suppliers.",
            "resourceSets": [{"estimatedTotal": len(resources), "resources": resources}],
            "statusCode": 200,
            "statusDescription": "OK",
            "traceId": "3f1c4ab8d2a84c4f9b5b3b8e1f7c9a10",
        }

    return _envelope


@pytest.fixture
def requests() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order"""
    return []


@pytest.fixture
def makeClient(requests: List[httpx.Request]) -> Callable[[Handler], BingMapsClient]:
    """Build a client whose transport records requests and answers with ``handler``"""

    def _makeClient(handler: Handler) -> BingMapsClient:
        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        httpClient = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return BingMapsClient(apiKey="test_key", httpClient=httpClient)

    return _makeClient
