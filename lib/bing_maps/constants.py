"""
Bing Maps API Constants

This module contains constants for the Bing Maps Locations REST API.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://dev.virtualearth.net/REST/v1/"
DEFAULT_TIMEOUT: Final[int] = 10
USER_AGENT: Final[str] = f"bing-maps-locations/{VERSION}"

# Endpoints
LOCATIONS_PATH: Final[str] = "/Locations"

# Authentication
API_KEY_PARAM: Final[str] = "key"

# Headers
CONTENT_TYPE_JSON: Final[str] = "application/json"
# Set to "1" by the service when it is overloaded and the request may succeed later
WS_INFO_HEADER: Final[str] = "X-MS-BM-WS-INFO"
WS_INFO_SHOULD_WAIT: Final[str] = "1"

# Query parameters
PARAM_QUERY: Final[str] = "q"
PARAM_INCLUDE_ENTITY_TYPES: Final[str] = "include_entity_types"
PARAM_INCLUDE_NEIGHBORHOOD: Final[str] = "inclnb"
PARAM_INCLUDE: Final[str] = "incl"
PARAM_CULTURE: Final[str] = "c"
PARAM_USER_MAP_VIEW: Final[str] = "umv"
PARAM_USER_LOCATION: Final[str] = "ul"
PARAM_USER_IP: Final[str] = "uip"
PARAM_USER_REGION: Final[str] = "ur"

INCLUDE_CISO2: Final[str] = "ciso2"

# Coordinates in the /Locations/{point} path are sent with this many decimals
POINT_PRECISION: Final[int] = 5
