"""
Bing Maps Locations API

Forward geocoding (free-text query to locations) and reverse geocoding
(point to locations) on top of BingMapsClient.

Example usage:
    client = BingMapsClient("your_api_key")

    # Reverse geocoding
    find = FindPoint.fromLatLng(47.64054, -122.12934, includeNeighborhood=True)
    locations = await findByPoint(client, find)

    # Forward geocoding
    context = ContextParams(culture=CultureCode.EN_GB, user_location=(47.6, -122.3))
    locations = await findByQuery(client, "Space Needle", context)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .client import BingMapsClient, Params
from .constants import (
    INCLUDE_CISO2,
    LOCATIONS_PATH,
    PARAM_CULTURE,
    PARAM_INCLUDE,
    PARAM_INCLUDE_ENTITY_TYPES,
    PARAM_INCLUDE_NEIGHBORHOOD,
    PARAM_QUERY,
    PARAM_USER_IP,
    PARAM_USER_LOCATION,
    PARAM_USER_MAP_VIEW,
    PARAM_USER_REGION,
    POINT_PRECISION,
)
from .enums import CultureCode, EntityType
from .models import LatLng, Location, Response

logger = logging.getLogger(__name__)


def _formatNumber(value: float) -> str:
    # Shortest round-tripping representation: 47.6 -> "47.6", 47 -> "47"
    return str(value)


@dataclass(frozen=True, slots=True)
class FindPoint:
    """
    Reverse geocoding request.

    Build it with ``fromLatLng`` or ``fromStr`` rather than directly.
    """

    point: str
    """Point in "lat,lng" form, used verbatim in the request path"""
    include_entity_types: Tuple[EntityType, ...] = ()
    """Restrict results to these entity types; empty means no restriction"""
    include_neighborhood: bool = False
    include_ciso2: bool = False
    """Include ISO 3166 two-letter country code in the address"""

    @classmethod
    def fromLatLng(
        cls,
        lat: float,
        lng: float,
        *,
        includeEntityTypes: Iterable[EntityType] = (),
        includeNeighborhood: bool = False,
        includeCiso2: bool = False,
    ) -> "FindPoint":
        """Create request from numeric coordinates, formatted with 5 decimal places."""
        return cls(
            point=f"{lat:.{POINT_PRECISION}f},{lng:.{POINT_PRECISION}f}",
            include_entity_types=tuple(includeEntityTypes),
            include_neighborhood=includeNeighborhood,
            include_ciso2=includeCiso2,
        )

    @classmethod
    def fromStr(
        cls,
        latlng: str,
        *,
        includeEntityTypes: Iterable[EntityType] = (),
        includeNeighborhood: bool = False,
        includeCiso2: bool = False,
    ) -> "FindPoint":
        """Create request from a pre-formatted "lat,lng" string."""
        return cls(
            point=latlng,
            include_entity_types=tuple(includeEntityTypes),
            include_neighborhood=includeNeighborhood,
            include_ciso2=includeCiso2,
        )

    def toParams(self) -> Params:
        params: Params = {}
        if self.include_entity_types:
            params[PARAM_INCLUDE_ENTITY_TYPES] = ",".join(entityType.value for entityType in self.include_entity_types)
        if self.include_neighborhood:
            params[PARAM_INCLUDE_NEIGHBORHOOD] = "1"
        if self.include_ciso2:
            params[PARAM_INCLUDE] = INCLUDE_CISO2
        return params


@dataclass(frozen=True, slots=True)
class ContextParams:
    """
    Optional user context hints, accepted by both Locations operations
    """

    culture: Optional[Union[CultureCode, str]] = None
    """Culture of the returned names"""
    user_map_view: Optional[Sequence[float]] = None
    """Visible map area: south lat, west lng, north lat, east lng"""
    user_location: Optional[LatLng] = None
    user_ip: Optional[str] = None
    user_region: Optional[str] = None
    """ISO 3166-1 alpha-2 region code"""

    def applyTo(self, params: Params) -> Params:
        """Add every present field to ``params`` and return it."""
        if self.culture is not None:
            params[PARAM_CULTURE] = str(self.culture)
        if self.user_map_view is not None:
            params[PARAM_USER_MAP_VIEW] = ",".join(_formatNumber(n) for n in self.user_map_view)
        if self.user_location is not None:
            lat, lng = self.user_location
            params[PARAM_USER_LOCATION] = f"{_formatNumber(lat)},{_formatNumber(lng)}"
        if self.user_ip is not None:
            params[PARAM_USER_IP] = self.user_ip
        if self.user_region is not None:
            params[PARAM_USER_REGION] = self.user_region
        return params


def _decodeLocations(data) -> Response[Location]:
    return Response.from_dict(data, Location.from_dict)


async def findByPoint(
    client: BingMapsClient, find: FindPoint, context: Optional[ContextParams] = None
) -> List[Location]:
    """Get the location information associated with latitude and longitude coordinates.

    Args:
        client: Bing Maps client
        find: Point and result options
        context: Optional user context

    Returns:
        Locations of the first resource set, empty list if the service returned none
    """
    path = f"{LOCATIONS_PATH}/{find.point}"
    params = find.toParams()
    if context is not None:
        context.applyTo(params)

    response = await client.get(path, params, _decodeLocations)
    locations = response.firstResources()
    logger.debug(f"findByPoint({find.point}): {len(locations)} location(s)")
    return locations


async def findByQuery(client: BingMapsClient, query: str, context: Optional[ContextParams] = None) -> List[Location]:
    """Get latitude and longitude coordinates that correspond to a free-form location query.

    Args:
        client: Bing Maps client
        query: Address or place name, e.g. "1 Microsoft Way, Redmond, WA"
        context: Optional user context

    Returns:
        Locations of the first resource set, empty list if the service returned none
    """
    params: Params = {PARAM_QUERY: query}
    if context is not None:
        context.applyTo(params)

    response = await client.get(LOCATIONS_PATH, params, _decodeLocations)
    locations = response.firstResources()
    logger.debug(f"findByQuery({query!r}): {len(locations)} location(s)")
    return locations
