"""
Bing Maps API Data Models

This module defines dataclass models for the Bing Maps REST API responses:
the generic response envelope (Response/ResourceSet) and the Location
resource with its nested Point and Address structures.

Field names are snake_case versions of the wire names. Wire fields that a
model does not know about are preserved in ``api_kwargs``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, NamedTuple, Optional, Tuple, TypeVar

from .enums import Confidence, EntityType, MatchCode

T = TypeVar("T")

# NOTE: Not GeoJSON, points are (lat, lng), not (lng, lat)
LatLng = Tuple[float, float]


class BoundingBox(NamedTuple):
    """Geographic area that contains a location"""

    south: float
    west: float
    north: float
    east: float


@dataclass(frozen=True, slots=True)
class Point:
    """
    Latitude/longitude pair as returned in ``point.coordinates``
    """

    latlng: LatLng
    """Latitude, then longitude"""

    @property
    def lat(self) -> float:
        return self.latlng[0]

    @property
    def lng(self) -> float:
        return self.latlng[1]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        """Create Point instance from API response dictionary."""
        coordinates = data["coordinates"]
        if len(coordinates) != 2:
            raise ValueError(f"Point coordinates must have 2 elements, got {len(coordinates)}")
        return cls(latlng=(float(coordinates[0]), float(coordinates[1])))

    def to_dict(self) -> Dict[str, Any]:
        return {"coordinates": [self.latlng[0], self.latlng[1]]}


_ADDRESS_FIELDS: Dict[str, str] = {
    "addressLine": "address_line",
    "neighborhood": "neighborhood",
    "locality": "locality",
    "postalCode": "postal_code",
    "adminDistrict": "admin_district",
    "adminDistrict2": "admin_district2",
    "countryRegion": "country_region",
    "countryRegionIso2": "country_region_iso2",
    "landmark": "landmark",
    "formattedAddress": "formatted_address",
}


@dataclass(slots=True)
class Address:
    """
    Structured address of a location.

    All fields are optional: the service omits components it does not know.
    """

    address_line: Optional[str] = None
    """Street line of the address"""
    neighborhood: Optional[str] = None
    """Only returned when neighborhood info was requested"""
    locality: Optional[str] = None
    """City or town"""
    postal_code: Optional[str] = None
    admin_district: Optional[str] = None
    """Subdivision name, usually a state or province"""
    admin_district2: Optional[str] = None
    """Subdivision name of the second level, usually a county"""
    country_region: Optional[str] = None
    country_region_iso2: Optional[str] = None
    """Only returned when ISO country code was requested"""
    landmark: Optional[str] = None
    formatted_address: Optional[str] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Address":
        """Create Address instance from API response dictionary."""
        kwargs = {attr: data.get(wireName) for wireName, attr in _ADDRESS_FIELDS.items()}
        return cls(
            **kwargs,
            api_kwargs={k: v for k, v in data.items() if k not in _ADDRESS_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        ret = {wireName: getattr(self, attr) for wireName, attr in _ADDRESS_FIELDS.items()}
        return {k: v for k, v in ret.items() if v is not None}


_LOCATION_FIELDS = {"name", "point", "bbox", "entityType", "address", "confidence", "matchCodes"}


@dataclass(slots=True)
class Location:
    """
    Single geocode result
    """

    name: str
    """Display name of the location"""
    point: Point
    bbox: List[float]
    """[South Latitude, West Longitude, North Latitude, East Longitude]"""
    entity_type: EntityType
    address: Address
    confidence: Confidence
    match_codes: List[MatchCode] = field(default_factory=list)
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data, including raw values of UNKNOWN enums"""

    @property
    def boundingBox(self) -> BoundingBox:
        return BoundingBox(*self.bbox)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        """Create Location instance from API response dictionary.

        Raises:
            KeyError: If a required field is missing
            ValueError: If point or bbox has a wrong number of elements
        """
        bbox = [float(v) for v in data["bbox"]]
        if len(bbox) != 4:
            raise ValueError(f"Location bbox must have 4 elements, got {len(bbox)}")

        apiKwargs = {k: v for k, v in data.items() if k not in _LOCATION_FIELDS}

        rawEntityType = data["entityType"]
        entityType = EntityType.fromStr(rawEntityType)
        if entityType == EntityType.UNKNOWN:
            apiKwargs["entityType"] = rawEntityType

        rawConfidence = data["confidence"]
        confidence = Confidence.fromStr(rawConfidence)
        if confidence == Confidence.UNKNOWN:
            apiKwargs["confidence"] = rawConfidence

        rawMatchCodes = data["matchCodes"]
        matchCodes = [MatchCode.fromStr(code) for code in rawMatchCodes]
        if MatchCode.UNKNOWN in matchCodes:
            apiKwargs["matchCodes"] = list(rawMatchCodes)

        return cls(
            name=data["name"],
            point=Point.from_dict(data["point"]),
            bbox=bbox,
            entity_type=entityType,
            address=Address.from_dict(data["address"]),
            confidence=confidence,
            match_codes=matchCodes,
            api_kwargs=apiKwargs,
        )


@dataclass(slots=True)
class ResourceSet(Generic[T]):
    """
    Group of resources in a response envelope
    """

    resources: List[T] = field(default_factory=list)
    estimated_total: Optional[int] = None
    """Estimated number of resources the service found"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], resourceFactory: Callable[[Dict[str, Any]], T]) -> "ResourceSet[T]":
        """Create ResourceSet instance, building each resource with ``resourceFactory``."""
        return cls(
            resources=[resourceFactory(resource) for resource in data.get("resources", [])],
            estimated_total=data.get("estimatedTotal"),
        )


@dataclass(slots=True)
class Response(Generic[T]):
    """
    Generic response envelope returned by every Bing Maps REST endpoint
    """

    resource_sets: List[ResourceSet[T]] = field(default_factory=list)
    status_code: Optional[int] = None
    status_description: Optional[str] = None
    authentication_result_code: Optional[str] = None
    trace_id: Optional[str] = None
    copyright: Optional[str] = None
    brand_logo_uri: Optional[str] = None
    error_details: List[str] = field(default_factory=list)
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], resourceFactory: Callable[[Dict[str, Any]], T]) -> "Response[T]":
        """Create Response instance from API response dictionary.

        Raises:
            TypeError: If the body is not a JSON object
        """
        if not isinstance(data, dict):
            raise TypeError(f"Response body must be a JSON object, got {type(data).__name__}")

        knownFields = {
            "resourceSets",
            "statusCode",
            "statusDescription",
            "authenticationResultCode",
            "traceId",
            "copyright",
            "brandLogoUri",
            "errorDetails",
        }
        return cls(
            resource_sets=[ResourceSet.from_dict(rs, resourceFactory) for rs in data.get("resourceSets", [])],
            status_code=data.get("statusCode"),
            status_description=data.get("statusDescription"),
            authentication_result_code=data.get("authenticationResultCode"),
            trace_id=data.get("traceId"),
            copyright=data.get("copyright"),
            brand_logo_uri=data.get("brandLogoUri"),
            error_details=list(data.get("errorDetails", [])),
            api_kwargs={k: v for k, v in data.items() if k not in knownFields},
        )

    def firstResources(self) -> List[T]:
        """Resources of the first resource set, or an empty list if there is none."""
        if not self.resource_sets:
            return []
        return self.resource_sets[0].resources
