"""
Enumerations for Bing Maps Locations API.

Values are the exact strings used on the wire. Every enum returned by the
service has an UNKNOWN member: the live service returns values missing from
the documentation, so ``fromStr`` maps anything unrecognised to UNKNOWN
instead of failing the whole response.
"""

import logging
from enum import StrEnum

logger = logging.getLogger(__name__)


class EntityType(StrEnum):
    """
    Classification of the place a geocode result represents
    """

    UNKNOWN = "Unknown"

    ADDRESS = "Address"
    NEIGHBORHOOD = "Neighborhood"
    POPULATED_PLACE = "PopulatedPlace"
    POSTCODE1 = "Postcode1"
    ADMIN_DIVISION1 = "AdminDivision1"
    ADMIN_DIVISION2 = "AdminDivision2"
    COUNTRY_REGION = "CountryRegion"

    # Missing in MSDN documentation, but returned by the service
    POSTCODE2 = "Postcode2"
    POSTCODE3 = "Postcode3"
    ROAD_BLOCK = "RoadBlock"
    ROAD_INTERSECTION = "RoadIntersection"
    HIGHER_EDUCATION_FACILITY = "HigherEducationFacility"
    STADIUM = "Stadium"
    TOURIST_STRUCTURE = "TouristStructure"
    AIRPORT = "Airport"
    PARK = "Park"
    LAKE = "Lake"
    RIVER = "River"
    ISLAND = "Island"

    @classmethod
    def fromStr(cls, value: str) -> "EntityType":
        if value in cls.__members__.values():
            return cls(value)
        else:
            logger.warning(f"{cls.__name__} does not have '{value}' value, returning UNKNOWN")
            return cls.UNKNOWN


class Confidence(StrEnum):
    """
    Service certainty that a result matches the request
    """

    UNKNOWN = "Unknown"

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def fromStr(cls, value: str) -> "Confidence":
        if value in cls.__members__.values():
            return cls(value)
        else:
            logger.warning(f"{cls.__name__} does not have '{value}' value, returning UNKNOWN")
            return cls.UNKNOWN


class MatchCode(StrEnum):
    """
    How a geocode result was derived
    """

    UNKNOWN = "Unknown"

    GOOD = "Good"
    """The location has only one match or all returned matches are good"""
    AMBIGUOUS = "Ambiguous"
    """The location is one of a set of possible matches"""
    UP_HIERARCHY = "UpHierarchy"
    """The location was matched at a broader administrative level"""

    @classmethod
    def fromStr(cls, value: str) -> "MatchCode":
        if value in cls.__members__.values():
            return cls(value)
        else:
            logger.warning(f"{cls.__name__} does not have '{value}' value, returning UNKNOWN")
            return cls.UNKNOWN


class CultureCode(StrEnum):
    """
    Culture (language and region) of the returned names, sent as ``c``.

    Only the commonly used subset is listed here; any other culture code
    supported by Bing Maps may be passed as a plain string instead.
    """

    AR_SA = "ar-SA"
    BG = "bg"
    CA = "ca"
    CS = "cs"
    DA = "da"
    DE = "de"
    DE_DE = "de-DE"
    EL = "el"
    EN_GB = "en-GB"
    EN_US = "en-US"
    ES = "es"
    ES_ES = "es-ES"
    ES_MX = "es-MX"
    ES_US = "es-US"
    ET = "et"
    FI = "fi"
    FR = "fr"
    FR_CA = "fr-CA"
    FR_FR = "fr-FR"
    HE = "he"
    HR = "hr"
    HU = "hu"
    ID = "id"
    IT = "it"
    IT_IT = "it-IT"
    JA = "ja"
    KO = "ko"
    LT = "lt"
    LV = "lv"
    NB = "nb"
    NL = "nl"
    NL_BE = "nl-BE"
    PL = "pl"
    PT_BR = "pt-BR"
    PT_PT = "pt-PT"
    RO = "ro"
    RU = "ru"
    SK = "sk"
    SL = "sl"
    SR_CYRL_RS = "sr-Cyrl-RS"
    SR_LATN_RS = "sr-Latn-RS"
    SV = "sv"
    TH = "th"
    TR = "tr"
    UK = "uk"
    VI = "vi"
    ZH_HANS = "zh-Hans"
    ZH_HANT = "zh-Hant"
