"""
Geographic Coordinates Value Object

Zones and workers carry their location as a "lat,lon" string; zone captions
may wrap the pair in parentheses. Distances between points are great-circle
distances on a spherical Earth.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from ...shared.parsing import is_blank

EARTH_RADIUS_KM = 6371.0

# "(lat, lon)" at the end of a zone caption
_CAPTIONED_PAIR = re.compile(r"\(\s*([-+]?[0-9.]+)\s*,\s*([-+]?[0-9.]+)\s*\)")


@dataclass(frozen=True)
class GeoPoint:
    """A point on the Earth's surface in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @classmethod
    def parse(cls, text: str | None) -> GeoPoint | None:
        """
        Parse a "lat,lon" string.

        Host captions such as "В209 №40 (55.691110, 37.495410)" carry the
        pair in parentheses; the last parenthesised pair is used. Anything
        that is not two finite numbers inside the valid ranges yields None.
        """
        if is_blank(text):
            return None
        text = str(text)
        captioned = _CAPTIONED_PAIR.findall(text)
        parts = list(captioned[-1]) if captioned else text.split(",")
        if len(parts) != 2:
            return None
        try:
            latitude = float(parts[0].strip())
            longitude = float(parts[1].strip())
        except ValueError:
            return None
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return None
        try:
            return cls(latitude, longitude)
        except ValueError:
            return None

    def distance_km(self, other: GeoPoint) -> float:
        """Haversine distance to another point in kilometres."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lon = math.radians(other.longitude - self.longitude)

        a = min(
            1.0,
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2,
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


def distance_between(origin: GeoPoint | None, target: GeoPoint | None) -> float:
    """Distance in km, or infinity when either point is unknown."""
    if origin is None or target is None:
        return math.inf
    return origin.distance_km(target)
