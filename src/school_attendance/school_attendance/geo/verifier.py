from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Geofence:
    """Reference point and allowed radius, read from settings.

    Any field may be None when the environment does not configure it.
    """

    latitude: Optional[float]
    longitude: Optional[float]
    radius_km: Optional[float]

    @property
    def is_configured(self) -> bool:
        return all(
            isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
            for v in (self.latitude, self.longitude, self.radius_km)
        )


@dataclass(frozen=True)
class GeoVerification:
    accepted: bool
    distance_km: float
    message: str


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def verify_location(latitude: float, longitude: float, geofence: Geofence) -> GeoVerification:
    if not geofence.is_configured:
        return GeoVerification(accepted=False, distance_km=0.0, message="School location configuration is missing")

    distance = haversine_km(latitude, longitude, geofence.latitude, geofence.longitude)
    accepted = distance <= geofence.radius_km
    if accepted:
        message = f"Location verified ({distance:.2f} km from school)"
    else:
        message = (
            f"Location too far ({distance:.2f} km from school, "
            f"maximum {geofence.radius_km:g} km allowed)"
        )
    return GeoVerification(accepted=accepted, distance_km=round(distance, 2), message=message)
