from .authority import LocationAuthority, LocationDelegate, LocationPlatform
from .platforms import IpLocationPlatform, StaticLocationPlatform

__all__ = [
    "IpLocationPlatform",
    "LocationAuthority",
    "LocationDelegate",
    "LocationPlatform",
    "StaticLocationPlatform",
]
