"""
User position providers.

A provider is any coroutine function returning Coordinates, or None when
the user denied access or no position is available.
"""
from typing import Awaitable, Callable, Optional

from loguru import logger

from shopfinder.config import USER_LATITUDE, USER_LONGITUDE
from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import Coordinates

GeolocationProvider = Callable[[], Awaitable[Optional[Coordinates]]]


class StaticGeolocation:
    """Always reports the same position."""

    def __init__(self, latitude: float, longitude: float):
        self.coordinates = Coordinates(latitude=latitude, longitude=longitude)

    async def __call__(self) -> Optional[Coordinates]:
        return self.coordinates


class DeniedGeolocation:
    """Behaves like a user who refused the location permission."""

    async def __call__(self) -> Optional[Coordinates]:
        return None


def geolocation_from_env() -> GeolocationProvider:
    """Use USER_LATITUDE/USER_LONGITUDE when both are set and valid."""
    if USER_LATITUDE and USER_LONGITUDE:
        try:
            return StaticGeolocation(float(USER_LATITUDE), float(USER_LONGITUDE))
        except ValueError as e:
            logger.warning(f"⚠️ Ignoring invalid USER_LATITUDE/USER_LONGITUDE: {e}")
    return DeniedGeolocation()


def fallback_location(locale: LocaleProfile = DEFAULT_LOCALE) -> Coordinates:
    return Coordinates(latitude=locale.fallback_latitude, longitude=locale.fallback_longitude)


async def acquire_user_location(
    provider: Optional[GeolocationProvider] = None,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> Coordinates:
    """
    Get the user's position, substituting the locale's fallback coordinate
    when the provider is missing, denies access or fails. Never raises.
    """
    if provider is None:
        logger.warning("📍 Geolocation unavailable, using fallback location")
        return fallback_location(locale)

    try:
        position = await provider()
    except Exception as e:
        logger.warning(f"📍 Geolocation failed ({e}), using fallback location")
        return fallback_location(locale)

    if position is None:
        logger.warning("📍 Geolocation denied, using fallback location")
        return fallback_location(locale)
    return position
