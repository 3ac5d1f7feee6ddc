from typing import Optional
from urllib.parse import quote

from loguru import logger

from shopfinder.clients import MapboxClient
from shopfinder.config import GEOCODING_URL
from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import Coordinates


async def geocode_location(query: str, locale: LocaleProfile = DEFAULT_LOCALE) -> Optional[Coordinates]:
    """
    Resolve a free-text location to the single best coordinate match.

    Args:
        query (str): Location text, e.g. "Padaria Central Uberlândia MG".
        locale (LocaleProfile): Supplies the language tag and the country filter.

    Returns:
        Optional[Coordinates]: Best match labelled with the provider's place name,
                               or None when nothing matched or the provider failed.
    """
    mapbox_client = MapboxClient()
    url = f"{GEOCODING_URL}/{quote(query, safe='')}.json"
    data = await mapbox_client.get_json(
        url,
        params={"limit": 1, "language": locale.language, "country": locale.country},
    )
    if not data:
        return None

    features = data.get("features") or []
    if not features:
        logger.debug(f"🗺️ No geocoding match for '{query}'")
        return None

    feature = features[0]
    try:
        lon, lat = feature["center"][0], feature["center"][1]
        return Coordinates(latitude=float(lat), longitude=float(lon), label=feature.get("place_name"))
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning(f"⚠️ Malformed geocoding feature for '{query}': {e}")
        return None
