from typing import Any, Dict, List, Optional
from urllib.parse import quote

from loguru import logger

from shopfinder.clients import MapboxClient
from shopfinder.config import MAX_NEARBY_RESULTS, SEARCHBOX_CATEGORY_URL, SEARCHBOX_FORWARD_URL
from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import Coordinates, RawPlace, SearchMode, SearchParameters


def _proximity(near: Coordinates) -> str:
    return f"{near.longitude},{near.latitude}"


def _parse_features(data: Optional[Dict[str, Any]]) -> List[RawPlace]:
    if not data:
        return []
    features = data.get("features") or []
    places = []
    for feature in features[:MAX_NEARBY_RESULTS]:
        if isinstance(feature, dict):
            places.append(RawPlace.from_feature(feature))
    return places


async def search_by_text(
    query: str,
    near: Coordinates,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> List[RawPlace]:
    """
    Search points of interest by free text, biased toward a reference point.

    Args:
        query (str): Establishment name to look for.
        near (Coordinates): Proximity bias.
        locale (LocaleProfile): Supplies the language tag.

    Returns:
        List[RawPlace]: Up to MAX_NEARBY_RESULTS places in provider order; empty on failure.
    """
    mapbox_client = MapboxClient()
    data = await mapbox_client.get_json(
        SEARCHBOX_FORWARD_URL,
        params={
            "q": query,
            "language": locale.language,
            "limit": MAX_NEARBY_RESULTS,
            "proximity": _proximity(near),
            "types": "poi",
        },
    )
    places = _parse_features(data)
    logger.debug(f"📝 Text search '{query}' returned {len(places)} places")
    return places


async def search_by_category(
    category: str,
    near: Coordinates,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> List[RawPlace]:
    """
    Search points of interest of a canonical category near a reference point.

    Returns:
        List[RawPlace]: Up to MAX_NEARBY_RESULTS places in provider order; empty on failure.
    """
    mapbox_client = MapboxClient()
    data = await mapbox_client.get_json(
        f"{SEARCHBOX_CATEGORY_URL}/{quote(category, safe='')}",
        params={
            "language": locale.language,
            "limit": MAX_NEARBY_RESULTS,
            "proximity": _proximity(near),
        },
    )
    places = _parse_features(data)
    logger.debug(f"🏪 Category search '{category}' returned {len(places)} places")
    return places


async def search_places(
    params: SearchParameters,
    near: Coordinates,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> List[RawPlace]:
    """Run the one search selected by `params.mode`."""
    if params.mode == SearchMode.BY_TEXT:
        return await search_by_text(params.query, near, locale)
    return await search_by_category(params.category, near, locale)
