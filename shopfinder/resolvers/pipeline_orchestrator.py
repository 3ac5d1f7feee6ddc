# shopfinder/resolvers/pipeline_orchestrator.py

from typing import Optional

from loguru import logger

from shopfinder.config import check_credentials
from shopfinder.geocoder import geocode_location
from shopfinder.geolocation import GeolocationProvider, acquire_user_location
from shopfinder.history import SessionHistory
from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import ImageUpload, ResolvedRecord
from shopfinder.places_search import search_places
from shopfinder.recognizer import recognize_establishment
from shopfinder.resolvers.location_query import build_location_query
from shopfinder.resolvers.result_formatter import format_nearby_results
from shopfinder.resolvers.search_parameters import build_search_parameters
from shopfinder.uploads import validate_upload


async def resolve_image(
    upload: ImageUpload,
    geolocation: Optional[GeolocationProvider] = None,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> ResolvedRecord:
    """
    Run the result-resolution pipeline for one image.

    Every step awaits the previous one. Only recognition can abort the run;
    geolocation, geocoding and the places search fall back to defaults.

    Args:
        upload (ImageUpload): Validated image.
        geolocation (Optional[GeolocationProvider]): Source of the user's position.
        locale (LocaleProfile): Locale data for queries, heuristics and labels.

    Returns:
        ResolvedRecord: Consolidated result for this image.

    Raises:
        RecognitionError: If the recognizer fails.
    """
    # 1) User position
    user_location = await acquire_user_location(geolocation, locale)
    logger.debug(f"📍 [1] User location: {user_location}")

    # 2) Recognition
    recognition = await recognize_establishment(upload)
    logger.debug(f"🤖 [2] Recognition: {recognition}")

    # 3) Location query
    location_query = build_location_query(recognition, locale)
    logger.debug(f"🔍 [3] Location query: {location_query}")

    # 4) Geocoding
    geocoded = await geocode_location(location_query, locale)
    logger.debug(f"🗺️ [4] Geocoded location: {geocoded}")

    # 5) A geocoded guess beats the user's literal position
    resolved = geocoded or user_location
    logger.debug(f"📍 [5] Resolved coordinates: {resolved}")

    # 6) Text or category search
    params = build_search_parameters(recognition, locale)

    # 7) Proximity search
    raw_places = await search_places(params, resolved, locale)
    logger.debug(f"🏪 [7] {len(raw_places)} raw places for {params.mode.value} '{params.query}'")

    # 8) Filter and format
    nearby = format_nearby_results(raw_places, recognition, params, resolved, user_location, locale)
    logger.debug(f"✅ [8] Formatted places: {nearby}")

    # 9) Consolidate
    return ResolvedRecord(
        recognition=recognition,
        user_location=user_location,
        resolved_location=resolved,
        search_parameters=params,
        nearby=tuple(nearby),
        image_name=upload.name,
    )


async def process_upload(
    upload: ImageUpload,
    session: SessionHistory,
    geolocation: Optional[GeolocationProvider] = None,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> ResolvedRecord:
    """
    Validate an upload, resolve it and record the result in the session history.

    The record is added to `session` only when the whole run succeeds.

    Raises:
        UploadValidationError: Oversized or non-image upload.
        ConfigurationError: Missing or placeholder credentials.
        RecognitionError: The recognizer failed.
    """
    validate_upload(upload.size, upload.mime_type)
    check_credentials()

    logger.info(f"▶️ Processing '{upload.name}'")
    record = await resolve_image(upload, geolocation, locale)
    session.add(record)
    logger.info(
        f"✅ '{upload.name}' → {record.recognition.establishment_name} "
        f"({len(record.nearby)} nearby)"
    )
    return record
