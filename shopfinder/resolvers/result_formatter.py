from typing import List, Optional, Sequence

from shopfinder.config import MAX_NEARBY_RESULTS
from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import (
    Coordinates,
    FormattedPlace,
    RawPlace,
    RecognitionResult,
    SearchMode,
    SearchParameters,
)
from shopfinder.resolvers.distance import distance_between, format_distance
from shopfinder.resolvers.similarity import is_similar_name


def type_label_for(place: RawPlace, locale: LocaleProfile = DEFAULT_LOCALE) -> str:
    """Display label for the place's first provider category."""
    if not place.categories:
        return locale.default_type_label
    category = place.categories[0]
    return locale.type_labels.get(category) or category.replace("_", " ")


def _no_results_placeholder(
    params: SearchParameters,
    searched_name: str,
    resolved: Coordinates,
    locale: LocaleProfile,
) -> FormattedPlace:
    if params.mode == SearchMode.BY_TEXT:
        message = locale.no_text_results_template.format(name=searched_name)
    else:
        message = locale.no_category_results
    return FormattedPlace(
        name=locale.no_results_name,
        type_label=message,
        distance_label=locale.missing_distance,
        address=resolved.label or locale.unknown_address,
    )


def _format_place(place: RawPlace, user_location: Coordinates, locale: LocaleProfile) -> FormattedPlace:
    if place.coordinates is not None:
        distance_label = format_distance(distance_between(user_location, place.coordinates))
    else:
        distance_label = locale.missing_distance

    return FormattedPlace(
        name=place.name or locale.default_place_name,
        type_label=type_label_for(place, locale),
        distance_label=distance_label,
        address=place.full_address or place.address or place.place_formatted or "",
        coordinates=place.coordinates,
    )


def format_nearby_results(
    raw_places: Optional[Sequence[RawPlace]],
    recognition: RecognitionResult,
    params: SearchParameters,
    resolved: Coordinates,
    user_location: Coordinates,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> List[FormattedPlace]:
    """
    Filter and format raw search results into the nearby list.

    Text searches keep only places whose name resembles the searched name;
    category searches keep everything. Distances are measured from the user,
    not from the resolved establishment position. Provider order is kept and
    the list is cut to MAX_NEARBY_RESULTS.

    Args:
        raw_places: Places returned by the proximity search.
        recognition (RecognitionResult): Recognizer output.
        params (SearchParameters): The search that produced `raw_places`.
        resolved (Coordinates): Where the establishment is believed to be.
        user_location (Coordinates): The user's own position.
        locale (LocaleProfile): Labels and translations.

    Returns:
        List[FormattedPlace]: 1 to MAX_NEARBY_RESULTS entries; a single
                              placeholder when nothing is left to show.
    """
    searched_name = recognition.establishment_name or params.query or ""

    places = list(raw_places or [])
    if params.mode == SearchMode.BY_TEXT:
        places = [p for p in places if is_similar_name(p.name, searched_name)]

    formatted = [_format_place(p, user_location, locale) for p in places][:MAX_NEARBY_RESULTS]

    if not formatted:
        return [_no_results_placeholder(params, searched_name, resolved, locale)]
    return formatted
