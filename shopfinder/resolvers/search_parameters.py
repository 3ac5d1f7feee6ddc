from loguru import logger

from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import RecognitionResult, SearchMode, SearchParameters

MIN_TEXT_QUERY_LENGTH = 3


def map_category(category: str, locale: LocaleProfile = DEFAULT_LOCALE) -> str:
    """
    Translate a recognized category into the provider's canonical category.

    Keywords are scanned in table order and the first substring match wins.
    """
    lowered = (category or "").lower()
    for keyword, canonical in locale.category_keywords:
        if keyword in lowered:
            return canonical
    return locale.default_category


def is_generic_name(name: str, locale: LocaleProfile = DEFAULT_LOCALE) -> bool:
    """
    Decide whether an establishment name is too vague to search literally.

    A name is generic when it is exactly a generic noun, when it is a single
    word containing a generic noun, or when it carries an unresolved marker
    such as "Não Identificado".
    """
    normalized = (name or "").lower().strip()

    if normalized in locale.generic_names:
        return True

    if len(normalized.split(" ")) < 2 and any(term in normalized for term in locale.generic_names):
        return True

    # Markers are matched on the raw name, case-sensitively
    return any(marker in (name or "") for marker in locale.unresolved_markers)


def build_search_parameters(
    recognition: RecognitionResult,
    locale: LocaleProfile = DEFAULT_LOCALE,
) -> SearchParameters:
    """
    Choose between searching by the establishment's exact name or by its category.

    Args:
        recognition (RecognitionResult): Recognizer output.
        locale (LocaleProfile): Keyword tables to use.

    Returns:
        SearchParameters: BY_TEXT with the name when it is specific enough,
                          otherwise BY_CATEGORY with the canonical category.
    """
    name = recognition.establishment_name or ""
    canonical = map_category(recognition.category, locale)
    generic = is_generic_name(name, locale)

    if not generic and len(name) >= MIN_TEXT_QUERY_LENGTH:
        params = SearchParameters(mode=SearchMode.BY_TEXT, query=name, category=canonical)
    else:
        params = SearchParameters(mode=SearchMode.BY_CATEGORY, query=canonical, category=canonical)

    logger.debug(
        f"⚙️ Search parameters: name='{name}' category='{recognition.category}' "
        f"canonical='{canonical}' generic={generic} → {params.mode.value} '{params.query}'"
    )
    return params
