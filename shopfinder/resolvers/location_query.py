from shopfinder.locales import DEFAULT_LOCALE, LocaleProfile
from shopfinder.models import RecognitionResult


def build_location_query(recognition: RecognitionResult, locale: LocaleProfile = DEFAULT_LOCALE) -> str:
    """
    Pick the text to geocode for a recognized establishment.

    Visible address text wins; otherwise the establishment name scoped to the
    default locality; otherwise the default locality alone.

    Returns:
        str: A non-empty query.
    """
    if recognition.location_text:
        return recognition.location_text

    name = recognition.establishment_name
    if name and name != locale.not_identified_name:
        return name + locale.locality_suffix

    return locale.default_locality
