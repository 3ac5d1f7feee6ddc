from shopfinder.locales import PT_BR_UBERLANDIA, LocaleProfile
from shopfinder.models import RecognitionResult, SearchMode
from shopfinder.resolvers.location_query import build_location_query
from shopfinder.resolvers.search_parameters import (
    build_search_parameters,
    is_generic_name,
    map_category,
)


def _recognition(name, category="Restaurante", location_text=None):
    return RecognitionResult(establishment_name=name, category=category, location_text=location_text)


def test_generic_name_searches_by_category():
    params = build_search_parameters(_recognition("Restaurante"))
    assert params.mode == SearchMode.BY_CATEGORY
    assert params.query == "restaurant"


def test_specific_name_searches_by_text():
    params = build_search_parameters(_recognition("Cantina da Maria"))
    assert params.mode == SearchMode.BY_TEXT
    assert params.query == "Cantina da Maria"
    assert params.category == "restaurant"


def test_unresolved_name_is_always_generic():
    params = build_search_parameters(_recognition("Não Identificado", category="Padaria"))
    assert params.mode == SearchMode.BY_CATEGORY
    assert params.query == "bakery"
    assert is_generic_name("Estabelecimento Desconhecido Grande Demais") is True


def test_single_word_containing_generic_noun_is_generic():
    assert is_generic_name("Supermercados") is True
    assert is_generic_name("Minimercado Silva") is False


def test_unresolved_markers_are_case_sensitive():
    assert is_generic_name("Ferro Velho Andrade") is False


def test_short_names_fall_back_to_category():
    params = build_search_parameters(_recognition("Zé", category="Lanchonete"))
    assert params.mode == SearchMode.BY_CATEGORY
    assert params.query == "fast_food"


def test_first_matching_keyword_wins():
    # "supermercado" also contains "mercado", which is listed first
    assert map_category("Supermercado") == "grocery"
    # "bar" comes before "cafeteria"
    assert map_category("Cafeteria e Bar") == "bar"
    assert map_category("Confeitaria") == "confectionery"


def test_unknown_category_defaults_to_poi():
    assert map_category("Oficina mecânica") == "poi"
    assert map_category("") == "poi"


def test_keyword_table_is_swappable():
    locale = LocaleProfile(
        language="en",
        country="US",
        default_locality="Springfield, IL",
        locality_suffix=" Springfield IL",
        fallback_latitude=39.78,
        fallback_longitude=-89.65,
        not_identified_name="Unknown Establishment",
        default_category="poi",
        category_keywords=(("diner", "restaurant"),),
        generic_names=("diner",),
        unresolved_markers=("Unknown",),
    )
    params = build_search_parameters(_recognition("Diner", category="Diner"), locale)
    assert params.mode == SearchMode.BY_CATEGORY
    assert params.query == "restaurant"
    assert build_location_query(_recognition("Unknown Establishment"), locale) == "Springfield, IL"


def test_location_query_prefers_visible_address():
    recognition = _recognition("Padaria Central", location_text="Av. Afonso Pena, 100")
    assert build_location_query(recognition) == "Av. Afonso Pena, 100"


def test_location_query_scopes_name_to_default_city():
    assert build_location_query(_recognition("Padaria Central")) == "Padaria Central Uberlândia MG"


def test_location_query_falls_back_to_default_locality():
    assert build_location_query(_recognition("Estabelecimento Não Identificado")) == (
        PT_BR_UBERLANDIA.default_locality
    )
    assert build_location_query(_recognition("", location_text="")) == PT_BR_UBERLANDIA.default_locality
