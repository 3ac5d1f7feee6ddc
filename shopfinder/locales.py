"""
Locale data used by the result-resolution heuristics.

The keyword tables are ordered: the first matching keyword wins, so
reordering an entry changes which category is searched.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class LocaleProfile:
    """Language, region and default-locality data for one deployment."""
    language: str
    country: str
    default_locality: str
    locality_suffix: str
    fallback_latitude: float
    fallback_longitude: float
    not_identified_name: str
    default_category: str
    category_keywords: Tuple[Tuple[str, str], ...]
    generic_names: Tuple[str, ...]
    unresolved_markers: Tuple[str, ...]
    type_labels: Dict[str, str] = field(default_factory=dict)
    default_type_label: str = "Establishment"
    default_place_name: str = "Place"
    no_results_name: str = "No places found"
    no_text_results_template: str = 'No "{name}" nearby'
    no_category_results: str = "No similar places found"
    unknown_address: str = "Unknown location"
    missing_distance: str = "—"


PT_BR_UBERLANDIA = LocaleProfile(
    language="pt",
    country="BR",
    default_locality="Uberlândia, Minas Gerais, Brasil",
    locality_suffix=" Uberlândia MG",
    # Prata-MG
    fallback_latitude=-19.3066,
    fallback_longitude=-48.9234,
    not_identified_name="Estabelecimento Não Identificado",
    default_category="poi",
    category_keywords=(
        ("restaurante", "restaurant"),
        ("lanchonete", "fast_food"),
        ("hamburgueria", "fast_food"),
        ("pizza", "restaurant"),
        ("bar", "bar"),
        ("café", "cafe"),
        ("cafeteria", "cafe"),
        ("padaria", "bakery"),
        ("confeitaria", "confectionery"),
        ("doce", "confectionery"),
        ("festas", "shop"),
        ("artigos", "shop"),
        ("varejo", "shop"),
        ("loja", "shop"),
        ("mercado", "grocery"),
        ("supermercado", "grocery"),
        ("farmácia", "pharmacy"),
        ("hotel", "hotel"),
        ("posto", "gas_station"),
    ),
    generic_names=(
        "restaurante", "lanchonete", "bar", "loja", "mercado", "supermercado",
        "farmácia", "padaria", "comércio", "estabelecimento", "local", "empresa",
    ),
    unresolved_markers=("Não Identificado", "Desconhecido", "Erro"),
    type_labels={
        "restaurant": "Restaurante",
        "cafe": "Café",
        "bar": "Bar",
        "fast_food": "Fast Food",
        "grocery": "Supermercado",
    },
    default_type_label="Estabelecimento",
    default_place_name="Local",
    no_results_name="Nenhum local encontrado",
    no_text_results_template='Nenhuma unidade de "{name}" próxima',
    no_category_results="Nenhum estabelecimento similar encontrado",
    unknown_address="Localização não identificada",
)

DEFAULT_LOCALE = PT_BR_UBERLANDIA
