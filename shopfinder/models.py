"""
Typed data models for the result-resolution pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from shopfinder.errors import RecognitionError


@dataclass(frozen=True)
class RecognitionResult:
    """Structured description of the establishment seen in an image."""
    establishment_name: str
    category: str
    tags: Tuple[str, ...] = ()
    style: str = ""
    description: str = ""
    location_text: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RecognitionResult":
        """
        Build a RecognitionResult from the recognizer's JSON object.

        Args:
            payload: Decoded JSON with the keys requested in the recognizer prompt.

        Returns:
            RecognitionResult: The parsed record.

        Raises:
            RecognitionError: If the payload is not an object or the name or category
                              is not a string. A missing or null name or category
                              becomes an empty string.
        """
        if not isinstance(payload, dict):
            raise RecognitionError(f"Expected a JSON object, got {type(payload).__name__}")

        name = payload.get("estabelecimento")
        category = payload.get("categoria")
        name = "" if name is None else name
        category = "" if category is None else category
        if not isinstance(name, str) or not isinstance(category, str):
            raise RecognitionError("Recognizer response has a non-text 'estabelecimento' or 'categoria'")

        tags = payload.get("tags") or []
        if not isinstance(tags, list):
            tags = [tags]

        location_text = payload.get("localizacao_texto")
        if location_text is not None and not isinstance(location_text, str):
            location_text = str(location_text)

        return cls(
            establishment_name=name,
            category=category,
            tags=tuple(str(t) for t in tags),
            style=str(payload.get("estilo") or ""),
            description=str(payload.get("descricao") or ""),
            location_text=location_text,
        )


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 position, optionally labelled with a place name."""
    latitude: float
    longitude: float
    label: Optional[str] = None

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")


class SearchMode(str, Enum):
    BY_TEXT = "text"
    BY_CATEGORY = "category"


@dataclass(frozen=True)
class SearchParameters:
    """Which proximity search to run, and with which key."""
    mode: SearchMode
    query: str
    category: str  # Canonical category, kept even in text mode


@dataclass(frozen=True)
class RawPlace:
    """Places-provider feature, reduced to the fields the formatter reads."""
    name: str = ""
    categories: Tuple[str, ...] = ()
    full_address: Optional[str] = None
    address: Optional[str] = None
    place_formatted: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    @classmethod
    def from_feature(cls, feature: Dict[str, Any]) -> "RawPlace":
        """Parse a GeoJSON feature returned by the places provider."""
        props = feature.get("properties") or {}

        coordinates = None
        geometry = feature.get("geometry") or {}
        point = geometry.get("coordinates")
        if isinstance(point, (list, tuple)) and len(point) >= 2:
            try:
                # GeoJSON order is [lon, lat]
                coordinates = Coordinates(latitude=float(point[1]), longitude=float(point[0]))
            except (TypeError, ValueError):
                coordinates = None

        categories = props.get("poi_category") or ()
        if isinstance(categories, str):
            categories = (categories,)

        return cls(
            name=props.get("name") or feature.get("name") or "",
            categories=tuple(categories),
            full_address=props.get("full_address"),
            address=props.get("address"),
            place_formatted=props.get("place_formatted"),
            coordinates=coordinates,
        )


@dataclass(frozen=True)
class FormattedPlace:
    """One entry of the user-visible nearby list."""
    name: str
    type_label: str
    distance_label: str
    address: str
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class ImageUpload:
    """An image submitted for recognition."""
    name: str
    data: bytes = field(repr=False)
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ResolvedRecord:
    """Final consolidated result of one pipeline run."""
    recognition: RecognitionResult
    user_location: Coordinates
    resolved_location: Coordinates
    search_parameters: SearchParameters
    nearby: Tuple[FormattedPlace, ...]
    image_name: str = ""
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def to_row(self) -> Dict[str, Any]:
        """Flatten the record into a single CSV row."""
        return {
            "image": self.image_name,
            "establishment": self.recognition.establishment_name,
            "category": self.recognition.category,
            "style": self.recognition.style,
            "tags": ", ".join(self.recognition.tags),
            "location_text": self.recognition.location_text or "",
            "user_latitude": self.user_location.latitude,
            "user_longitude": self.user_location.longitude,
            "resolved_latitude": self.resolved_location.latitude,
            "resolved_longitude": self.resolved_location.longitude,
            "resolved_label": self.resolved_location.label or "",
            "search_type": self.search_parameters.mode.value,
            "search_query": self.search_parameters.query,
            "nearby": " | ".join(
                f"{p.name} ({p.type_label}, {p.distance_label})" for p in self.nearby
            ),
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }
