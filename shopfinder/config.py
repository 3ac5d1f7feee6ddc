# shopfinder/config.py
from dotenv import load_dotenv
import os

from shopfinder.errors import ConfigurationError

load_dotenv()

# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
MAPBOX_TOKEN = os.getenv("MAPBOX_TOKEN")

# Recognizer
RECOGNIZER_MODEL = os.getenv("RECOGNIZER_MODEL", "gpt-4o-mini")

# Runtime parameters
MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_NEARBY_RESULTS = 6
CONCURRENCY = 10
HTTP_TIMEOUT_SECONDS = 30
MIN_API_KEY_LENGTH = 30
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Optional fixed user position (otherwise geolocation is treated as denied)
USER_LATITUDE = os.getenv("USER_LATITUDE")
USER_LONGITUDE = os.getenv("USER_LONGITUDE")

# URLs
GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"
SEARCHBOX_FORWARD_URL = "https://api.mapbox.com/search/searchbox/v1/forward"
SEARCHBOX_CATEGORY_URL = "https://api.mapbox.com/search/searchbox/v1/category"

# File names
INPUT_CSV = "images.csv"
OUTPUT_CSV = "shopfinder_results.csv"

_PLACEHOLDER_MARKERS = ("SUA_CHAVE", "YOUR_", "CHANGE_ME", "<")


def _is_placeholder(value: str) -> bool:
    return any(marker in value for marker in _PLACEHOLDER_MARKERS)


def check_credentials(openai_api_key=None, mapbox_token=None) -> None:
    """
    Verify that provider credentials look usable before any run starts.

    Args:
        openai_api_key: Recognizer key; defaults to OPENAI_API_KEY.
        mapbox_token: Geocoding/places token; defaults to MAPBOX_TOKEN.

    Raises:
        ConfigurationError: If a credential is missing or still a placeholder.
    """
    openai_api_key = openai_api_key if openai_api_key is not None else OPENAI_API_KEY
    mapbox_token = mapbox_token if mapbox_token is not None else MAPBOX_TOKEN

    if not openai_api_key or _is_placeholder(openai_api_key) or len(openai_api_key) < MIN_API_KEY_LENGTH:
        raise ConfigurationError("⚠️ Configure OPENAI_API_KEY in your environment or .env file")
    if not mapbox_token or _is_placeholder(mapbox_token):
        raise ConfigurationError("⚠️ Configure MAPBOX_TOKEN in your environment or .env file")
