"""Client singletons for external API interactions."""
from shopfinder.clients.mapbox_client import MapboxClient
from shopfinder.clients.openai_client import OpenAIClient

__all__ = ["MapboxClient", "OpenAIClient"]
