import pytest

from shopfinder.clients import mapbox_client as mapbox_client_module
from shopfinder.clients import openai_client as openai_client_module


@pytest.fixture(autouse=True)
def reset_client_singletons():
    """Each test gets fresh client singletons."""
    for cls in (mapbox_client_module.MapboxClient, openai_client_module.OpenAIClient):
        cls._instance = None
        cls._initialized = False
    yield
    for cls in (mapbox_client_module.MapboxClient, openai_client_module.OpenAIClient):
        cls._instance = None
        cls._initialized = False
