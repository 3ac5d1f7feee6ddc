"""
Singleton OpenAI client used by the image recognizer, rate limited with aiolimiter.
"""
import os
from aiolimiter import AsyncLimiter
from openai import AsyncOpenAI
from loguru import logger

from shopfinder.config import OPENAI_API_KEY, CONCURRENCY, HTTP_TIMEOUT_SECONDS
from shopfinder.errors import ConfigurationError


class OpenAIClient:
    """
    Singleton OpenAI client for vision chat completions.
    Uses AsyncLimiter for rate limiting instead of semaphores.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not OpenAIClient._initialized:
            api_key = OPENAI_API_KEY or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ConfigurationError("OPENAI_API_KEY must be set in environment or config")

            self.client = AsyncOpenAI(api_key=api_key, timeout=HTTP_TIMEOUT_SECONDS)
            # One recognition per upload, so a small bucket is plenty
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            OpenAIClient._initialized = True

    async def chat_completions_create(self, **kwargs):
        """
        Create a chat completion with rate limiting.
        Accepts all arguments that AsyncOpenAI.chat.completions.create accepts.

        Returns:
            The response from OpenAI's chat completions API.
        """
        async with self.rate_limiter:
            try:
                return await self.client.chat.completions.create(**kwargs)
            except Exception as e:
                logger.debug(f"⚠️ OpenAI API request failed: {e}")
                raise
