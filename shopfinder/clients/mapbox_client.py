"""
Singleton Mapbox client with rate limiting using aiolimiter.
"""
from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from typing import Dict, Any, Optional
from loguru import logger

from shopfinder.config import MAPBOX_TOKEN, CONCURRENCY, HTTP_TIMEOUT_SECONDS


class MapboxClient:
    """
    Singleton client for the Mapbox geocoding and Search Box REST APIs.
    Every call is authenticated with the access token and never raises on
    provider failures: callers get None and decide on their own fallback.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not MapboxClient._initialized:
            self.access_token = MAPBOX_TOKEN
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            MapboxClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=HTTP_TIMEOUT_SECONDS))
        return self._session

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Send an authenticated GET request and return the parsed JSON body.

        Args:
            url: Mapbox endpoint URL (path parameters already encoded).
            params: Query-string parameters; the access token is added here.

        Returns:
            Parsed JSON response, or None on a non-200 status or any transport error.
        """
        query = dict(params or {})
        query["access_token"] = self.access_token or ""

        async with self.rate_limiter:
            session = await self._get_session()
            try:
                async with session.get(url, params=query) as resp:
                    if resp.status != 200:
                        logger.debug(f"⚠️ Mapbox returned HTTP {resp.status} for {url}")
                        return None
                    data = await resp.json()
                    return data if isinstance(data, dict) else None
            except Exception as e:
                logger.debug(f"⚠️ Mapbox GET request failed for {url}: {e}")
                return None

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
