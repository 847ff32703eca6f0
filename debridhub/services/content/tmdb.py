"""
TMDB (The Movie Database) Service
Cross-references IMDb and TMDB identifiers
"""
import httpx
from typing import Optional, Dict, Any
from loguru import logger

from debridhub.config import Settings, get_settings

DEFAULT_TIMEOUT = 10.0


class TMDBService:
    """Service for interacting with TMDB API"""

    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TMDBService":
        settings = settings or get_settings()
        return cls(settings.tmdb_api_key, timeout=settings.request_timeout)

    async def _request(self, endpoint: str, params: Optional[Dict] = None) -> Optional[Dict]:
        """Make request to TMDB API"""
        if not self.api_key:
            logger.warning("TMDB API key not configured")
            return None

        url = f"{self.BASE_URL}{endpoint}"
        request_params = {"api_key": self.api_key, **(params or {})}

        try:
            response = await self.client.get(url, params=request_params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"TMDB API error: {e.response.status_code} - {e.response.text}")
            return None
        except Exception as e:
            logger.error(f"TMDB request failed: {e}")
            return None

    async def find_by_imdb(self, imdb_id: str) -> Optional[Dict[str, Any]]:
        """
        Find titles by IMDb ID.
        Returns the raw result with movie_results, tv_results and
        tv_episode_results lists.
        """
        return await self._request(f"/find/{imdb_id}", {"external_source": "imdb_id"})

    async def get_external_ids(self, tmdb_id: int, media_type: str) -> Optional[Dict[str, Any]]:
        """Get external IDs (imdb_id, tvdb_id, ...) for a movie or TV show"""
        result = await self._request(f"/{media_type}/{tmdb_id}", {"append_to_response": "external_ids"})
        if not result:
            return None
        return result.get("external_ids") or None

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
