"""
Torbox Downloader Service
Handles cache checking and torrent management on Torbox
"""
from typing import Any, Dict, List

import httpx
from loguru import logger

from debridhub.models import CacheStatus, DebridProvider, ProviderResultMap
from debridhub.services.downloaders.base import DebridService, magnet_uri


class TorboxService(DebridService):
    """Service for interacting with Torbox API"""

    provider = DebridProvider.TORBOX
    BASE_URL = "https://api.torbox.app/v1/api"

    async def _check_batch(self, batch: List[str]) -> ProviderResultMap:
        """
        Check all hashes in one request.
        Torbox only returns entries for cached hashes, so presence means cached.
        """
        response = await self._send(
            "POST",
            "/torrents/checkcached",
            json={"hashes": batch, "format": "object", "list_files": True},
        )
        response.raise_for_status()
        result = response.json()

        if not result.get("success") or not isinstance(result.get("data"), dict):
            logger.warning(f"Torbox cache check unsuccessful: {result.get('error') or result.get('detail')}")
            return {}

        data = {str(k).lower(): v for k, v in result["data"].items()}
        results: ProviderResultMap = {}
        for info_hash in batch:
            if info_hash not in data:
                results[info_hash] = CacheStatus.uncached(self.name)
                continue
            entry = data[info_hash]
            files = entry.get("files") if isinstance(entry, dict) else None
            results[info_hash] = CacheStatus(cached=True, service=self.name, files=tuple(files or ()))
        return results

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return "Unknown"
        if isinstance(body, dict):
            return str(body.get("error") or body.get("detail") or "Unknown")
        return "Unknown"

    async def get_user_info(self) -> Dict:
        """Get user account info"""
        result = await self._request("GET", "/user/me")
        return result.get("data", {}) if isinstance(result, dict) else {}

    async def add_magnet(self, magnet: str) -> Dict[str, Any]:
        """
        Add magnet link to Torbox.
        Returns the raw response, torrent_id lives under "data".
        """
        if not magnet.startswith("magnet:"):
            magnet = magnet_uri(magnet)

        result = await self._request("POST", "/torrents/createtorrent", json={"magnet": magnet})
        torrent_id = (result.get("data") or {}).get("torrent_id") if isinstance(result, dict) else None
        logger.info(f"Torbox: Added torrent -> ID: {torrent_id}")
        return result

    async def get_torrents(self) -> List[Dict]:
        """Get list of user's torrents"""
        result = await self._request("GET", "/torrents/mylist")
        data = result.get("data") if isinstance(result, dict) else None
        return data if isinstance(data, list) else []
