"""
Real-Debrid Downloader Service
Handles cache checking and torrent management on Real-Debrid
"""
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from debridhub.models import CacheStatus, DebridProvider, ProviderResultMap
from debridhub.services.downloaders.base import DEFAULT_TIMEOUT, DebridService, magnet_uri


class RealDebridService(DebridService):
    """Service for interacting with Real-Debrid API"""

    provider = DebridProvider.REAL_DEBRID
    BASE_URL = "https://api.real-debrid.com/rest/1.0"

    # instantAvailability accepts at most 40 hashes per call
    MAX_BATCH_SIZE = 40
    BATCH_DELAY = 0.5

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        batch_size: int = MAX_BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
    ):
        super().__init__(api_key, timeout=timeout, client=client)
        # 1..40 hashes per call, never closer than 500ms apart
        self.batch_size = max(1, min(batch_size, self.MAX_BATCH_SIZE))
        self.batch_delay = max(batch_delay, self.BATCH_DELAY)

    async def _check_batch(self, batch: List[str]) -> ProviderResultMap:
        """
        Check instant availability for up to 40 hashes.
        Response structure: { hash: { "rd": [ {"1": {...}, "2": {...}}, ... ] } }
        """
        response = await self._send("GET", f"/torrents/instantAvailability/{'/'.join(batch)}")
        response.raise_for_status()
        data = response.json()

        results: ProviderResultMap = {}
        for info_hash in batch:
            entry = data.get(info_hash) if isinstance(data, dict) else None
            variants = entry.get("rd") if isinstance(entry, dict) else None
            if not isinstance(variants, list):
                variants = []
            # Any variant is enough, not every file of the release has to be cached
            results[info_hash] = CacheStatus(
                cached=bool(variants),
                service=self.name,
                files=tuple(variants or ()),
            )
        return results

    async def get_user_info(self) -> Dict:
        """Get user account info"""
        return await self._request("GET", "/user")

    async def add_magnet(self, magnet: str) -> Dict[str, Any]:
        """
        Add magnet link to Real-Debrid.
        Accepts a magnet URI or a bare info hash. Returns {"id": ..., "uri": ...}
        """
        if not magnet.startswith("magnet:"):
            magnet = magnet_uri(magnet)

        result = await self._request("POST", "/torrents/addMagnet", data={"magnet": magnet})
        logger.info(f"Real-Debrid: Added torrent -> ID: {result.get('id')}")
        return result

    async def get_torrents(self) -> List[Dict]:
        """Get list of user's torrents"""
        result = await self._request("GET", "/torrents")
        return result if isinstance(result, list) else []

    async def get_torrent_info(self, torrent_id: str) -> Dict:
        """Get torrent info including files"""
        return await self._request("GET", f"/torrents/info/{torrent_id}")

    async def select_files(self, torrent_id: str, file_ids: str = "all") -> None:
        """
        Select files to download.
        file_ids: comma-separated list or "all"
        """
        await self._request(
            "POST",
            f"/torrents/selectFiles/{torrent_id}",
            expected_status=(204,),
            data={"files": file_ids},
        )

    async def delete_torrent(self, torrent_id: str) -> None:
        """Delete a torrent"""
        await self._request("DELETE", f"/torrents/delete/{torrent_id}", expected_status=(204,))

    async def unrestrict_link(self, link: str) -> Dict:
        """
        Unrestrict a link to get direct download URL.
        Usually used for getting streaming links.
        """
        return await self._request("POST", "/unrestrict/link", data={"link": link})
