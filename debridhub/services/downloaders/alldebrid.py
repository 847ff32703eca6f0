"""
AllDebrid Downloader Service
Handles cache checking, magnet uploads and link unlocking on AllDebrid
"""
from typing import Dict, List, Optional

import httpx
from loguru import logger

from debridhub.models import CacheStatus, DebridProvider, ProviderResultMap
from debridhub.services.downloaders.base import DEFAULT_TIMEOUT, DebridService, magnet_uri


class AllDebridService(DebridService):
    """Service for interacting with AllDebrid API (v4)"""

    provider = DebridProvider.ALLDEBRID
    BASE_URL = "https://api.alldebrid.com/v4"
    DEFAULT_AGENT = "debridhub"

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        agent: str = DEFAULT_AGENT,
    ):
        super().__init__(api_key, timeout=timeout, client=client)
        self.agent = agent

    @property
    def headers(self) -> Dict[str, str]:
        # AllDebrid authenticates through query parameters
        return {}

    @property
    def auth_params(self) -> Dict[str, str]:
        return {"agent": self.agent, "apikey": self.api_key}

    async def _check_batch(self, batch: List[str]) -> ProviderResultMap:
        """
        Check all hashes in one request.
        magnets[] carries pipe-joined magnet URIs; the response array follows
        the input order, so entries are matched back by position.
        """
        magnets = "|".join(magnet_uri(h) for h in batch)
        response = await self._send("POST", "/magnet/instant", data={"magnets[]": magnets})
        response.raise_for_status()
        result = response.json()

        if result.get("status") != "success":
            logger.warning(f"AllDebrid cache check unsuccessful: {self._extract_error(result)}")
            return {}

        entries = (result.get("data") or {}).get("magnets") or []
        results: ProviderResultMap = {}
        for info_hash, entry in zip(batch, entries):
            if not isinstance(entry, dict):
                results[info_hash] = CacheStatus.uncached(self.name)
                continue
            results[info_hash] = CacheStatus(
                cached=entry.get("instant") is True,
                service=self.name,
                files=tuple(entry.get("files") or ()),
            )
        return results

    @staticmethod
    def _extract_error(body: Dict) -> str:
        error = body.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error.get("code") or "Unknown")
        return str(body.get("detail") or error or "Unknown")

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return "Unknown"
        return self._extract_error(body) if isinstance(body, dict) else "Unknown"

    async def get_user_info(self) -> Dict:
        """Get user account info"""
        result = await self._request("GET", "/user")
        return result.get("data", {}) if isinstance(result, dict) else {}

    async def add_magnet(self, magnet: str) -> Dict:
        """Upload a magnet link (or bare info hash) to AllDebrid"""
        if not magnet.startswith("magnet:"):
            magnet = magnet_uri(magnet)

        result = await self._request("POST", "/magnet/upload", data={"magnets[]": magnet})
        logger.info("AllDebrid: Uploaded magnet")
        return result

    async def unrestrict_link(self, link: str) -> Dict:
        """Unlock a hoster link to get a direct download URL"""
        return await self._request("POST", "/link/unlock", data={"link": link})
