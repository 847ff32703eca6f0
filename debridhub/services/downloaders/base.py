"""
Debrid Service Base
Shared HTTP plumbing and the cache-check contract for every debrid provider
"""
from abc import ABC, abstractmethod
from typing import Any, Collection, Dict, List, Optional, Sequence

import httpx
from loguru import logger

from debridhub.core.batching import throttled_batches
from debridhub.exceptions import DebridAPIError
from debridhub.models import CacheStatus, DebridProvider, ProviderResultMap, normalize_hash

DEFAULT_TIMEOUT = 10.0


class DebridService(ABC):
    """
    Base class for debrid provider clients.

    check_cache() is best-effort: every requested hash appears in the result
    and failures degrade to "not cached". All other operations are single
    user-intended actions and raise DebridAPIError on failure.
    """

    provider: DebridProvider
    BASE_URL: str = ""

    # None sends every hash in a single request
    batch_size: Optional[int] = None
    batch_delay: float = 0.0

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return self.provider.display_name

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    @property
    def auth_params(self) -> Dict[str, str]:
        return {}

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request with provider auth and the per-call timeout"""
        url = f"{self.BASE_URL}{endpoint}"
        request_params = {**self.auth_params, **(params or {})}
        return await self.client.request(
            method,
            url,
            headers=self.headers,
            params=request_params or None,
            timeout=self.timeout,
            **kwargs,
        )

    async def _request(
        self,
        method: str,
        endpoint: str,
        expected_status: Optional[Collection[int]] = None,
        **kwargs: Any,
    ) -> Any:
        """Make a request whose failure must reach the caller"""
        try:
            response = await self._send(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e}")
            raise DebridAPIError(self.name, None, str(e) or type(e).__name__) from e

        if expected_status is not None:
            ok = response.status_code in expected_status
        else:
            ok = response.is_success

        if not ok:
            detail = self._error_detail(response)
            logger.error(f"{self.name} API error: {response.status_code} - {detail}")
            raise DebridAPIError(self.name, response.status_code, detail)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{self.name} returned an invalid JSON body: {response.text[:200]}")
            raise DebridAPIError(self.name, response.status_code, "Invalid JSON response") from e

    def _error_detail(self, response: httpx.Response) -> str:
        """Pull the provider-supplied error message out of an error body"""
        try:
            body = response.json()
        except ValueError:
            return "Unknown"
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return "Unknown"

    async def check_cache(self, info_hashes: Sequence[str]) -> ProviderResultMap:
        """
        Check which info hashes are cached on this provider.
        Returns a status for every (lowercased) input hash.
        """
        hashes = _unique_hashes(info_hashes)
        if not hashes:
            return {}

        results: ProviderResultMap = {h: CacheStatus.uncached(self.name) for h in hashes}
        size = self.batch_size or len(hashes)

        async for batch in throttled_batches(hashes, size, self.batch_delay):
            try:
                found = await self._check_batch(batch)
            except httpx.HTTPStatusError as e:
                logger.error(f"{self.name} cache check failed: {e.response.status_code}")
                continue
            except Exception as e:
                logger.error(f"{self.name} cache check error: {e}")
                continue

            for info_hash in batch:
                if info_hash in found:
                    results[info_hash] = found[info_hash]

        cached_count = sum(1 for status in results.values() if status.cached)
        logger.debug(f"{self.name}: {cached_count}/{len(hashes)} torrents cached")
        return results

    @abstractmethod
    async def _check_batch(self, batch: List[str]) -> ProviderResultMap:
        """
        Query one batch of lowercase hashes and normalize the provider's
        response. Raises on transport/HTTP failure.
        """

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


def _unique_hashes(info_hashes: Sequence[str]) -> List[str]:
    seen = set()
    hashes = []
    for info_hash in info_hashes or []:
        if not info_hash:
            continue
        normalized = normalize_hash(info_hash)
        if normalized not in seen:
            seen.add(normalized)
            hashes.append(normalized)
    return hashes


def magnet_uri(info_hash: str) -> str:
    return f"magnet:?xt=urn:btih:{info_hash}"
