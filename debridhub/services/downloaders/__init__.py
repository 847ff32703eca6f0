"""
Downloaders Package
Fans cache checks out to Real-Debrid, Torbox and AllDebrid
"""
from typing import Dict, List, Sequence
from loguru import logger
import asyncio

from debridhub.models import DebridProvider, ProviderResultMap, is_cached
from debridhub.services.downloaders.alldebrid import AllDebridService
from debridhub.services.downloaders.base import DebridService
from debridhub.services.downloaders.realdebrid import RealDebridService
from debridhub.services.downloaders.registry import (
    ProviderRegistry,
    create_debrid_services,
)
from debridhub.services.downloaders.torbox import TorboxService


class CacheAggregator:
    """
    Checks a batch of hashes against every enabled provider in parallel.
    One provider failing never affects the others.
    """

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    @property
    def available_providers(self) -> List[str]:
        """List of enabled providers"""
        return [p.value for p in self.registry.enabled]

    async def check_cache_all(self, info_hashes: Sequence[str]) -> Dict[str, ProviderResultMap]:
        """
        Check cache status on all providers.
        Returns dict mapping provider -> {info_hash: CacheStatus}, with an
        empty map for disabled providers.
        """
        results: Dict[str, ProviderResultMap] = {p.value: {} for p in self.registry.configured}
        if not info_hashes:
            return results

        enabled = [(p, self.registry.get(p)) for p in self.registry.enabled]
        if not enabled:
            return results

        checks = [self._check_provider(provider, service, info_hashes) for provider, service in enabled]
        provider_results = await asyncio.gather(*checks)

        for (provider, _), result in zip(enabled, provider_results):
            results[provider.value] = result

        # Log summary
        for provider, _ in enabled:
            cached = sum(1 for s in results[provider.value].values() if s.cached)
            logger.info(f"Cache check: {cached}/{len(results[provider.value])} cached on {provider.display_name}")

        return results

    async def _check_provider(
        self,
        provider: DebridProvider,
        service: DebridService,
        info_hashes: Sequence[str],
    ) -> ProviderResultMap:
        logger.debug(f"Checking {provider.display_name} cache...")
        try:
            return await service.check_cache(info_hashes)
        except Exception as e:
            logger.error(f"{provider.display_name} cache check failed: {e}")
            return {}


def cached_providers(results: Dict[str, ProviderResultMap], info_hash: str) -> List[str]:
    """Providers that report `info_hash` as cached"""
    return [provider for provider, result in results.items() if is_cached(result, info_hash)]


async def check_all_caches(
    info_hashes: Sequence[str],
    registry: ProviderRegistry,
) -> Dict[str, ProviderResultMap]:
    """Check `info_hashes` on every provider enabled in `registry`"""
    return await CacheAggregator(registry).check_cache_all(info_hashes)


__all__ = [
    "AllDebridService",
    "CacheAggregator",
    "DebridService",
    "ProviderRegistry",
    "RealDebridService",
    "TorboxService",
    "cached_providers",
    "check_all_caches",
    "create_debrid_services",
]
