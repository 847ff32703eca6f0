"""
Debrid Provider Registry
Builds the set of enabled debrid services from configuration
"""
from typing import Dict, List, Mapping, Optional, Type

from loguru import logger

from debridhub.config import Settings, get_settings
from debridhub.models import DebridProvider
from debridhub.services.downloaders.alldebrid import AllDebridService
from debridhub.services.downloaders.base import DebridService
from debridhub.services.downloaders.realdebrid import RealDebridService
from debridhub.services.downloaders.torbox import TorboxService


SERVICE_CLASSES: Dict[DebridProvider, Type[DebridService]] = {
    DebridProvider.REAL_DEBRID: RealDebridService,
    DebridProvider.TORBOX: TorboxService,
    DebridProvider.ALLDEBRID: AllDebridService,
}


class ProviderRegistry:
    """
    Owns the debrid service instances for one configuration.
    Every provider in SERVICE_CLASSES is "configured"; only those with a
    usable credential get an instance and count as enabled.
    """

    def __init__(self, services: Optional[Mapping[DebridProvider, DebridService]] = None):
        self._services: Dict[DebridProvider, DebridService] = dict(services or {})

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ProviderRegistry":
        settings = settings or get_settings()
        services: Dict[DebridProvider, DebridService] = {}

        for provider in SERVICE_CLASSES:
            if not settings.provider_config(provider).is_usable:
                continue
            services[provider] = cls._build(provider, settings)
            logger.info(f"{provider.display_name} enabled")

        if not services:
            logger.info("No debrid service enabled - P2P mode only")

        return cls(services)

    @staticmethod
    def _build(provider: DebridProvider, settings: Settings) -> DebridService:
        credential = settings.provider_config(provider).credential
        if provider == DebridProvider.REAL_DEBRID:
            return RealDebridService(
                credential,
                timeout=settings.request_timeout,
                batch_size=settings.real_debrid_batch_size,
                batch_delay=settings.real_debrid_batch_delay,
            )
        if provider == DebridProvider.ALLDEBRID:
            return AllDebridService(
                credential,
                timeout=settings.request_timeout,
                agent=settings.alldebrid_agent,
            )
        return SERVICE_CLASSES[provider](credential, timeout=settings.request_timeout)

    @property
    def configured(self) -> List[DebridProvider]:
        return list(SERVICE_CLASSES)

    @property
    def enabled(self) -> List[DebridProvider]:
        return [p for p in SERVICE_CLASSES if p in self._services]

    @property
    def services(self) -> Dict[DebridProvider, DebridService]:
        return dict(self._services)

    def is_enabled(self, provider: DebridProvider) -> bool:
        return provider in self._services

    def get(self, provider: DebridProvider) -> Optional[DebridService]:
        return self._services.get(provider)

    async def aclose(self):
        """Close every owned HTTP client"""
        for service in self._services.values():
            await service.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def create_debrid_services(settings: Optional[Settings] = None) -> ProviderRegistry:
    """Build a registry of the debrid services enabled in `settings`"""
    return ProviderRegistry.from_settings(settings)
