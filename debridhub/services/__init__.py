"""
Services Package
"""
from debridhub.services.content import TMDBService, IdentifierResolver, resolve_identifiers
from debridhub.services.downloaders import (
    AllDebridService,
    CacheAggregator,
    DebridService,
    ProviderRegistry,
    RealDebridService,
    TorboxService,
    cached_providers,
    check_all_caches,
    create_debrid_services,
)

__all__ = [
    # Content
    "TMDBService",
    "IdentifierResolver",
    "resolve_identifiers",
    # Downloaders
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
