"""
debridhub - debrid cache availability and media identifier resolution
"""
from debridhub.config import Settings, get_settings
from debridhub.exceptions import DebridAPIError, DebridError
from debridhub.logging_setup import setup_logging
from debridhub.models import CacheStatus, DebridProvider, IdentifierPair, MediaKind
from debridhub.services import (
    CacheAggregator,
    IdentifierResolver,
    ProviderRegistry,
    TMDBService,
    check_all_caches,
    create_debrid_services,
    resolve_identifiers,
)

__version__ = "1.0.0"

__all__ = [
    "Settings",
    "get_settings",
    "DebridAPIError",
    "DebridError",
    "setup_logging",
    "CacheStatus",
    "DebridProvider",
    "IdentifierPair",
    "MediaKind",
    "CacheAggregator",
    "IdentifierResolver",
    "ProviderRegistry",
    "TMDBService",
    "check_all_caches",
    "create_debrid_services",
    "resolve_identifiers",
]
