"""
debridhub Models Package
"""
from debridhub.models.cache import (
    CacheStatus,
    DebridProvider,
    ProviderConfig,
    ProviderResultMap,
    is_cached,
    normalize_hash,
)
from debridhub.models.media import IdentifierPair, MediaKind

__all__ = [
    "CacheStatus",
    "DebridProvider",
    "ProviderConfig",
    "ProviderResultMap",
    "is_cached",
    "normalize_hash",
    "IdentifierPair",
    "MediaKind",
]
