"""
debridhub Cache Models
Normalized cache status shared by every debrid provider
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


MIN_CREDENTIAL_LENGTH = 5


class DebridProvider(str, Enum):
    """Supported debrid providers"""
    REAL_DEBRID = "realdebrid"
    TORBOX = "torbox"
    ALLDEBRID = "alldebrid"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    DebridProvider.REAL_DEBRID: "Real-Debrid",
    DebridProvider.TORBOX: "Torbox",
    DebridProvider.ALLDEBRID: "AllDebrid",
}


@dataclass(frozen=True)
class ProviderConfig:
    """Enable flag and credential for one provider"""
    enabled: bool = False
    credential: str = ""

    @property
    def is_usable(self) -> bool:
        return self.enabled and len(self.credential or "") > MIN_CREDENTIAL_LENGTH


@dataclass(frozen=True)
class CacheStatus:
    """
    Cache state of one info hash on one provider.
    `files` is the provider's raw per-file payload (Real-Debrid variants,
    Torbox/AllDebrid file lists) and is not interpreted here.
    """
    cached: bool
    service: str
    files: Tuple[Any, ...] = ()

    @classmethod
    def uncached(cls, service: str) -> "CacheStatus":
        return cls(cached=False, service=service)


ProviderResultMap = Dict[str, CacheStatus]


def normalize_hash(info_hash: str) -> str:
    """Lowercase an info hash so it can be compared and used as a key"""
    return info_hash.strip().lower()


def is_cached(results: ProviderResultMap, info_hash: str) -> bool:
    """A hash missing from a provider's results counts as not cached"""
    status = results.get(normalize_hash(info_hash))
    return bool(status and status.cached)
