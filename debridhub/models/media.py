"""
debridhub Media Identifier Models
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(str, Enum):
    """Kind of title, TMDB lookups are scoped by it"""
    MOVIE = "movie"
    SERIES = "series"

    @property
    def tmdb_media_type(self) -> str:
        return "tv" if self == MediaKind.SERIES else "movie"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MediaKind"]:
        """Anything other than "series" is treated as a movie"""
        if not value:
            return None
        return cls.SERIES if value == cls.SERIES.value else cls.MOVIE


@dataclass(frozen=True)
class IdentifierPair:
    """IMDb and TMDB identifiers of the same title"""
    imdb_id: Optional[str] = None
    tmdb_id: Optional[int] = None
    kind: Optional[MediaKind] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.imdb_id) and bool(self.tmdb_id)

    @property
    def is_empty(self) -> bool:
        return not self.imdb_id and not self.tmdb_id
