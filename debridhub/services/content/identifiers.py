"""
Identifier Resolver
Completes a partial IMDb/TMDB identifier pair through TMDB lookups
"""
from typing import Optional, Tuple

from loguru import logger

from debridhub.config import Settings
from debridhub.models import IdentifierPair, MediaKind
from debridhub.services.content.tmdb import TMDBService


class IdentifierResolver:
    """
    Fills in the missing half of an IdentifierPair.

    Lookups are best-effort: a failed or empty TMDB response leaves the
    missing id as None, nothing is raised to the caller.
    """

    def __init__(self, tmdb: TMDBService):
        self.tmdb = tmdb

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "IdentifierResolver":
        return cls(TMDBService.from_settings(settings))

    async def close(self):
        await self.tmdb.close()

    async def imdb_to_tmdb(self, imdb_id: str) -> Tuple[Optional[int], Optional[MediaKind]]:
        """
        Convert an IMDb ID (e.g. "tt0111161") to a TMDB ID.
        Episode matches resolve to their parent show.
        """
        if not imdb_id or not imdb_id.startswith("tt"):
            logger.warning(f"Invalid IMDb ID: {imdb_id}")
            return None, None

        data = await self.tmdb.find_by_imdb(imdb_id)
        if not data:
            return None, None

        if data.get("movie_results"):
            tmdb_id = data["movie_results"][0].get("id")
            logger.debug(f"IMDb {imdb_id} -> TMDB {tmdb_id} (movie)")
            return tmdb_id, MediaKind.MOVIE

        if data.get("tv_results"):
            tmdb_id = data["tv_results"][0].get("id")
            logger.debug(f"IMDb {imdb_id} -> TMDB {tmdb_id} (series)")
            return tmdb_id, MediaKind.SERIES

        # Some IMDb IDs point at a single episode
        if data.get("tv_episode_results"):
            tmdb_id = data["tv_episode_results"][0].get("show_id")
            logger.debug(f"IMDb {imdb_id} -> TMDB {tmdb_id} (series, from episode)")
            return tmdb_id, MediaKind.SERIES

        logger.info(f"No TMDB match found for IMDb {imdb_id}")
        return None, None

    async def tmdb_to_imdb(self, tmdb_id: int, kind: Optional[MediaKind]) -> Optional[str]:
        """Convert a TMDB ID to an IMDb ID, kind selects the movie or tv namespace"""
        if not tmdb_id or not kind:
            logger.warning(f"Invalid parameters: tmdb_id={tmdb_id}, kind={kind}")
            return None

        media_type = MediaKind.parse(kind).tmdb_media_type
        external_ids = await self.tmdb.get_external_ids(tmdb_id, media_type)
        imdb_id = (external_ids or {}).get("imdb_id")
        if not imdb_id:
            logger.info(f"No IMDb ID found for TMDB {tmdb_id} ({media_type})")
            return None

        logger.debug(f"TMDB {tmdb_id} -> IMDb {imdb_id}")
        return imdb_id

    async def resolve_identifiers(self, pair: IdentifierPair) -> IdentifierPair:
        """Return `pair` with the missing id filled in where TMDB knows it"""
        if pair.is_complete:
            return pair

        if pair.is_empty:
            logger.debug("No IDs available to convert")
            return IdentifierPair(kind=pair.kind)

        try:
            if pair.imdb_id:
                tmdb_id, kind = await self.imdb_to_tmdb(pair.imdb_id)
                return IdentifierPair(imdb_id=pair.imdb_id, tmdb_id=tmdb_id, kind=pair.kind or kind)

            imdb_id = await self.tmdb_to_imdb(pair.tmdb_id, pair.kind)
            return IdentifierPair(imdb_id=imdb_id, tmdb_id=pair.tmdb_id, kind=pair.kind)
        except Exception as e:
            logger.error(f"Error completing IDs for {pair}: {e}")
            return pair

    async def complete_ids(
        self,
        imdb_id: Optional[str],
        tmdb_id: Optional[int],
        kind: Optional[str] = None,
    ) -> IdentifierPair:
        """Convenience wrapper taking the ids as separate arguments"""
        media_kind = MediaKind.parse(kind)
        return await self.resolve_identifiers(IdentifierPair(imdb_id, tmdb_id, media_kind))


async def resolve_identifiers(pair: IdentifierPair, tmdb: TMDBService) -> IdentifierPair:
    """Complete `pair` using `tmdb`"""
    return await IdentifierResolver(tmdb).resolve_identifiers(pair)
