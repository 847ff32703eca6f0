"""
Content Services Package
"""
from debridhub.services.content.tmdb import TMDBService
from debridhub.services.content.identifiers import IdentifierResolver, resolve_identifiers

__all__ = [
    "TMDBService",
    "IdentifierResolver",
    "resolve_identifiers",
]
