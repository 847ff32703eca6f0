"""
Core Package
"""
from debridhub.core.batching import chunked, throttled_batches

__all__ = [
    "chunked",
    "throttled_batches",
]
