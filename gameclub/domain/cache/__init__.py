"""
Cache Domain

Cache capability contract, its error types and the key scheme shared by read
and write paths.
"""

from .exceptions import CacheException, CacheMissException, CacheTransportException
from .interfaces import Cache
from .keys import collection_key, entity_key, entity_pattern

__all__ = [
    "Cache",
    "CacheException",
    "CacheMissException",
    "CacheTransportException",
    "collection_key",
    "entity_key",
    "entity_pattern",
]
