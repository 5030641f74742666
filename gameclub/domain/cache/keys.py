"""
Cache Key Scheme

Pure functions mapping an entity identity to cache keys. Reads populate and
writes invalidate through these same functions, so the two paths always agree
on key format.

    <kind>:all        the unfiltered collection
    <kind>:id:<id>    a single entity
"""

from ..entities import EntityId

COLLECTION_KEY_TEMPLATE = "{kind}:all"
ENTITY_KEY_TEMPLATE = "{kind}:id:{id}"


def _validate_kind(kind: str) -> str:
    if not kind:
        raise ValueError("Cache key kind cannot be empty")
    if any(char.isspace() or char == ":" for char in kind):
        raise ValueError(f"Cache key kind cannot contain whitespace or ':': {kind!r}")
    return kind


def collection_key(kind: str) -> str:
    """Key of the cached ``find_all`` result for ``kind``."""
    return COLLECTION_KEY_TEMPLATE.format(kind=_validate_kind(kind))


def entity_key(kind: str, id: EntityId) -> str:
    """
    Key of a single cached entity.

    The id is rendered with ``str()``, so ``123`` and ``"123"`` map to the
    same key. This matters because reads receive ids from URL paths while
    writes take them from entities.
    """
    if id is None or str(id) == "":
        raise ValueError("Cache key id cannot be empty")
    return ENTITY_KEY_TEMPLATE.format(kind=_validate_kind(kind), id=id)


def entity_pattern(kind: str) -> str:
    """Glob matching every per-entity key of ``kind``."""
    return ENTITY_KEY_TEMPLATE.format(kind=_validate_kind(kind), id="*")
