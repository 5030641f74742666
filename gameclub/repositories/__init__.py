"""
Repository Pattern Implementation

SQL stores for each entity plus the cache-aside decorator that can wrap any
of them. All data access goes through these repositories.
"""

from .base import SqlRepository
from .cached import CachedRepository
from .exceptions import (
    EntityConflictException,
    EntityNotFoundException,
    RepositoryException,
)
from .game import GameRepository
from .interfaces import Store
from .tournament import TournamentRepository
from .user import UserRepository

__all__ = [
    "Store",
    "SqlRepository",
    "CachedRepository",
    "GameRepository",
    "TournamentRepository",
    "UserRepository",
    "RepositoryException",
    "EntityNotFoundException",
    "EntityConflictException",
]
