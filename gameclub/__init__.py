"""
GameClub Backend

Board-game club API with a cache-aside repository layer over Redis.
"""

from .constants import APP_NAME, APP_VERSION

__version__ = APP_VERSION

__all__ = ["APP_NAME", "APP_VERSION", "__version__"]
