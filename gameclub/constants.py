"""
GameClub Global Constants

Centralized location for system-wide constants used across the application.
"""

from datetime import datetime, timezone

# Cache namespaces (entity kinds)
GAME_KIND = "game"
TOURNAMENT_KIND = "tournament"

# Display format for tournament start dates in notifications
START_DATE_FORMAT = "%Y-%m-%d %H:%M"


def get_current_timestamp() -> datetime:
    """Get current timestamp with UTC timezone.

    Returns:
        datetime: Current UTC timestamp
    """
    return datetime.now(timezone.utc)


# Application Constants
APP_NAME = "GameClub"
APP_VERSION = "1.0.0"
