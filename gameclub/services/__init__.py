"""
Application services

Tournament workflows, prize pool strategies and creation notifications.
"""

from .notifications import (
    EmailNotifier,
    LogNotifier,
    TournamentCreatedEvent,
    TournamentNotifications,
    TournamentObserver,
)
from .prize_pool import (
    CHRISTMAS_BONUS,
    NORMAL,
    SUMMER_BONUS,
    PrizePoolCalculator,
    PrizePoolStrategy,
    strategy_for_date,
    strategy_for_now,
)
from .tournaments import TournamentService, TournamentValidationException

__all__ = [
    "EmailNotifier",
    "LogNotifier",
    "TournamentCreatedEvent",
    "TournamentNotifications",
    "TournamentObserver",
    "PrizePoolStrategy",
    "PrizePoolCalculator",
    "NORMAL",
    "SUMMER_BONUS",
    "CHRISTMAS_BONUS",
    "strategy_for_date",
    "strategy_for_now",
    "TournamentService",
    "TournamentValidationException",
]
