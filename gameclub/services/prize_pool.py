"""
Prize Pool Strategies

Seasonal bonus multipliers for tournament prize pools, selected by the
tournament's start date:

- July 1-31: Summer Bonus (1.2x)
- December 20 - January 5: Christmas Bonus (2.2x)
- any other date: Normal (1.0x)
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from ..constants import get_current_timestamp


@dataclass(frozen=True)
class PrizePoolStrategy:
    """A named multiplier applied to a base prize pool."""

    name: str
    multiplier: float

    def calculate(self, base_prize_pool: float) -> float:
        return round(base_prize_pool * self.multiplier, 2)


NORMAL = PrizePoolStrategy(name="Normal", multiplier=1.0)
SUMMER_BONUS = PrizePoolStrategy(name="Summer Bonus (20%)", multiplier=1.2)
CHRISTMAS_BONUS = PrizePoolStrategy(name="Christmas Bonus (120%)", multiplier=2.2)


def strategy_for_date(when: Union[date, datetime]) -> PrizePoolStrategy:
    """Select the strategy in effect on ``when``."""
    if when.month == 7:
        return SUMMER_BONUS

    if (when.month == 12 and when.day >= 20) or (when.month == 1 and when.day <= 5):
        return CHRISTMAS_BONUS

    return NORMAL


def strategy_for_now() -> PrizePoolStrategy:
    return strategy_for_date(get_current_timestamp())


class PrizePoolCalculator:
    """Applies a swappable prize pool strategy."""

    def __init__(self, strategy: PrizePoolStrategy):
        self.strategy = strategy

    def calculate(self, base_prize_pool: float) -> float:
        return self.strategy.calculate(base_prize_pool)
