"""
Running average of the recognised marks in one row.
"""
from decimal import ROUND_HALF_UP, Decimal

GENERIC_SCORE_MIN = 1
GENERIC_SCORE_MAX = 10
CRITERION_SCORE_MAX = 10


def round_half_away(value: float) -> int:
    """round() that sends .5 away from zero instead of to the even neighbour."""
    return int(Decimal(repr(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class ScoreAggregator:
    def __init__(self):
        self.total = 0.0
        self.count = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    def add_criterion(self, score: float) -> bool:
        """Criterion scores count toward the average only within (0, 10]."""
        if 0 < score <= CRITERION_SCORE_MAX:
            self.add(score)
            return True
        return False

    def average(self) -> int:
        if not self.count:
            return 0
        return round_half_away(self.total / self.count)


def in_generic_range(value: float) -> bool:
    return GENERIC_SCORE_MIN <= value <= GENERIC_SCORE_MAX
