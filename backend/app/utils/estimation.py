"""Mock estimates attached to each recommended crop.

The numbers are random by design; tests swap in a provider with fixed values.
"""
import random
from typing import Optional, Protocol


class EstimationProvider(Protocol):
    """One method per metric shown next to a recommended crop"""

    def confidence(self) -> int: ...

    def expected_yield(self) -> int: ...

    def estimated_profit(self) -> int: ...


class RandomEstimator:
    """Uniform draws, rounded to whole numbers"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def _between(self, low: int, high: int) -> int:
        return round(self._rng.random() * (high - low) + low)

    def confidence(self) -> int:
        """Percentage in [70, 100]"""
        return self._between(70, 100)

    def expected_yield(self) -> int:
        """Yield in [20, 70]"""
        return self._between(20, 70)

    def estimated_profit(self) -> int:
        """Profit in [2000, 7000]"""
        return self._between(2000, 7000)
