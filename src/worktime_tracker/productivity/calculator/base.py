from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WorkHistory:
    """Minutes worked per day, oldest first, ending at reference_day."""

    daily_minutes: dict[date, int]
    daily_target_minutes: float
    reference_day: date


class ProductivityCalculator(ABC):
    """Calculator interface (Strategy Pattern for the productivity signal)."""

    @abstractmethod
    def score(self, history: WorkHistory) -> int:
        """Bounded score, 0-100."""
        raise NotImplementedError

    @abstractmethod
    def streak(self, history: WorkHistory) -> int:
        raise NotImplementedError
