"""Base models shared across the simulation."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class GameDate:
    """Simulated calendar date (not a wall-clock timestamp).

    Field order gives lexicographic (year, month, day) comparison, so the
    standard comparison operators can be used between dates.
    """

    year: int
    month: int  # 1-12
    day: int  # 1-31, valid for (year, month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
