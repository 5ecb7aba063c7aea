"""
File: CodingStats.py
Description: Error statistics reported by every channel decoder.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stats:
    detected: int = 0
    corrected: int = 0

    def __add__(self, other: "Stats") -> "Stats":
        return Stats(self.detected + other.detected, self.corrected + other.corrected)

    # corrected < detected means at least one flagged error was left in place
    @property
    def recoverable(self) -> bool:
        return self.corrected >= self.detected
