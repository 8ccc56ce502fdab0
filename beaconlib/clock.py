"""Round/time arithmetic for a chain.

Rounds are 1-based: round 1 becomes available at genesis_time, round n at
genesis_time + (n - 1) * period.
"""

from __future__ import annotations

from dataclasses import dataclass

from beaconlib.errors import InvalidInput
from beaconlib.models import ChainDescriptor


@dataclass(frozen=True)
class RoundClock:
    genesis_time: int
    period: int

    @classmethod
    def from_chain(cls, chain: ChainDescriptor) -> "RoundClock":
        return cls(genesis_time=chain.genesis_time, period=chain.period)

    def round_at(self, time: float) -> int:
        """Round current at unix time `time`."""
        if time < self.genesis_time:
            raise InvalidInput("Time is before chain genesis")
        return int((time - self.genesis_time) // self.period) + 1

    def round_time(self, round: int) -> int:
        """Unix time at which `round` becomes available."""
        if round < 1:
            raise InvalidInput("Round number must be greater than 0")
        return self.genesis_time + (round - 1) * self.period
