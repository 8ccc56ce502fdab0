"""Fastest-node source — route every call to the lowest-latency source.

Latency is the wall-clock duration of `fetch_chain_info()` against each
source. It is measured at construction and again, lazily on the next call,
once `update_interval` seconds have passed. A failing source scores
infinite latency. Ties go to the earlier source in the list.

If every source is unreachable the first one stays selected and the call
fails with its own TransportFailure: nothing is ever fabricated.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from beaconlib.clients.base import Source
from beaconlib.errors import BeaconError, InvalidInput
from beaconlib.models import Beacon, ChainDescriptor

log = logging.getLogger("beaconlib.fastest")


@dataclass(frozen=True)
class LatencySample:
    source_index: int
    latency: float
    error: str | None = None

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.latency)


class FastestSource(Source):
    def __init__(
        self,
        sources: Sequence[Source],
        update_interval: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not sources:
            raise InvalidInput("At least one source required")
        self._sources = list(sources)
        self.update_interval = update_interval
        self._clock = clock
        self._samples: list[LatencySample] = []
        self._fastest_index = 0
        self._last_update = 0.0
        self.measure_latencies()

    @property
    def latencies(self) -> list[LatencySample]:
        return list(self._samples)

    @property
    def current(self) -> Source:
        return self._sources[self._fastest_index]

    def measure_latencies(self) -> None:
        samples: list[LatencySample] = []
        for i, source in enumerate(self._sources):
            start = self._clock()
            try:
                source.fetch_chain_info()
            except BeaconError as e:
                log.warning("Source %d unreachable during latency probe: %s", i, e)
                samples.append(LatencySample(source_index=i, latency=math.inf, error=str(e)))
                continue
            samples.append(LatencySample(source_index=i, latency=self._clock() - start))

        # min() keeps the first of equal keys, so list order breaks ties.
        fastest = min(samples, key=lambda s: s.latency)
        self._samples = samples
        self._fastest_index = fastest.source_index
        self._last_update = self._clock()
        log.info("Fastest source: #%d (%.1f ms)", fastest.source_index, fastest.latency * 1000)

    def _fastest(self) -> Source:
        if self._clock() - self._last_update >= self.update_interval:
            self.measure_latencies()
        return self._sources[self._fastest_index]

    def fetch_chain_info(self) -> ChainDescriptor:
        return self._fastest().fetch_chain_info()

    def fetch_beacon(self, round: int) -> Beacon:
        return self._fastest().fetch_beacon(round)

    def fetch_latest_beacon(self) -> Beacon:
        return self._fastest().fetch_latest_beacon()
