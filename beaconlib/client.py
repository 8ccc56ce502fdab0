"""Beacon client — the public entry point.

Composes one Source (where data comes from), one Verifier (whether to trust
it) and a RoundClock derived from the chain descriptor (round/time math).

With verification enabled a beacon is returned only if it carries the
requested round and both its signature and its randomness check out;
otherwise the call fails. There is no partial success.

The chain descriptor is fetched once and memoized on the instance for its
whole lifetime, even if the chain later rotates keys. Build a new Client to
pick up a new descriptor.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import httpx

from beaconlib.clients.base import HttpSource, Source, check_round
from beaconlib.clients.caching import CachingSource
from beaconlib.clients.fastest import FastestSource
from beaconlib.clients.multi import MultiSource
from beaconlib.clock import RoundClock
from beaconlib.errors import InvalidInput, VerificationUnavailable
from beaconlib.models import Beacon, ChainDescriptor
from beaconlib.options import ClientOptions
from beaconlib.verify.backend import VerificationBackend
from beaconlib.verify.verifier import Verifier

log = logging.getLogger("beaconlib.client")


class Client:
    def __init__(
        self,
        source: Source,
        verifier: Verifier,
        options: ClientOptions | None = None,
    ):
        self.source = source
        self.verifier = verifier
        self.options = options or ClientOptions()
        self._chain: ChainDescriptor | None = None
        self._clock: RoundClock | None = None

    def get_chain(self) -> ChainDescriptor:
        if self._chain is None:
            chain = self.source.fetch_chain_info()
            if self.options.chain_verification is not None:
                self.options.chain_verification.check(chain)
            self._chain = chain
        return self._chain

    def get_beacon(self, round: int) -> Beacon:
        check_round(round)
        beacon = self.source.fetch_beacon(round)
        if self.options.verify_beacons and beacon.round != round:
            log.warning("Requested round %d, source returned round %d", round, beacon.round)
            raise VerificationUnavailable(f"Beacon round mismatch: requested {round}, got {beacon.round}")
        return self._checked(beacon)

    def get_latest_beacon(self) -> Beacon:
        return self._checked(self.source.fetch_latest_beacon())

    def round_at(self, at: float | None = None) -> int:
        """Round current at unix time `at` (defaults to now)."""
        return self._round_clock().round_at(time.time() if at is None else at)

    def round_time(self, round: int) -> int:
        return self._round_clock().round_time(round)

    def _round_clock(self) -> RoundClock:
        if self._clock is None:
            self._clock = RoundClock.from_chain(self.get_chain())
        return self._clock

    def _checked(self, beacon: Beacon) -> Beacon:
        if not self.options.verify_beacons:
            return beacon

        chain = self.get_chain()
        if not self.verifier.verify(beacon, chain) or not self.verifier.verify_randomness(beacon):
            log.warning("Beacon round %d failed verification against chain %s", beacon.round, chain.hash)
            raise VerificationUnavailable("Invalid beacon signature or randomness")
        return beacon

    # ── Factories ───────────────────────────────────────────────────

    @classmethod
    def multi_chain(
        cls,
        sources: Sequence[Source],
        verifier: Verifier,
        options: ClientOptions | None = None,
    ) -> "Client":
        return cls(MultiSource(sources), verifier, options)

    @classmethod
    def fastest_node(
        cls,
        sources: Sequence[Source],
        verifier: Verifier,
        options: ClientOptions | None = None,
        update_interval: float = 300,
    ) -> "Client":
        return cls(FastestSource(sources, update_interval=update_interval), verifier, options)


def build_client(
    urls: Sequence[str],
    options: ClientOptions | None = None,
    backends: Sequence[VerificationBackend] | None = None,
    transport: httpx.BaseTransport | None = None,
    chain_info_ttl: float = 300,
    beacon_ttl: float = 30,
    update_interval: float = 300,
) -> Client:
    """Client over one or more node URLs.

    Several URLs are combined with FastestSource; the result is wrapped in a
    CachingSource unless the cache policy is disabled. Backends default to
    the py_ecc BLS12-381 backend.
    """
    if not urls:
        raise InvalidInput("At least one URL must be provided")
    options = options or ClientOptions()

    sources: list[Source] = [HttpSource(url, options, transport=transport) for url in urls]
    source: Source = sources[0] if len(sources) == 1 else FastestSource(
        sources, update_interval=update_interval,
    )
    if options.use_cache:
        source = CachingSource(source, chain_info_ttl=chain_info_ttl, beacon_ttl=beacon_ttl)

    if backends is None:
        from beaconlib.verify.py_ecc_backend import PyEccBackend

        backends = [PyEccBackend()]

    return Client(source, Verifier(backends), options)
