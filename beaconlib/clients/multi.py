"""Multi-chain source — several chains behind one interface.

Every source is asked for its chain descriptor once, at construction, so
lookups by chain hash or beaconID never touch the network. A failure of any
source during that probe fails the whole construction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from beaconlib.clients.base import Source
from beaconlib.errors import InvalidInput, UnknownSelector
from beaconlib.models import Beacon, ChainDescriptor

log = logging.getLogger("beaconlib.multi")


class MultiSource(Source):
    """Routes by chain identity; default operations use the first source."""

    def __init__(self, sources: Sequence[Source]):
        if not sources:
            raise InvalidInput("At least one source must be provided")
        self._sources = list(sources)
        self._by_hash: dict[str, Source] = {}
        self._by_beacon_id: dict[str, Source] = {}

        for source in self._sources:
            chain = source.fetch_chain_info()
            self._by_hash[chain.hash] = source
            self._by_beacon_id[chain.beacon_id] = source
            log.debug("Registered chain %s (beaconID=%s)", chain.hash, chain.beacon_id)

        self.default = self._sources[0]

    @property
    def chain_hashes(self) -> list[str]:
        return list(self._by_hash)

    @property
    def beacon_ids(self) -> list[str]:
        return list(self._by_beacon_id)

    def for_chain_hash(self, chain_hash: str) -> Source:
        try:
            return self._by_hash[chain_hash]
        except KeyError:
            raise UnknownSelector("chain hash", chain_hash) from None

    def for_beacon_id(self, beacon_id: str) -> Source:
        try:
            return self._by_beacon_id[beacon_id]
        except KeyError:
            raise UnknownSelector("beaconID", beacon_id) from None

    def fetch_chain_info(self) -> ChainDescriptor:
        return self.default.fetch_chain_info()

    def fetch_beacon(self, round: int) -> Beacon:
        return self.default.fetch_beacon(round)

    def fetch_latest_beacon(self) -> Beacon:
        return self.default.fetch_latest_beacon()
