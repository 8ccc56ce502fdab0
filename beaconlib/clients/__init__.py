"""Beacon sources.

Base:    beaconlib/clients/base.py    (Source interface, HttpSource)
Caching: beaconlib/clients/caching.py (TTL memoization)
Multi:   beaconlib/clients/multi.py   (routing by chain hash / beaconID)
Fastest: beaconlib/clients/fastest.py (latency-based selection)
"""

from beaconlib.clients.base import HttpSource, Source
from beaconlib.clients.caching import CacheEntry, CachingSource, ResponseCache
from beaconlib.clients.fastest import FastestSource, LatencySample
from beaconlib.clients.multi import MultiSource

__all__ = [
    "Source",
    "HttpSource",
    "CacheEntry",
    "CachingSource",
    "ResponseCache",
    "FastestSource",
    "LatencySample",
    "MultiSource",
]
