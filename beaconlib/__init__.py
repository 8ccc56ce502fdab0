"""beaconlib — verify and consume a public randomness beacon.

Fetches drand-style beacons over HTTP, verifies their BLS threshold
signatures and randomness derivation, and orchestrates several nodes
(caching, multi-chain routing, fastest-node selection).

Models:  beaconlib/models.py   (ChainDescriptor, Beacon)
Schemes: beaconlib/schemes.py  (SignatureScheme registry)
Verify:  beaconlib/verify/     (Verifier, backends)
Sources: beaconlib/clients/    (HTTP, caching, multi, fastest)
Client:  beaconlib/client.py   (public operations)
"""

from beaconlib.client import Client, build_client
from beaconlib.clients import (
    CachingSource,
    FastestSource,
    HttpSource,
    MultiSource,
    Source,
)
from beaconlib.clock import RoundClock
from beaconlib.errors import (
    BeaconError,
    ChainMismatch,
    InvalidInput,
    TransportFailure,
    UnknownScheme,
    UnknownSelector,
    VerificationUnavailable,
)
from beaconlib.models import Beacon, ChainDescriptor, ChainMetadata
from beaconlib.options import (
    CachePolicy,
    ChainVerificationParams,
    ClientOptions,
    VerificationMode,
)
from beaconlib.schemes import SignatureScheme
from beaconlib.verify import VerificationBackend, Verifier

__all__ = [
    # Client
    "Client",
    "build_client",
    "RoundClock",
    # Sources
    "Source",
    "HttpSource",
    "CachingSource",
    "MultiSource",
    "FastestSource",
    # Model
    "Beacon",
    "ChainDescriptor",
    "ChainMetadata",
    "SignatureScheme",
    # Options
    "ClientOptions",
    "ChainVerificationParams",
    "VerificationMode",
    "CachePolicy",
    # Verification
    "Verifier",
    "VerificationBackend",
    # Errors
    "BeaconError",
    "InvalidInput",
    "UnknownScheme",
    "TransportFailure",
    "ChainMismatch",
    "VerificationUnavailable",
    "UnknownSelector",
]
