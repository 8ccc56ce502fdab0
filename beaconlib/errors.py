"""Error taxonomy for the beacon client.

Every failure in beaconlib surfaces as a subclass of BeaconError. Nothing in
the library retries or recovers: the immediate caller always gets a typed
condition.

    BeaconError
    ├── InvalidInput            malformed hex, round < 1, missing field
    │   └── UnknownScheme       scheme string not in the registry
    ├── TransportFailure        network / status / payload failure at a Source
    ├── ChainMismatch           fetched chain fails hash or key pinning
    ├── VerificationUnavailable no backend for the scheme, or checks failed
    └── UnknownSelector         chain hash / beaconID not known to a MultiSource
"""

from __future__ import annotations


class BeaconError(Exception):
    """Base class for all beaconlib errors."""


class InvalidInput(BeaconError, ValueError):
    """Caller-supplied or wire data is malformed."""


class UnknownScheme(InvalidInput):
    """Scheme identifier does not match a registered SignatureScheme."""

    def __init__(self, value: object):
        super().__init__(f"Unknown signature scheme: {value!r}")
        self.value = value


class TransportFailure(BeaconError):
    """Structured transport error raised at the Source boundary."""

    def __init__(self, message: str, status_code: int = 0, provider: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.provider = provider


class ChainMismatch(BeaconError):
    """Fetched chain descriptor does not match the pinned identity."""

    def __init__(self, field: str, expected: str, got: str):
        super().__init__(f"Chain {field} mismatch: expected {expected}, got {got}")
        self.field = field
        self.expected = expected
        self.got = got


class VerificationUnavailable(BeaconError):
    """Beacon could not be verified (no capable backend, or a check failed)."""


class UnknownSelector(BeaconError, LookupError):
    """Requested chain hash or beaconID is not served by any source."""

    def __init__(self, kind: str, value: str):
        super().__init__(f"Unknown {kind}: {value}")
        self.kind = kind
        self.value = value
