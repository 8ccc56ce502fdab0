"""Beacon verifier — scheme resolution, message framing, backend dispatch.

The verifier never touches curve arithmetic. It:
  1. Decodes the signature and chain key from hex (strictly)
  2. Resolves the effective scheme from the chain descriptor
  3. Builds the signed message for that scheme
  4. Hands the operands to the first backend that supports the scheme

`verify_randomness` is independent of any backend: a beacon's randomness is
the SHA-256 of its signature.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from collections.abc import Sequence

from beaconlib.errors import InvalidInput, VerificationUnavailable
from beaconlib.models import Beacon, ChainDescriptor, decode_hex
from beaconlib.schemes import G1_SIZE, G2_SIZE, SignatureScheme
from beaconlib.verify.backend import VerificationBackend

log = logging.getLogger("beaconlib.verify")


class Verifier:
    """Verifies beacons against a chain using an ordered list of backends."""

    def __init__(
        self,
        backends: Sequence[VerificationBackend],
        *,
        legacy_g1_fallback: bool = True,
    ):
        if not backends:
            raise InvalidInput("At least one verification backend must be provided")
        self._backends = list(backends)
        self.legacy_g1_fallback = legacy_g1_fallback

    @property
    def backends(self) -> list[VerificationBackend]:
        return list(self._backends)

    def resolve_scheme(
        self,
        scheme: SignatureScheme,
        public_key: bytes,
        signature: bytes,
    ) -> SignatureScheme:
        """Effective scheme for a chain's declared scheme and operand sizes.

        Single special case: a chain declaring CHAINED_G2 whose key is 48
        bytes and signature 96 bytes cannot hold a G2 key. Some legacy and
        test networks publish exactly that layout, so it is reclassified as
        UNCHAINED_G1_LEGACY. No other size-based inference is made.
        """
        if (
            self.legacy_g1_fallback
            and scheme is SignatureScheme.CHAINED_G2
            and len(public_key) == G1_SIZE
            and len(signature) == G2_SIZE
        ):
            log.debug("Reclassifying %s as %s (swapped key/signature sizes)",
                      scheme.value, SignatureScheme.UNCHAINED_G1_LEGACY.value)
            return SignatureScheme.UNCHAINED_G1_LEGACY
        return scheme

    def select_backend(self, scheme: SignatureScheme) -> VerificationBackend:
        for backend in self._backends:
            if backend.supports_scheme(scheme):
                return backend
        raise VerificationUnavailable(
            f"No verification backend available for scheme: {scheme.value}"
        )

    def build_message(self, beacon: Beacon, scheme: SignatureScheme) -> bytes:
        if scheme.is_chained() and beacon.previous_signature is not None:
            return decode_hex(beacon.previous_signature, "previous signature")
        return beacon.round_message

    def verify(self, beacon: Beacon, chain: ChainDescriptor) -> bool:
        """Check the beacon's signature under the chain's key and scheme.

        Raises InvalidInput on malformed hex and VerificationUnavailable if
        no backend supports the resolved scheme.
        """
        signature = decode_hex(beacon.signature, "signature")
        public_key = decode_hex(chain.public_key, "public key")

        scheme = self.resolve_scheme(chain.scheme_id, public_key, signature)
        message = self.build_message(beacon, scheme)
        backend = self.select_backend(scheme)

        valid = backend.verify(signature, message, public_key, scheme)
        log.debug("Round %d verified by %s (%s): %s", beacon.round, backend.name, scheme.value, valid)
        return valid

    def verify_randomness(self, beacon: Beacon) -> bool:
        """True iff sha256(signature) equals randomness byte-for-byte."""
        signature = decode_hex(beacon.signature, "signature")
        randomness = decode_hex(beacon.randomness, "randomness")
        return hmac.compare_digest(hashlib.sha256(signature).digest(), randomness)
