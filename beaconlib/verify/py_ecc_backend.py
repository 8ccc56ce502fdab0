"""py_ecc verification backend — BLS12-381 pairing checks.

Delegates hash-to-curve, point decompression and pairings to `py_ecc`.
Supports the four BLS12-381 schemes; BN254 is left to other backends.

Key on G1 (48-byte key, 96-byte signature):
    e(g1, sig) == e(pk, H2(msg))     H2 = hash_to_G2 with the scheme DST
Key on G2 (96-byte key, 48-byte signature):
    e(sig, g2) == e(H1(msg), pk)     H1 = hash_to_G1 with the scheme DST

Both checks are computed as a product of Miller loops followed by a single
final exponentiation, the same way py_ecc's own ciphersuites verify.
"""

from __future__ import annotations

import hashlib
import logging

from py_ecc.bls.g2_primitives import (
    pubkey_to_G1,
    signature_to_G2,
    subgroup_check,
)
from py_ecc.bls.hash_to_curve import hash_to_G1, hash_to_G2
from py_ecc.optimized_bls12_381 import (
    FQ12,
    G1,
    G2,
    final_exponentiate,
    is_inf,
    neg,
    pairing,
)

from beaconlib.schemes import SignatureScheme
from beaconlib.verify.backend import VerificationBackend

log = logging.getLogger("beaconlib.verify.py_ecc")

SUPPORTED_SCHEMES = frozenset({
    SignatureScheme.CHAINED_G2,
    SignatureScheme.UNCHAINED_G2,
    SignatureScheme.UNCHAINED_G1_LEGACY,
    SignatureScheme.UNCHAINED_G1_RFC9380,
})


class PyEccBackend(VerificationBackend):
    """Pure-Python BLS12-381 backend (slow, but dependency-light)."""

    name = "py_ecc"

    def supports_scheme(self, scheme: SignatureScheme) -> bool:
        return scheme in SUPPORTED_SCHEMES

    def verify(
        self,
        signature: bytes,
        message: bytes,
        public_key: bytes,
        scheme: SignatureScheme,
    ) -> bool:
        self.check_operands(signature, public_key, scheme)
        dst = scheme.domain_separation_tag()
        try:
            if scheme.is_g1():
                return _verify_key_on_g1(signature, message, public_key, dst)
            return _verify_key_on_g2(signature, message, public_key, dst)
        except ValueError as e:
            # Bytes that do not decompress to a curve point cannot verify.
            log.debug("Point decoding failed (%s): %s", scheme.value, e)
            return False


def _verify_key_on_g1(signature: bytes, message: bytes, public_key: bytes, dst: bytes) -> bool:
    pk = pubkey_to_G1(public_key)
    sig = signature_to_G2(signature)
    if is_inf(pk) or not subgroup_check(pk) or not subgroup_check(sig):
        return False

    hashed = hash_to_G2(message, dst, hashlib.sha256)
    product = (
        pairing(sig, G1, final_exponentiate=False)
        * pairing(hashed, neg(pk), final_exponentiate=False)
    )
    return final_exponentiate(product) == FQ12.one()


def _verify_key_on_g2(signature: bytes, message: bytes, public_key: bytes, dst: bytes) -> bool:
    # G2 points share the 96-byte compressed encoding used for signatures,
    # G1 points the 48-byte one used for public keys.
    pk = signature_to_G2(public_key)
    sig = pubkey_to_G1(signature)
    if is_inf(pk) or not subgroup_check(pk) or not subgroup_check(sig):
        return False

    hashed = hash_to_G1(message, dst, hashlib.sha256)
    product = (
        pairing(G2, sig, final_exponentiate=False)
        * pairing(pk, neg(hashed), final_exponentiate=False)
    )
    return final_exponentiate(product) == FQ12.one()
