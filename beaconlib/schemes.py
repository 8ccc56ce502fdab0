"""Signature scheme registry.

Closed set of BLS scheme variants a beacon chain can declare in its
`schemeID`. Each variant knows its domain separation tag, which group the
public key lives in, and whether rounds are chained to the previous
signature.

Naming follows the group that carries the public key: the G2 schemes use a
96-byte key and 48-byte signatures, the G1 schemes a 48-byte key and 96-byte
signatures.
"""

from __future__ import annotations

from enum import Enum

from beaconlib.errors import UnknownScheme

_DST_BLS12381_G2 = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"
_DST_BLS12381_G1 = b"BLS_SIG_BLS12381G1_XMD:SHA-256_SSWU_RO_NUL_"
_DST_BN254_G1 = b"BLS_SIG_BN254G1_XMD:KECCAK-256_SVDW_RO_NUL_"

G1_SIZE = 48
G2_SIZE = 96


class SignatureScheme(str, Enum):
    CHAINED_G2 = "pedersen-bls-chained"
    UNCHAINED_G2 = "pedersen-bls-unchained"
    UNCHAINED_G1_LEGACY = "bls-unchained-on-g1"
    UNCHAINED_G1_RFC9380 = "bls-unchained-g1-rfc9380"
    BN254_G1 = "bn254-on-g1"

    @classmethod
    def default(cls) -> "SignatureScheme":
        return cls.CHAINED_G2

    @classmethod
    def parse(cls, value: "str | SignatureScheme") -> "SignatureScheme":
        """Resolve a wire string (or member) to a scheme, raising UnknownScheme."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownScheme(value) from None

    def domain_separation_tag(self) -> bytes:
        # The legacy G1 scheme reuses the G2 tag. It is inconsistent with
        # hashing onto G1 but deployed chains were signed with it.
        if self in (
            SignatureScheme.CHAINED_G2,
            SignatureScheme.UNCHAINED_G2,
            SignatureScheme.UNCHAINED_G1_LEGACY,
        ):
            return _DST_BLS12381_G2
        if self is SignatureScheme.UNCHAINED_G1_RFC9380:
            return _DST_BLS12381_G1
        return _DST_BN254_G1

    def is_g1(self) -> bool:
        return self in (
            SignatureScheme.UNCHAINED_G1_LEGACY,
            SignatureScheme.UNCHAINED_G1_RFC9380,
            SignatureScheme.BN254_G1,
        )

    def is_chained(self) -> bool:
        return self is SignatureScheme.CHAINED_G2

    @property
    def signature_size(self) -> int:
        return G2_SIZE if self.is_g1() else G1_SIZE

    @property
    def public_key_size(self) -> int:
        return G1_SIZE if self.is_g1() else G2_SIZE
