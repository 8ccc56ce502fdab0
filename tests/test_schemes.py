"""Tests for the signature scheme registry."""

from __future__ import annotations

import pytest

from beaconlib.errors import InvalidInput, UnknownScheme
from beaconlib.schemes import SignatureScheme


G2_DST = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"


class TestParse:
    @pytest.mark.parametrize("wire, member", [
        ("pedersen-bls-chained", SignatureScheme.CHAINED_G2),
        ("pedersen-bls-unchained", SignatureScheme.UNCHAINED_G2),
        ("bls-unchained-on-g1", SignatureScheme.UNCHAINED_G1_LEGACY),
        ("bls-unchained-g1-rfc9380", SignatureScheme.UNCHAINED_G1_RFC9380),
        ("bn254-on-g1", SignatureScheme.BN254_G1),
    ])
    def test_wire_values(self, wire, member):
        assert SignatureScheme.parse(wire) is member
        assert member.value == wire

    def test_member_passes_through(self):
        assert SignatureScheme.parse(SignatureScheme.UNCHAINED_G2) is SignatureScheme.UNCHAINED_G2

    def test_unknown_string_fails(self):
        with pytest.raises(UnknownScheme) as exc:
            SignatureScheme.parse("invalid-scheme")
        assert exc.value.value == "invalid-scheme"

    def test_unknown_scheme_is_invalid_input(self):
        with pytest.raises(InvalidInput):
            SignatureScheme.parse("PEDERSEN-BLS-CHAINED")

    def test_default_is_chained(self):
        assert SignatureScheme.default() is SignatureScheme.CHAINED_G2


class TestBehavior:
    def test_only_chained_g2_is_chained(self):
        chained = [s for s in SignatureScheme if s.is_chained()]
        assert chained == [SignatureScheme.CHAINED_G2]

    def test_g1_classification(self):
        assert {s for s in SignatureScheme if s.is_g1()} == {
            SignatureScheme.UNCHAINED_G1_LEGACY,
            SignatureScheme.UNCHAINED_G1_RFC9380,
            SignatureScheme.BN254_G1,
        }

    def test_legacy_g1_keeps_g2_tag(self):
        """The legacy G1 scheme shares the G2 tag (deployed-chain quirk)."""
        assert SignatureScheme.CHAINED_G2.domain_separation_tag() == G2_DST
        assert SignatureScheme.UNCHAINED_G2.domain_separation_tag() == G2_DST
        assert SignatureScheme.UNCHAINED_G1_LEGACY.domain_separation_tag() == G2_DST

    def test_rfc9380_and_bn254_tags(self):
        assert (SignatureScheme.UNCHAINED_G1_RFC9380.domain_separation_tag()
                == b"BLS_SIG_BLS12381G1_XMD:SHA-256_SSWU_RO_NUL_")
        assert (SignatureScheme.BN254_G1.domain_separation_tag()
                == b"BLS_SIG_BN254G1_XMD:KECCAK-256_SVDW_RO_NUL_")

    def test_operand_sizes(self):
        for scheme in SignatureScheme:
            if scheme.is_g1():
                assert (scheme.signature_size, scheme.public_key_size) == (96, 48)
            else:
                assert (scheme.signature_size, scheme.public_key_size) == (48, 96)
