"""Tests for the Verifier — scheme resolution, message framing, dispatch.

Backends here are stubs that record what they were handed; the real
pairing check is covered in test_py_ecc_backend.py.
"""

from __future__ import annotations

import hashlib

import pytest

from beaconlib.errors import InvalidInput, VerificationUnavailable
from beaconlib.models import Beacon, ChainDescriptor
from beaconlib.schemes import SignatureScheme
from beaconlib.verify.backend import VerificationBackend
from beaconlib.verify.verifier import Verifier
from tests.mocks.mock_drand import CHAIN_INFO, beacon_payload, fake_hex


class StubBackend(VerificationBackend):
    def __init__(self, schemes, result=True, name="stub"):
        self.schemes = set(schemes)
        self.result = result
        self.name = name
        self.calls = []

    def supports_scheme(self, scheme):
        return scheme in self.schemes

    def verify(self, signature, message, public_key, scheme):
        self.check_operands(signature, public_key, scheme)
        self.calls.append((signature, message, public_key, scheme))
        return self.result


def _chain(**overrides) -> ChainDescriptor:
    return ChainDescriptor.from_wire({**CHAIN_INFO, **overrides})


ALL = list(SignatureScheme)


class TestConstruction:
    def test_requires_a_backend(self):
        with pytest.raises(InvalidInput):
            Verifier([])


class TestDispatch:
    def test_first_capable_backend_wins(self):
        skip = StubBackend([SignatureScheme.BN254_G1], name="bn")
        first = StubBackend(ALL, name="first")
        second = StubBackend(ALL, name="second")
        verifier = Verifier([skip, first, second])

        assert verifier.verify(Beacon.from_wire(beacon_payload(5)), _chain())
        assert len(first.calls) == 1
        assert skip.calls == [] and second.calls == []

    def test_backend_result_is_returned(self):
        verifier = Verifier([StubBackend(ALL, result=False)])
        assert verifier.verify(Beacon.from_wire(beacon_payload(5)), _chain()) is False

    def test_no_capable_backend(self):
        verifier = Verifier([StubBackend([SignatureScheme.UNCHAINED_G2])])
        with pytest.raises(VerificationUnavailable, match="pedersen-bls-chained"):
            verifier.verify(Beacon.from_wire(beacon_payload(5)), _chain())

    def test_operand_size_mismatch_is_invalid_input(self):
        verifier = Verifier([StubBackend(ALL)])
        beacon = Beacon.from_wire(beacon_payload(5, sig_size=32))
        with pytest.raises(InvalidInput, match="48-byte signature"):
            verifier.verify(beacon, _chain())


class TestMessage:
    def test_chained_uses_previous_signature(self):
        backend = StubBackend(ALL)
        payload = beacon_payload(9)
        Verifier([backend]).verify(Beacon.from_wire(payload), _chain())

        _, message, _, scheme = backend.calls[0]
        assert scheme is SignatureScheme.CHAINED_G2
        assert message == bytes.fromhex(payload["previous_signature"])

    def test_chained_without_previous_uses_round(self):
        backend = StubBackend(ALL)
        Verifier([backend]).verify(Beacon.from_wire(beacon_payload(9, chained=False)), _chain())
        assert backend.calls[0][1] == (9).to_bytes(8, "big")

    def test_unchained_ignores_previous_signature(self):
        backend = StubBackend(ALL)
        chain = _chain(schemeID="pedersen-bls-unchained")
        Verifier([backend]).verify(Beacon.from_wire(beacon_payload(9)), chain)
        assert backend.calls[0][1] == (9).to_bytes(8, "big")


class TestLegacyG1Fallback:
    def _swapped(self):
        chain = _chain(public_key=fake_hex("g1-key", 48))
        beacon = Beacon.from_wire(beacon_payload(11, sig_size=96))
        return chain, beacon

    def test_swapped_sizes_reclassified(self):
        backend = StubBackend(ALL)
        chain, beacon = self._swapped()
        Verifier([backend]).verify(beacon, chain)

        _, message, _, scheme = backend.calls[0]
        assert scheme is SignatureScheme.UNCHAINED_G1_LEGACY
        # Unchained now: the round number is signed, not the previous signature.
        assert message == (11).to_bytes(8, "big")

    def test_backend_selected_for_resolved_scheme(self):
        g2_only = StubBackend([SignatureScheme.CHAINED_G2], name="g2")
        legacy = StubBackend([SignatureScheme.UNCHAINED_G1_LEGACY], name="legacy")
        chain, beacon = self._swapped()
        Verifier([g2_only, legacy]).verify(beacon, chain)
        assert g2_only.calls == []
        assert len(legacy.calls) == 1

    def test_fallback_can_be_disabled(self):
        backend = StubBackend(ALL)
        chain, beacon = self._swapped()
        with pytest.raises(InvalidInput):
            Verifier([backend], legacy_g1_fallback=False).verify(beacon, chain)

    def test_only_applies_to_chained_g2(self):
        backend = StubBackend(ALL)
        chain = _chain(schemeID="pedersen-bls-unchained", public_key=fake_hex("g1-key", 48))
        beacon = Beacon.from_wire(beacon_payload(11, sig_size=96))
        with pytest.raises(InvalidInput):
            Verifier([backend]).verify(beacon, chain)


class TestHexValidation:
    @pytest.mark.parametrize("field", ["signature", "previous_signature"])
    def test_malformed_beacon_hex(self, field):
        payload = {**beacon_payload(3), field: "xyz1"}
        with pytest.raises(InvalidInput):
            Verifier([StubBackend(ALL)]).verify(Beacon.from_wire(payload), _chain())

    def test_odd_length_public_key(self):
        with pytest.raises(InvalidInput, match="public key"):
            Verifier([StubBackend(ALL)]).verify(
                Beacon.from_wire(beacon_payload(3)), _chain(public_key="abc"),
            )


class TestVerifyRandomness:
    def setup_method(self):
        self.verifier = Verifier([StubBackend(ALL)])

    def test_matching(self):
        assert self.verifier.verify_randomness(Beacon.from_wire(beacon_payload(77)))

    def test_every_signature_bit_flip_detected(self):
        payload = beacon_payload(77)
        sig = bytearray.fromhex(payload["signature"])
        for byte in range(len(sig)):
            for bit in range(8):
                flipped = bytearray(sig)
                flipped[byte] ^= 1 << bit
                beacon = Beacon.from_wire({**payload, "signature": flipped.hex()})
                assert not self.verifier.verify_randomness(beacon)

    def test_randomness_bit_flip_detected(self):
        payload = beacon_payload(77)
        rnd = bytearray.fromhex(payload["randomness"])
        rnd[-1] ^= 0x01
        beacon = Beacon.from_wire({**payload, "randomness": rnd.hex()})
        assert not self.verifier.verify_randomness(beacon)

    def test_truncated_randomness(self):
        payload = beacon_payload(77)
        beacon = Beacon.from_wire({**payload, "randomness": payload["randomness"][:-2]})
        assert not self.verifier.verify_randomness(beacon)

    def test_definition(self):
        sig = bytes(range(48))
        beacon = Beacon(round=1, signature=sig.hex(), randomness=hashlib.sha256(sig).hexdigest())
        assert self.verifier.verify_randomness(beacon)

    def test_malformed_hex(self):
        with pytest.raises(InvalidInput):
            self.verifier.verify_randomness(Beacon(round=1, signature="0g", randomness="00"))
