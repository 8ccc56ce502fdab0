"""Verification backend interface.

A backend performs the raw pairing check for the schemes it supports.
Backends are interchangeable and chosen by capability (`supports_scheme`),
never by name. The pairing arithmetic itself always comes from an external
library; this layer only frames operands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from beaconlib.errors import InvalidInput
from beaconlib.schemes import SignatureScheme


class VerificationBackend(ABC):
    """Capability interface: `supports_scheme` + `verify`."""

    name: str = "backend"

    @abstractmethod
    def supports_scheme(self, scheme: SignatureScheme) -> bool:
        ...

    @abstractmethod
    def verify(
        self,
        signature: bytes,
        message: bytes,
        public_key: bytes,
        scheme: SignatureScheme,
    ) -> bool:
        """Return True iff `signature` over `message` verifies under `public_key`.

        Raises InvalidInput if the scheme is unsupported or operand sizes do
        not match the scheme (see `check_operands`).
        """

    def check_operands(
        self,
        signature: bytes,
        public_key: bytes,
        scheme: SignatureScheme,
    ) -> None:
        if not self.supports_scheme(scheme):
            raise InvalidInput(f"Unsupported signature scheme for {self.name}: {scheme.value}")
        if len(signature) != scheme.signature_size or len(public_key) != scheme.public_key_size:
            group = "G1" if scheme.is_g1() else "G2"
            raise InvalidInput(
                f"{group} scheme requires {scheme.signature_size}-byte signature and "
                f"{scheme.public_key_size}-byte public key, "
                f"got sig={len(signature)}, pub={len(public_key)}"
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
