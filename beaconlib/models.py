"""Beacon data model — chain descriptors, beacons, hex decoding.

Both models are immutable pydantic v2 models that accept the node's wire
JSON (through `from_wire`) and render it back (`to_wire`). Hex fields stay
strings here; they are only decoded, and validated, when a Verifier needs
the bytes.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from beaconlib.errors import InvalidInput
from beaconlib.schemes import SignatureScheme

_HEX_RE = re.compile(r"[0-9a-fA-F]*")

CHAIN_INFO_KEYS = (
    "hash",
    "public_key",
    "period",
    "genesis_time",
    "groupHash",
    "schemeID",
    "metadata",
)
BEACON_KEYS = ("round", "randomness", "signature")

# Rounds are signed as an unsigned 64-bit big-endian integer.
MAX_ROUND = 2**64 - 1


def decode_hex(value: str, context: str = "input") -> bytes:
    """Strict hex decode: even length, hex digits only, no prefix or spaces."""
    if not isinstance(value, str) or len(value) % 2 != 0 or not _HEX_RE.fullmatch(value):
        raise InvalidInput(f"Invalid hex input for {context}: {value!r}")
    return bytes.fromhex(value)


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise InvalidInput(f"{what} payload must be a JSON object, got {type(data).__name__}")
    return data


class ChainMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    beacon_id: str = Field(alias="beaconID")


class ChainDescriptor(BaseModel):
    """Parameters of one randomness chain (key, timing, scheme, identity)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hash: str
    public_key: str
    period: int = Field(gt=0)
    genesis_time: int
    group_hash: str = Field(alias="groupHash")
    scheme_id: SignatureScheme = Field(alias="schemeID")
    metadata: ChainMetadata

    @property
    def beacon_id(self) -> str:
        return self.metadata.beacon_id

    @classmethod
    def from_wire(cls, data: Any) -> "ChainDescriptor":
        """Build from a `/info` response.

        Raises InvalidInput on a missing key or bad value, UnknownScheme when
        `schemeID` is not registered.
        """
        data = _require_mapping(data, "Chain info")
        for key in CHAIN_INFO_KEYS:
            if key not in data:
                raise InvalidInput(f"Missing required chain info key: '{key}'")
        metadata = _require_mapping(data["metadata"], "Chain metadata")
        if "beaconID" not in metadata:
            raise InvalidInput("Missing required chain info key: 'metadata.beaconID'")

        scheme = SignatureScheme.parse(data["schemeID"])
        try:
            return cls.model_validate({**data, "schemeID": scheme})
        except ValidationError as e:
            raise InvalidInput(f"Invalid chain info: {e}") from e

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Beacon(BaseModel):
    """One published round: randomness plus its threshold signature."""

    model_config = ConfigDict(frozen=True)

    round: int = Field(gt=0, le=MAX_ROUND)
    randomness: str
    signature: str
    previous_signature: str | None = None

    @property
    def round_message(self) -> bytes:
        """Signed payload of unchained schemes: round as 8-byte big-endian."""
        return self.round.to_bytes(8, "big")

    @classmethod
    def from_wire(cls, data: Any) -> "Beacon":
        data = _require_mapping(data, "Beacon")
        for key in BEACON_KEYS:
            if key not in data:
                raise InvalidInput(f"Missing required beacon key: '{key}'")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidInput(f"Invalid beacon: {e}") from e

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
