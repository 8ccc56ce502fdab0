"""Client options — verification mode, cache policy, chain pinning.

Options arrive either in their normalized form (enum members / names) or in
the node-client style boolean form used by config files:

    disableBeaconVerification: true   ==  verification_mode: disabled
    noCache: true                     ==  cache_policy: disabled
    chainVerificationParams: {...}    ==  chain_verification: {...}

Both are normalized here, once, into closed enums.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from beaconlib.errors import ChainMismatch
from beaconlib.models import ChainDescriptor

log = logging.getLogger("beaconlib.options")


class VerificationMode(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_bool(cls, enabled: bool) -> "VerificationMode":
        return cls.ENABLED if enabled else cls.DISABLED


class CachePolicy(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_bool(cls, enabled: bool) -> "CachePolicy":
        return cls.ENABLED if enabled else cls.DISABLED


_FLAG = TypeAdapter(bool)


def _parse_flag(key: str, value: Any) -> bool:
    """Lax boolean: true/false, 1/0, yes/no, on/off (any case)."""
    try:
        return _FLAG.validate_python(value)
    except ValidationError:
        raise ValueError(f"{key} must be a boolean, got {value!r}") from None


def _coerce_mode(value: Any, enum_cls: type[Enum]) -> Any:
    """Accept a bool (True = enabled) or an enum name/value."""
    if isinstance(value, bool):
        return enum_cls.from_bool(value)
    if isinstance(value, str):
        return value.strip().lower()
    return value


class ChainVerificationParams(BaseModel):
    """Pins the chain a client is willing to talk to."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chain_hash: str | None = Field(default=None, alias="chainHash")
    public_key: str | None = Field(default=None, alias="publicKey")

    def check(self, chain: ChainDescriptor) -> ChainDescriptor:
        """Return the chain unchanged, or raise ChainMismatch."""
        if self.chain_hash is not None and chain.hash != self.chain_hash:
            log.warning("Chain hash mismatch: pinned=%s fetched=%s", self.chain_hash, chain.hash)
            raise ChainMismatch("hash", self.chain_hash, chain.hash)
        if self.public_key is not None and chain.public_key != self.public_key:
            log.warning("Chain public key mismatch for chain %s", chain.hash)
            raise ChainMismatch("public key", self.public_key, chain.public_key)
        return chain


class ClientOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    verification_mode: VerificationMode = VerificationMode.ENABLED
    cache_policy: CachePolicy = CachePolicy.ENABLED
    no_cache: bool = Field(default=False, alias="noCache")
    timeout: float = Field(default=10.0, gt=0)
    chain_verification: ChainVerificationParams | None = Field(
        default=None, alias="chainVerificationParams",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_boolean_forms(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "disableBeaconVerification" in data:
            disabled = _parse_flag("disableBeaconVerification", data.pop("disableBeaconVerification"))
            data.setdefault("verification_mode", VerificationMode.from_bool(not disabled))
        for key in ("noCache", "no_cache"):
            if key in data:
                data[key] = _parse_flag(key, data[key])
                if data[key]:
                    data.setdefault("cache_policy", CachePolicy.DISABLED)
        return data

    @field_validator("verification_mode", mode="before")
    @classmethod
    def _coerce_verification_mode(cls, v: Any) -> Any:
        return _coerce_mode(v, VerificationMode)

    @field_validator("cache_policy", mode="before")
    @classmethod
    def _coerce_cache_policy(cls, v: Any) -> Any:
        return _coerce_mode(v, CachePolicy)

    @property
    def verify_beacons(self) -> bool:
        return self.verification_mode is VerificationMode.ENABLED

    @property
    def use_cache(self) -> bool:
        return self.cache_policy is CachePolicy.ENABLED
