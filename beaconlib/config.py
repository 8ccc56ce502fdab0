"""Configuration loader for beaconlib.

Loads YAML config from config/beacon.yaml (or an explicit path). Keys use the
node-client style (`disableBeaconVerification`, `noCache`, `timeout`,
`chainVerificationParams`) plus `urls`, `cache` and `fastest` sections.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from beaconlib.errors import InvalidInput
from beaconlib.options import ClientOptions

WORKSPACE = Path(__file__).resolve().parent.parent
CONFIG_DIR = WORKSPACE / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "beacon.yaml"

DEFAULT_URLS = ["https://api.drand.sh"]


class CacheConfig(BaseModel):
    chain_info_ttl: float = Field(default=300, ge=0)
    beacon_ttl: float = Field(default=30, ge=0)


class FastestConfig(BaseModel):
    update_interval: float = Field(default=300, ge=0)


class BeaconConfig(BaseModel):
    urls: list[str] = Field(default_factory=lambda: list(DEFAULT_URLS), min_length=1)
    options: ClientOptions = Field(default_factory=ClientOptions)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    fastest: FastestConfig = Field(default_factory=FastestConfig)


def parse_config(raw: dict[str, Any]) -> BeaconConfig:
    """Validate a raw config mapping. Top-level option keys go to ClientOptions."""
    raw = dict(raw)
    sections = {key: raw.pop(key) for key in ("urls", "cache", "fastest") if key in raw}
    try:
        return BeaconConfig(options=ClientOptions.model_validate(raw), **sections)
    except ValidationError as e:
        raise InvalidInput(f"Invalid beacon config: {e}") from e


def load_config(path: Path | str | None = None) -> BeaconConfig:
    """Load config/beacon.yaml (or `path`). A missing file yields defaults."""
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        return BeaconConfig()
    try:
        raw = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise InvalidInput(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise InvalidInput(f"Config {path} must be a mapping")
    return parse_config(raw)
