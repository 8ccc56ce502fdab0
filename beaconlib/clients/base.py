"""Beacon sources — transport interface and the HTTP implementation.

Provides:
- Source: the three fetch operations every transport offers
- HttpSource: synchronous httpx client for a node's public HTTP API
- Structured TransportFailure on status, network and payload errors

No retries at this layer: a failed request propagates immediately. All
composite sources (caching, multi-chain, fastest) wrap a Source.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from beaconlib.errors import InvalidInput, TransportFailure
from beaconlib.models import MAX_ROUND, Beacon, ChainDescriptor
from beaconlib.options import ClientOptions

log = logging.getLogger("beaconlib.clients")

USER_AGENT = "beaconlib/0.1"


def check_round(round: int) -> int:
    if round < 1:
        raise InvalidInput("Round number must be greater than 0")
    if round > MAX_ROUND:
        raise InvalidInput(f"Round number must not exceed {MAX_ROUND}")
    return round


class Source(ABC):
    """Where beacons come from."""

    @abstractmethod
    def fetch_chain_info(self) -> ChainDescriptor:
        ...

    @abstractmethod
    def fetch_beacon(self, round: int) -> Beacon:
        """Beacon for `round`. Raises InvalidInput if round < 1."""

    @abstractmethod
    def fetch_latest_beacon(self) -> Beacon:
        ...


class HttpSource(Source):
    """One node's HTTP API.

    Usage:
        source = HttpSource("https://api.drand.sh", ClientOptions(timeout=5))
        chain = source.fetch_chain_info()
        beacon = source.fetch_beacon(42)
    """

    def __init__(
        self,
        base_url: str,
        options: ClientOptions | None = None,
        transport: httpx.BaseTransport | None = None,
        provider_name: str = "",
    ):
        self.base_url = base_url.rstrip("/")
        self.options = options or ClientOptions()
        self.provider_name = provider_name or self.base_url
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=httpx.Timeout(self.options.timeout),
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpSource":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def fetch_chain_info(self) -> ChainDescriptor:
        data = self._get("/info")
        chain = self._parse(ChainDescriptor, data)
        if self.options.chain_verification is not None:
            self.options.chain_verification.check(chain)
        return chain

    def fetch_beacon(self, round: int) -> Beacon:
        check_round(round)
        return self._parse(Beacon, self._get(f"/public/{round}"))

    def fetch_latest_beacon(self) -> Beacon:
        return self._parse(Beacon, self._get("/public/latest"))

    def _parse(self, model: type[Any], data: Any) -> Any:
        try:
            return model.from_wire(data)
        except InvalidInput as e:
            raise TransportFailure(
                f"Malformed payload from {self.provider_name}: {e}",
                provider=self.provider_name,
            ) from e

    def _get(self, path: str) -> Any:
        params: dict[str, Any] | None = None
        if self.options.no_cache:
            # Bust intermediate HTTP caches.
            params = {"_": int(time.time())}

        log.debug("GET %s%s", self.base_url, path)
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise TransportFailure(
                f"Connection error to {self.provider_name}: {e}",
                provider=self.provider_name,
            ) from e

        if not response.is_success:
            raise TransportFailure(
                f"HTTP request to {self.provider_name}{path} failed with status code: "
                f"{response.status_code}",
                status_code=response.status_code,
                provider=self.provider_name,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(
                f"Failed to decode JSON response from {self.provider_name}: {e}",
                status_code=response.status_code,
                provider=self.provider_name,
            ) from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url})"
