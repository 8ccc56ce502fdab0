"""Beacon CLI — fetch and verify beacons from the command line.

Usage:
    python3 -m beaconlib.cli info                 # Chain descriptor
    python3 -m beaconlib.cli latest               # Latest verified beacon
    python3 -m beaconlib.cli get 1000             # Beacon for round 1000
    python3 -m beaconlib.cli round-at 1700000000  # Round at a unix time (default: now)
    python3 -m beaconlib.cli --url https://drand.cloudflare.com --no-verify latest

Prints JSON. Exit 0 on success, 1 on any beacon error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from beaconlib.client import Client, build_client
from beaconlib.config import BeaconConfig, load_config
from beaconlib.errors import BeaconError
from beaconlib.options import VerificationMode


def make_client(config: BeaconConfig) -> Client:
    return build_client(
        config.urls,
        config.options,
        chain_info_ttl=config.cache.chain_info_ttl,
        beacon_ttl=config.cache.beacon_ttl,
        update_interval=config.fastest.update_interval,
    )


def run(client: Client, args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "info":
        return {"status": "OK", "chain": client.get_chain().to_wire()}

    if args.command == "latest":
        beacon = client.get_latest_beacon()
    elif args.command == "get":
        beacon = client.get_beacon(args.round)
    else:
        round_ = client.round_at(args.time)
        return {"status": "OK", "round": round_, "round_time": client.round_time(round_)}

    return {
        "status": "OK",
        "verified": client.options.verify_beacons,
        "beacon": beacon.to_wire(),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Randomness beacon client")
    parser.add_argument("--config", help="Path to beacon.yaml")
    parser.add_argument("--url", action="append", help="Node URL (repeatable, overrides config)")
    parser.add_argument("--no-verify", action="store_true", help="Skip beacon verification")
    parser.add_argument("-v", "--verbose", action="store_true", help="INFO-level logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("info", help="Show chain info")
    sub.add_parser("latest", help="Fetch the latest beacon")
    get = sub.add_parser("get", help="Fetch a beacon by round")
    get.add_argument("round", type=int)
    round_at = sub.add_parser("round-at", help="Round at a unix time")
    round_at.add_argument("time", type=float, nargs="?", default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = load_config(args.config)
        updates: dict[str, Any] = {}
        if args.url:
            updates["urls"] = args.url
        if args.no_verify:
            updates["options"] = config.options.model_copy(
                update={"verification_mode": VerificationMode.DISABLED},
            )
        if updates:
            config = config.model_copy(update=updates)
        result = run(make_client(config), args)
    except BeaconError as e:
        print(json.dumps({"status": "ERROR", "error": type(e).__name__, "message": str(e)}, indent=2))
        sys.exit(1)

    print(json.dumps(result, indent=2))
    sys.exit(0)


if __name__ == "__main__":
    main()
