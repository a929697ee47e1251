#!/usr/bin/env python3
"""Walk a trackable through its life on an in-memory ledger.

Seeds the sample world, then as two identities:
1) creates a cache and a visit log,
2) creates a trackable in that log,
3) removes it with a second identity's log at the same cache,
4) inserts it again at a second cache,
and prints every resulting record as JSON.

Usage::

    python scripts/ledger_demo.py --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygeocache import (  # noqa: E402
    GeocacheClient,
    GeocacheConfig,
    GeocacheError,
    MemoryLedger,
    StaticIdentityResolver,
    resolve_context,
)


def _print(title: str, value: Any) -> None:
    if isinstance(value, list):
        payload = [item.to_wire() for item in value]
    elif hasattr(value, "to_wire"):
        payload = value.to_wire()
    else:
        payload = value
    print(f"== {title}")
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


async def _run(args: argparse.Namespace) -> int:
    client = GeocacheClient(MemoryLedger(), GeocacheConfig.from_env())
    owner = resolve_context(StaticIdentityResolver(args.owner))
    finder = resolve_context(StaticIdentityResolver(args.finder))

    _print("init_ledger", await client.init_ledger(owner))

    await client.create_cache(owner, "demo-cache", "Demo", "Behind the oak", 46.5, 11.3, args.password)
    await client.create_cache(finder, "demo-cache-2", "Demo 2", "Under the bridge", 46.6, 11.4, "bridge")
    _print("caches (as finder)", await client.list_caches(finder))

    await client.create_log(owner, "demo-log-1", "demo-cache", args.password)
    _print("create_trackable", await client.create_trackable(owner, "demo-coin", "demo-log-1", "Demo Coin"))

    # log times have millisecond precision and must strictly increase
    await asyncio.sleep(0.002)
    await client.create_log(finder, "demo-log-2", "demo-cache", args.password)
    _print("remove_trackable", await client.remove_trackable(finder, "demo-coin", "demo-log-2"))

    await asyncio.sleep(0.002)
    await client.create_log(finder, "demo-log-3", "demo-cache-2", "bridge")
    _print("insert_trackable", await client.insert_trackable(finder, "demo-coin", "demo-log-3"))

    _print("owner", await client.trackable_owner(owner, "demo-coin"))
    _print("logs", await client.list_logs(owner))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--owner", default="alice", help="identity that hides the trackable")
    parser.add_argument("--finder", default="bob", help="identity that moves the trackable")
    parser.add_argument("--password", default="secret", help="pass of the demo cache")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except GeocacheError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
