"""
Resolve aliases created by write_load.py against a running service.

    python read_load.py --in aliases_created.jsonl --count 15000 --concurrency 200

Redirects are not followed; only a 302 counts as success.
"""

import argparse
import asyncio
import random
import sys

import httpx

from urlalias.loadgen import load_aliases, run_bounded


def parse_args():
    parser = argparse.ArgumentParser(description="GET /{alias} load generator")
    parser.add_argument("--base", default="http://127.0.0.1:8080")
    parser.add_argument("--in", dest="aliases_file", default="aliases_created.jsonl")
    parser.add_argument("--count", type=int, default=15000)
    parser.add_argument("--concurrency", type=int, default=200)
    return parser.parse_args()


async def read_load(args) -> int:
    aliases = load_aliases(args.aliases_file)
    if not aliases:
        print(f"no aliases in {args.aliases_file}; run write_load.py first", file=sys.stderr)
        return 1

    limits = httpx.Limits(max_connections=args.concurrency)
    async with httpx.AsyncClient(base_url=args.base, limits=limits, timeout=10) as client:

        async def resolve(_: int) -> bool:
            try:
                resp = await client.get(f"/{random.choice(aliases)}", follow_redirects=False)
            except httpx.HTTPError:
                return False
            return resp.status_code == 302

        stats = await run_bounded("reads", args.count, args.concurrency, resolve)
    print(stats.summary())
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(read_load(parse_args())))
