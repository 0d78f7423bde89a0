"""
Create aliases against a running service.

    python write_load.py --password secret --count 2000 --concurrency 100

Every created record is appended to --out as a JSON line, which
read_load.py then replays.
"""

import argparse
import asyncio

import httpx

from urlalias.loadgen import record_line, run_bounded, target_url


def parse_args():
    parser = argparse.ArgumentParser(description="POST /url load generator")
    parser.add_argument("--base", default="http://127.0.0.1:8080")
    parser.add_argument("--user", default="admin")
    parser.add_argument("--password", required=True)
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--out", default="aliases_created.jsonl")
    return parser.parse_args()


async def write_load(args) -> None:
    limits = httpx.Limits(max_connections=args.concurrency)
    async with httpx.AsyncClient(
        base_url=args.base, auth=(args.user, args.password), limits=limits, timeout=10
    ) as client:
        with open(args.out, "w", encoding="utf-8") as out:

            async def create(i: int) -> bool:
                url = target_url(i)
                try:
                    resp = await client.post("/url", json={"url": url})
                except httpx.HTTPError:
                    return False
                if resp.status_code != 200:
                    return False
                body = resp.json()
                out.write(record_line(body["alias"], body.get("id"), url))
                return True

            stats = await run_bounded("writes", args.count, args.concurrency, create)
    print(stats.summary())


if __name__ == "__main__":
    asyncio.run(write_load(parse_args()))
