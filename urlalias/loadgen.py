"""
Helpers shared by the load scripts (`write_load.py`, `read_load.py`).

The scripts drive a running service over HTTP with httpx. This module holds
the parts that do not need a network: the bounded task runner, tallies, and
the JSONL file of created aliases that links the two scripts.
"""

import asyncio
import json
import random
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, List

from .manager.strategies import new_random_string

HOSTS = ("example.com", "sample.net", "demo.org", "test.io", "alpha.ai")


@dataclass
class RunStats:
    """Outcome tally of one load run."""
    kind: str
    total: int = 0
    ok: int = 0
    started: float = field(default_factory=time.monotonic)
    elapsed: float = 0.0

    @property
    def failed(self) -> int:
        return self.total - self.ok

    @property
    def rate(self) -> float:
        return self.ok / self.elapsed if self.elapsed > 0 else 0.0

    def summary(self) -> str:
        return (
            f"{self.kind}: {self.ok}/{self.total} ok, {self.failed} failed "
            f"in {self.elapsed:.3f}s ({self.rate:.1f} req/s)"
        )


async def run_bounded(
    kind: str,
    total: int,
    concurrency: int,
    op: Callable[[int], Awaitable[bool]],
) -> RunStats:
    """Run `op(i)` for i in range(total), at most `concurrency` at a time."""
    stats = RunStats(kind=kind, total=total)
    sem = asyncio.Semaphore(concurrency)

    async def _one(i: int) -> bool:
        async with sem:
            return await op(i)

    results = await asyncio.gather(*(_one(i) for i in range(total)))
    stats.ok = sum(1 for r in results if r)
    stats.elapsed = time.monotonic() - stats.started
    return stats


def target_url(idx: int) -> str:
    return f"https://{random.choice(HOSTS)}/{new_random_string(8)}?q={idx}"


def record_line(alias: str, record_id, url: str) -> str:
    """One JSONL line describing a created record."""
    return json.dumps({"alias": alias, "id": record_id, "url": url}) + "\n"


def parse_aliases(lines: Iterable[str]) -> List[str]:
    """Aliases from JSONL lines; undecodable or alias-less lines are skipped."""
    aliases = []
    for line in lines:
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict) and obj.get("alias"):
            aliases.append(obj["alias"])
    return aliases


def load_aliases(path: str) -> List[str]:
    with open(path, encoding="utf-8") as f:
        return parse_aliases(f)
