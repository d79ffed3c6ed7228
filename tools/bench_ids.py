"""
Quick ID throughput / collision benchmark.

Examples:
    python -m tools.bench_ids
    python -m tools.bench_ids --n 100000 --seed 7
"""

from __future__ import annotations

import argparse
import random
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Tuple

from courseids.ids import item_id

_EPOCH = datetime(2025, 9, 1, tzinfo=timezone.utc)


def random_items(n: int, seed: int = 0) -> List[Tuple[str, datetime]]:
    """``n`` distinct (title, timestamp) pairs drawn from a seeded RNG."""
    rng = random.Random(seed)
    seen = set()
    out: List[Tuple[str, datetime]] = []
    while len(out) < n:
        title = rng.choice(string.ascii_uppercase) + "".join(rng.choices(string.ascii_letters + " ", k=rng.randint(3, 23)))
        when = _EPOCH + timedelta(milliseconds=rng.randint(0, 120 * 24 * 3600 * 1000))
        key = (title, when)
        if key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out


def run(n: int, seed: int = 0) -> Dict[str, float]:
    pairs = random_items(n, seed=seed)
    t0 = time.perf_counter()
    ids = [item_id(title, "Week 1", "BENCH101", when) for title, when in pairs]
    dt = time.perf_counter() - t0
    collisions = len(ids) - len(set(ids))
    return {"n": n, "seconds": dt, "ids_per_sec": n / dt if dt > 0 else 0.0, "collisions": collisions}


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=10000, help="Number of random items")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed")
    args = ap.parse_args(argv)

    res = run(int(args.n), seed=int(args.seed))
    print(f"Derived IDs: {res['n']} in {res['seconds']:.2f}s  ->  {res['ids_per_sec']:.1f} ids/sec, collisions: {res['collisions']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
