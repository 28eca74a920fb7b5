#!/usr/bin/env python3
"""Throughput of the scalar digest engine against the numpy batch engine."""
from __future__ import annotations

import argparse
import random
import string
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from pwdigest.batch import hash_many
from pwdigest.digest import hash_string


def random_words(count: int, seed: int) -> list[str]:
    rng = random.Random(seed)
    alphabet = string.ascii_letters + string.digits
    return ["".join(rng.choice(alphabet) for _ in range(rng.randrange(6, 17))) for _ in range(count)]


def bench_scalar(words: list[str], algorithm: str) -> list[str]:
    start = time.time()
    out = [hash_string(w, algorithm) for w in words]
    elapsed = time.time() - start
    rate = len(words) / elapsed if elapsed else 0.0
    print(f"scalar {algorithm}: n={len(words)} time={elapsed:.3f}s rate={rate:.0f}/s")
    return out


def bench_batch(words: list[str], algorithm: str) -> list[str]:
    start = time.time()
    out = hash_many(words, algorithm)
    elapsed = time.time() - start
    rate = len(words) / elapsed if elapsed else 0.0
    print(f"batch  {algorithm}: n={len(words)} time={elapsed:.3f}s rate={rate:.0f}/s")
    return out


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--count", type=int, default=5000)
    ap.add_argument("--seed", type=int, default=2024)
    ap.add_argument("--algorithm", choices=["md5", "md4", "ntlm"], default="md5")
    args = ap.parse_args()

    words = random_words(args.count, args.seed)
    a = bench_scalar(words, args.algorithm)
    b = bench_batch(words, args.algorithm)
    if a != b:
        print("perf: scalar and batch digests differ")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
