from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from .batch import hash_many

DEFAULT_BATCH = 4096


def load_ledger(path: str | Path) -> List[str]:
    out: List[str] = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            h = line.strip().lower()
            if h:
                out.append(h)
    return out


def iter_wordlist(path: str | Path) -> Iterator[str]:
    with Path(path).open("r", encoding="utf-8", errors="replace", newline="") as fh:
        for line in fh:
            word = line.rstrip("\r\n")
            if word:
                yield word


def _chunks(words: Iterable[str], size: int) -> Iterator[List[str]]:
    buf: List[str] = []
    for w in words:
        buf.append(w)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


def crack(
    targets: Iterable[str],
    candidates: Iterable[str],
    algorithm: str = "md5",
    batch_size: int = DEFAULT_BATCH,
) -> Dict[str, str]:
    """Map each target digest found among the hashed candidates to its first preimage."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    remaining = {t.strip().lower() for t in targets if t.strip()}
    found: Dict[str, str] = {}
    for chunk in _chunks(candidates, batch_size):
        if not remaining:
            break
        for word, digest in zip(chunk, hash_many(chunk, algorithm)):
            if digest in remaining:
                found[digest] = word
                remaining.discard(digest)
    return found
