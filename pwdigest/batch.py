"""
Vectorised MD5 / MD4 over many messages at once.

Each lane of a numpy uint32 array carries one message's registers, so the
wraparound of 32-bit addition is native here instead of masked. Messages are
grouped by padded block count; every group runs the same step schedule as the
scalar engine in `md5.py` / `md4.py`.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from . import md4, md5
from .core import IV, block_count, pad_message
from .digest import get_algorithm
from .encoding import Text

State = Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]

_U32 = np.uint32


def _rol(x: np.ndarray, n: int) -> np.ndarray:
    return (x << _U32(n)) | (x >> _U32(32 - n))


def _sel(b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    return d ^ (b & (c ^ d))


def _md5_g(b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    return c ^ (d & (b ^ c))


def _xor3(b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    return b ^ c ^ d


def _md5_i(b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    return c ^ (b | ~d)


def _maj(b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    return (b & c) | (b & d) | (c & d)


_MD5_ROUNDS = (_sel, _md5_g, _xor3, _md5_i)
_MD4_ROUNDS = (_sel, _maj, _xor3)

_MD5_AC = [_U32(k) for k in md5.AC]
_MD4_K = [_U32(md4.kt(t)) for t in range(md4.STEPS)]


def _md5_compress(state: State, X: np.ndarray) -> State:
    a, b, c, d = state
    for t in range(md5.STEPS):
        tmp = a + _MD5_ROUNDS[t // 16](b, c, d) + _MD5_AC[t] + X[:, md5.wt_index(t)]
        a, b, c, d = d, b + _rol(tmp, md5.RC[t]), b, c
    return (a + state[0], b + state[1], c + state[2], d + state[3])


def _md4_compress(state: State, X: np.ndarray) -> State:
    a, b, c, d = state
    for t in range(md4.STEPS):
        tmp = a + _MD4_ROUNDS[t // 16](b, c, d) + X[:, md4.wt_index(t)] + _MD4_K[t]
        a, b, c, d = d, _rol(tmp, md4.RC[t]), b, c
    return (a + state[0], b + state[1], c + state[2], d + state[3])


def _digest_many(
    messages: Sequence[bytes],
    compress: Callable[[State, np.ndarray], State],
) -> List[bytes]:
    out: List[bytes] = [b""] * len(messages)
    groups: Dict[int, List[int]] = {}
    for i, msg in enumerate(messages):
        groups.setdefault(block_count(len(msg)), []).append(i)

    for nblocks, idx in groups.items():
        buf = b"".join(pad_message(messages[i]) for i in idx)
        words = np.frombuffer(buf, dtype="<u4").astype(np.uint32).reshape(len(idx), nblocks, 16)
        state: State = tuple(np.full(len(idx), v, dtype=np.uint32) for v in IV)  # type: ignore[assignment]
        for k in range(nblocks):
            state = compress(state, words[:, k, :])
        digests = np.stack(state, axis=1).astype("<u4").tobytes()
        for j, i in enumerate(idx):
            out[i] = digests[16 * j : 16 * (j + 1)]
    return out


def md5_many(messages: Sequence[bytes]) -> List[bytes]:
    return _digest_many(messages, _md5_compress)


def md4_many(messages: Sequence[bytes]) -> List[bytes]:
    return _digest_many(messages, _md4_compress)


_ENGINES: Dict[str, Callable[[Sequence[bytes]], List[bytes]]] = {
    "md5": md5_many,
    "md4": md4_many,
    "ntlm": md4_many,
}


def hash_many(texts: Sequence[Text], algorithm: str = "md5") -> List[str]:
    algo = get_algorithm(algorithm)
    encoded = [algo.encode(t) for t in texts]
    return [d.hex() for d in _ENGINES[algo.name](encoded)]
