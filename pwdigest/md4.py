"""MD4 (RFC 1320), the digest under the NT password hash."""

from __future__ import annotations

from typing import List, Tuple

from .core import IV, add32, bytes_to_words_le, iter_blocks, rl, state_to_digest, u32

# Additive constant per round; round 1 adds nothing
ROUND_K: Tuple[int, int, int] = (0x00000000, 0x5A827999, 0x6ED9EBA1)

RC: List[int] = (
    [3, 7, 11, 19] * 4
    + [3, 5, 9, 13] * 4
    + [3, 9, 11, 15] * 4
)

_ROUND3_ORDER: Tuple[int, ...] = (0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15)

STEPS = 48


def ft(t: int, X: int, Y: int, Z: int) -> int:
    X, Y, Z = u32(X), u32(Y), u32(Z)
    if 0 <= t < 16:
        # F: X selects between Y and Z
        return u32((X & Y) | ((~X) & Z))
    if 16 <= t < 32:
        # G: bitwise majority
        return u32((X & Y) | (X & Z) | (Y & Z))
    if 32 <= t < 48:
        # H: X ^ Y ^ Z
        return u32(X ^ Y ^ Z)
    raise ValueError("t out of range")


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        i = t - 16
        return 4 * (i % 4) + i // 4
    if 32 <= t < 48:
        return _ROUND3_ORDER[t - 32]
    raise ValueError("t out of range")


def kt(t: int) -> int:
    if not 0 <= t < STEPS:
        raise ValueError("t out of range")
    return ROUND_K[t // 16]


def compress_block(
    ihv: Tuple[int, int, int, int],
    m: List[int],
) -> Tuple[int, int, int, int]:
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    AA, BB, CC, DD = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    a, b, c, d = AA, BB, CC, DD

    for t in range(STEPS):
        # no trailing "+ b" in MD4, the rotated sum is the new register
        a, b, c, d = d, rl(add32(a, ft(t, b, c, d), m[wt_index(t)], kt(t)), RC[t]), b, c

    return add32(a, AA), add32(b, BB), add32(c, CC), add32(d, DD)


def md4_bytes(data: bytes) -> bytes:
    ihv = IV
    for block in iter_blocks(data):
        ihv = compress_block(ihv, bytes_to_words_le(block))
    return state_to_digest(ihv)


def md4_hex(data: bytes) -> str:
    return md4_bytes(data).hex()
