from __future__ import annotations

from typing import List, Tuple

from .core import IV, add32, bytes_to_words_le, iter_blocks, rl, state_to_digest, u32

# AC_t constants (MD5 T[1..64]) from RFC 1321
AC: List[int] = [
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
]

# RC_t rotation counts (per step)
RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)

STEPS = 64


def ft(t: int, X: int, Y: int, Z: int) -> int:
    X, Y, Z = u32(X), u32(Y), u32(Z)
    if 0 <= t < 16:
        # F: (X & Y) | (~X & Z)
        return u32((X & Y) | ((~X) & Z))
    if 16 <= t < 32:
        # G: (X & Z) | (Y & ~Z)
        return u32((Z & X) | ((~Z) & Y))
    if 32 <= t < 48:
        # H: X ^ Y ^ Z
        return u32(X ^ Y ^ Z)
    if 48 <= t < 64:
        # I: Y ^ (X | ~Z)
        return u32(Y ^ (X | (~Z)))
    raise ValueError("t out of range")


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")


def compress_block(
    ihv: Tuple[int, int, int, int],
    m: List[int],
) -> Tuple[int, int, int, int]:
    """
    One MD5 compression.
    Inputs:
      - ihv: (a, b, c, d) chaining value
      - m: 16 little-endian 32-bit words
    Returns the next chaining value.
    """
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    AA, BB, CC, DD = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    a, b, c, d = AA, BB, CC, DD

    for t in range(STEPS):
        Tt = add32(a, ft(t, b, c, d), AC[t], m[wt_index(t)])
        # rotate state for next iteration (preserve old b in c)
        a, b, c, d = d, add32(b, rl(Tt, RC[t])), b, c

    return add32(a, AA), add32(b, BB), add32(c, CC), add32(d, DD)


def md5_bytes(data: bytes) -> bytes:
    ihv = IV
    for block in iter_blocks(data):
        ihv = compress_block(ihv, bytes_to_words_le(block))
    return state_to_digest(ihv)


def md5_hex(data: bytes) -> str:
    return md5_bytes(data).hex()
