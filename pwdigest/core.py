from __future__ import annotations

from typing import Iterator, List, Tuple

MASK32 = 0xFFFFFFFF

# Initial register values (a, b, c, d), shared by MD4 and MD5
IV: Tuple[int, int, int, int] = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def add32(*xs: int) -> int:
    s = 0
    for v in xs:
        s = (s + (v & MASK32)) & MASK32
    return s


def length_words(msg_len_bytes: int) -> Tuple[int, int]:
    # (L << 3) and (L >>> 29) on 32-bit lanes; exact below 2^32 bytes
    low = u32(msg_len_bytes << 3)
    high = u32(msg_len_bytes) >> 29
    return low, high


def padding(msg_len_bytes: int) -> bytes:
    # 0x80 then zeros then length (little-endian 64-bit)
    pad = b"\x80"
    # k such that (msg_len + 1 + k) % 64 == 56
    k = (56 - (msg_len_bytes + 1) % 64) % 64
    pad += b"\x00" * k
    low, high = length_words(msg_len_bytes)
    pad += low.to_bytes(4, "little") + high.to_bytes(4, "little")
    return pad


def pad_message(msg: bytes) -> bytes:
    return bytes(msg) + padding(len(msg))


def block_count(msg_len_bytes: int) -> int:
    return (msg_len_bytes + 8) // 64 + 1


def iter_blocks(msg: bytes) -> Iterator[bytes]:
    padded = pad_message(msg)
    for off in range(0, len(padded), 64):
        yield padded[off : off + 64]


def bytes_to_words_le(block: bytes) -> List[int]:
    if len(block) != 64:
        raise ValueError("block must be 64 bytes")
    return [int.from_bytes(block[i : i + 4], "little") for i in range(0, 64, 4)]


def words_to_bytes_le(words: List[int]) -> bytes:
    return b"".join(u32(w).to_bytes(4, "little") for w in words)


def state_to_digest(ihv: Tuple[int, int, int, int]) -> bytes:
    # digest is little-endian of ihv words in order (a, b, c, d)
    return words_to_bytes_le(list(ihv))
