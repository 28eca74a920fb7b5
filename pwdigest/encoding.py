from __future__ import annotations

from typing import Union

Text = Union[str, bytes]


def encode_utf8(text: Text) -> bytes:
    """UTF-8 bytes of `text`; bytes pass through untouched."""
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    # lone surrogates have no UTF-8 form, emit their 3-byte pattern instead of failing
    return text.encode("utf-8", "surrogatepass")


def encode_utf16le(text: Text) -> bytes:
    """
    One little-endian 16-bit unit per UTF-16 code unit.

    Astral characters become surrogate pairs. A lone surrogate is written as
    its own code unit, the same way the NT hash treats it; no repair is done.
    """
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    return text.encode("utf-16-le", "surrogatepass")
