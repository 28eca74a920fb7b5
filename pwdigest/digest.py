from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from .encoding import Text, encode_utf16le, encode_utf8
from .md4 import md4_hex
from .md5 import md5_hex


@dataclass(frozen=True)
class Algorithm:
    name: str
    encode: Callable[[Text], bytes]
    hexdigest: Callable[[bytes], str]

    def __call__(self, text: Text) -> str:
        return self.hexdigest(self.encode(text))


ALGORITHMS: Dict[str, Algorithm] = {
    "md5": Algorithm("md5", encode_utf8, md5_hex),
    "md4": Algorithm("md4", encode_utf8, md4_hex),
    "ntlm": Algorithm("ntlm", encode_utf16le, md4_hex),
}

DEFAULT_ALGORITHM = "md5"


def get_algorithm(name: str) -> Algorithm:
    try:
        return ALGORITHMS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"unknown algorithm {name!r} (choose from {', '.join(sorted(ALGORITHMS))})"
        ) from None


def md5_string(text: Text) -> str:
    return md5_hex(encode_utf8(text))


def ntlm_hash(text: Text) -> str:
    # NT hash: unsalted MD4 over the UTF-16LE password
    return md4_hex(encode_utf16le(text))


def hash_string(text: Text, algorithm: str = DEFAULT_ALGORITHM) -> str:
    return get_algorithm(algorithm)(text)
