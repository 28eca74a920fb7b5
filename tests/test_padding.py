import unittest

from pwdigest.core import (
    add32,
    block_count,
    bytes_to_words_le,
    iter_blocks,
    length_words,
    pad_message,
    rl,
    words_to_bytes_le,
)


class TestPadding(unittest.TestCase):
    def test_block_counts_at_boundaries(self) -> None:
        expected = {0: 1, 1: 1, 55: 1, 56: 2, 63: 2, 64: 2, 119: 2, 120: 3}
        for n, blocks in expected.items():
            padded = pad_message(b"q" * n)
            self.assertEqual(len(padded) % 64, 0, n)
            self.assertEqual(len(padded) // 64, blocks, n)
            self.assertEqual(block_count(n), blocks, n)
            self.assertEqual(len(list(iter_blocks(b"q" * n))), blocks, n)

    def test_layout(self) -> None:
        padded = pad_message(b"abc")
        self.assertEqual(padded[:3], b"abc")
        self.assertEqual(padded[3], 0x80)
        self.assertEqual(padded[4:56], b"\x00" * 52)
        self.assertEqual(padded[56:], (24).to_bytes(8, "little"))

    def test_prefix_preserved(self) -> None:
        msg = bytes(range(200))
        self.assertEqual(pad_message(msg)[:200], msg)

    def test_length_words(self) -> None:
        self.assertEqual(length_words(3), (24, 0))
        self.assertEqual(length_words(1 << 29), (0, 1))
        self.assertEqual(length_words((1 << 29) + 1), (8, 1))
        # only the low 32 bits of the byte length reach the high word
        self.assertEqual(length_words(1 << 32), (0, 0))

    def test_words_le(self) -> None:
        block = bytes(range(64))
        words = bytes_to_words_le(block)
        self.assertEqual(len(words), 16)
        self.assertEqual(words[0], 0x03020100)
        self.assertEqual(words_to_bytes_le(words), block)
        with self.assertRaises(ValueError):
            bytes_to_words_le(block[:63])

    def test_modular_arithmetic(self) -> None:
        self.assertEqual(add32(0xFFFFFFFF, 1), 0)
        self.assertEqual(add32(0x80000000, 0x80000000, 5), 5)
        self.assertEqual(add32(0x7FFFFFFF, 1), 0x80000000)
        self.assertEqual(rl(0x80000001, 1), 0x00000003)
        self.assertEqual(rl(0x12345678, 8), 0x34567812)


if __name__ == "__main__":
    unittest.main()
