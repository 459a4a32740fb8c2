"""
Word Packing Module

Conversions between 32-bit words, their four big-endian bytes, and 16-byte
blocks. Byte 0 of a word is its most significant byte, which matches the
column-major byte order FIPS-197 uses for the state.
"""

from typing import List, Sequence

import numpy as np

from .constants import BYTE_MASK, WORD_MASK


def word_to_bytes(word: int) -> List[int]:
    """Split a word into ``[b0, b1, b2, b3]``, most significant first."""
    word = int(word) & WORD_MASK
    return [(word >> 24) & BYTE_MASK,
            (word >> 16) & BYTE_MASK,
            (word >> 8) & BYTE_MASK,
            word & BYTE_MASK]


def bytes_to_word(data: Sequence[int]) -> int:
    """Assemble four bytes (most significant first) into a word."""
    if len(data) != 4:
        raise ValueError(f"a word is built from exactly 4 bytes, got {len(data)}")
    b0, b1, b2, b3 = (int(b) & BYTE_MASK for b in data)
    return (b0 << 24) | (b1 << 16) | (b2 << 8) | b3


def rotate_word_right(word: int, positions: int) -> int:
    """Cyclically rotate the four bytes of a word right by ``positions`` bytes."""
    shift = 8 * (positions % 4)
    word = int(word) & WORD_MASK
    if shift == 0:
        return word
    return ((word >> shift) | (word << (32 - shift))) & WORD_MASK


def pack_byte_columns(b0: np.ndarray, b1: np.ndarray,
                      b2: np.ndarray, b3: np.ndarray) -> np.ndarray:
    """Vectorised ``bytes_to_word`` over four equally shaped byte arrays."""
    return ((b0.astype(np.uint32) << np.uint32(24))
            | (b1.astype(np.uint32) << np.uint32(16))
            | (b2.astype(np.uint32) << np.uint32(8))
            | b3.astype(np.uint32))


def as_word_array(words: Sequence[int]) -> np.ndarray:
    """Copy a flat sequence of 32-bit words into a uint32 array."""
    if np.ndim(words) != 1:
        raise ValueError("expected a flat sequence of words")
    values = [int(w) for w in words]
    for w in values:
        if not 0 <= w <= WORD_MASK:
            raise ValueError(f"{w:#x} is not a 32-bit word")
    return np.array(values, dtype=np.uint32)


def words_from_bytes(data: bytes) -> List[int]:
    """Interpret a byte string (length divisible by 4) as big-endian words."""
    if len(data) % 4:
        raise ValueError(f"byte length {len(data)} is not a multiple of 4")
    return [int(w) for w in np.frombuffer(bytes(data), dtype=">u4")]


def bytes_from_words(words: Sequence[int]) -> bytes:
    """Serialise words to a big-endian byte string."""
    return np.asarray([int(w) & WORD_MASK for w in words], dtype=">u4").tobytes()
