"""
Key Schedule Module

Expands a 4/6/8-word cipher key into Nr + 1 round keys and arranges them into
the encryption and decryption schedules the round engine consumes.

The decryption schedule follows the equivalent inverse cipher: round keys run
in reverse and every middle key is passed through InvMixColumns, so the U-box
rounds can add the key after their fused InvMixColumns step.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Optional, Sequence, Tuple

import numpy as np

from .constants import INV_MIX_COLUMNS, NB, ROUNDS_BY_NK
from .errors import InvalidKeySize
from .gf_arithmetic import gf_multiply, round_constant
from .table_construction import TableSet, default_tables
from .word_packing import as_word_array, bytes_to_word, rotate_word_right, word_to_bytes


class AESVariant(Enum):
    """Key-size variants: (Nk words, Nr rounds, key bytes)."""

    AES128 = (4, 10, 16)
    AES192 = (6, 12, 24)
    AES256 = (8, 14, 32)

    def __init__(self, nk: int, nr: int, key_bytes: int):
        self.nk = nk
        self.nr = nr
        self.key_bytes = key_bytes

    @property
    def key_bits(self) -> int:
        return self.key_bytes * 8

    @property
    def schedule_words(self) -> int:
        return NB * (self.nr + 1)

    @classmethod
    def from_key_words(cls, nk: int) -> "AESVariant":
        for variant in cls:
            if variant.nk == nk:
                return variant
        raise InvalidKeySize(f"key must be 4, 6 or 8 words, got {nk}")

    @classmethod
    def from_key_bytes(cls, length: int) -> "AESVariant":
        for variant in cls:
            if variant.key_bytes == length:
                return variant
        raise InvalidKeySize(f"key must be 16, 24 or 32 bytes, got {length}")


@dataclass(frozen=True, eq=False)
class RoundKeySchedule:
    """
    Round keys for one key and one direction.

    ``initial`` and ``final`` are (4,) uint32 arrays; ``middle`` is an
    (Nr - 1, 4) uint32 array consumed in order by the standard rounds.
    """

    variant: AESVariant
    initial: np.ndarray
    middle: np.ndarray
    final: np.ndarray

    @property
    def num_rounds(self) -> int:
        return len(self.middle) + 1

    def round_keys(self) -> np.ndarray:
        """All keys in application order, shape (Nr + 1, 4)."""
        return np.vstack([self.initial, self.middle, self.final])


class EncryptSchedule(RoundKeySchedule):
    pass


class DecryptSchedule(RoundKeySchedule):
    pass


# ──────────────────────────────────────────────────────────────────────
# Word-level helpers
# ──────────────────────────────────────────────────────────────────────

def rot_word(word: int) -> int:
    """[a, b, c, d] -> [b, c, d, a]."""
    return rotate_word_right(word, 3)


def sub_word(word: int, sbox: np.ndarray) -> int:
    """Apply the S-box to each of the four bytes independently."""
    return bytes_to_word([int(sbox[b]) for b in word_to_bytes(word)])


def round_constant_word(index: int) -> int:
    """[rc[index], 0, 0, 0] packed as a word."""
    return round_constant(index) << 24


def inv_mix_columns(state: Sequence[int]) -> np.ndarray:
    """
    Multiply every column (word) of a 4-word state by the InvMixColumns matrix.

    Output byte ``r`` of a column is the GF(2^8) dot product of matrix row
    ``r`` with the column's bytes.
    """
    out = np.zeros(len(state), dtype=np.uint32)
    for c, word in enumerate(state):
        column = word_to_bytes(word)
        out[c] = bytes_to_word([
            reduce(operator.xor, (gf_multiply(m, b) for m, b in zip(row, column)))
            for row in INV_MIX_COLUMNS
        ])
    return out


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr = np.ascontiguousarray(arr, dtype=np.uint32)
    arr.setflags(write=False)
    return arr


# ──────────────────────────────────────────────────────────────────────
# Expansion
# ──────────────────────────────────────────────────────────────────────

class KeyScheduler:
    """Derives encryption and decryption schedules from cipher keys."""

    def __init__(self, tables: Optional[TableSet] = None, verbose: bool = False):
        self.tables = tables if tables is not None else default_tables()
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(f"[KEY] {message}")

    def expand_key_words(self, key: Sequence[int]) -> np.ndarray:
        """
        Standard key expansion into ``4 * (Nr + 1)`` words.

        Slot ``i < Nk`` copies key word ``i``. Later slots xor word ``i - Nk``
        with a function of word ``i - 1``: RotWord + SubWord + Rcon at every
        multiple of Nk, SubWord alone at ``i mod Nk == 4`` for 256-bit keys,
        and the plain word otherwise.
        """
        variant = AESVariant.from_key_words(len(key))
        key_words = as_word_array(key)
        nk = variant.nk
        sbox = self.tables.sbox

        words = np.zeros(variant.schedule_words, dtype=np.uint32)
        words[:nk] = key_words
        for i in range(nk, len(words)):
            prev = int(words[i - 1])
            if i % nk == 0:
                temp = sub_word(rot_word(prev), sbox) ^ round_constant_word(i // nk)
            elif nk > 6 and i % nk == 4:
                temp = sub_word(prev, sbox)
            else:
                temp = prev
            words[i] = int(words[i - nk]) ^ temp
        return words

    def schedules(self, key: Sequence[int]) -> Tuple[EncryptSchedule, DecryptSchedule]:
        """Return ``(encrypt_schedule, decrypt_schedule)`` for ``key``."""
        variant = AESVariant.from_key_words(len(key))
        nr = variant.nr
        self._log(f"Expanding {variant.name} key (Nk={variant.nk}, Nr={nr})")

        round_keys = self.expand_key_words(key).reshape(nr + 1, NB)

        encrypt = EncryptSchedule(
            variant=variant,
            initial=_read_only(round_keys[0]),
            middle=_read_only(round_keys[1:nr]),
            final=_read_only(round_keys[nr]),
        )

        # Reverse the middle keys and pre-apply InvMixColumns to each.
        decrypt_middle = np.stack([inv_mix_columns(k) for k in round_keys[nr - 1:0:-1]])
        decrypt = DecryptSchedule(
            variant=variant,
            initial=_read_only(round_keys[nr]),
            middle=_read_only(decrypt_middle),
            final=_read_only(round_keys[0]),
        )

        self._log(f"{nr + 1} round keys derived for each direction")
        return encrypt, decrypt


def expand_key(key: Sequence[int],
               tables: Optional[TableSet] = None) -> Tuple[EncryptSchedule, DecryptSchedule]:
    """Build the encryption and decryption schedules for a 4/6/8-word key."""
    return KeyScheduler(tables).schedules(key)
