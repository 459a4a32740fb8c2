"""
Round Engine Module

Runs a 4-word state through the cipher rounds:

    initial key add  →  (Nr - 1) standard rounds  →  final round

A standard round fuses SubBytes, ShiftRows and MixColumns (or their inverses)
into four table lookups per output column. Output column ``j`` reads byte
``r`` of input column ``(j + offset[r]) % 4`` and looks it up in table ``r``;
the row shift is therefore encoded entirely in the offsets. The final round
reads the same bytes but only substitutes them, skipping diffusion.

The engine holds no per-call state, so one instance can serve any number of
schedules and blocks concurrently.
"""

from typing import List, Optional, Sequence

import numpy as np

from .constants import BYTE_MASK, DECRYPT_OFFSETS, ENCRYPT_OFFSETS, NB
from .errors import InvalidBlockSize
from .key_schedule import DecryptSchedule, EncryptSchedule, RoundKeySchedule
from .table_construction import TableSet, default_tables
from .word_packing import as_word_array

_BYTE_POSITIONS = np.arange(NB)
_BYTE_SHIFTS = np.array([24, 16, 8, 0], dtype=np.uint32)


def _source_columns(offsets: Sequence[int]) -> np.ndarray:
    """(4, 4) matrix: entry [j, r] is the input column feeding byte r of output column j."""
    return (np.arange(NB)[:, None] + np.asarray(offsets)[None, :]) % NB


ENCRYPT_SOURCES = _source_columns(ENCRYPT_OFFSETS)
DECRYPT_SOURCES = _source_columns(DECRYPT_OFFSETS)


def as_state(block: Sequence[int]) -> np.ndarray:
    """Validate a 4-word block and copy it into a uint32 state."""
    if np.ndim(block) != 1 or len(block) != NB:
        raise InvalidBlockSize(f"state must be exactly {NB} words, got "
                               f"{len(block) if np.ndim(block) == 1 else np.shape(block)}")
    return as_word_array(block)


def add_round_key(round_key: np.ndarray, state: np.ndarray) -> np.ndarray:
    return state ^ round_key


def state_bytes(state: np.ndarray) -> np.ndarray:
    """(4, 4) byte matrix: entry [c, r] is byte r (big-endian) of column c."""
    return (state[:, None] >> _BYTE_SHIFTS[None, :]) & BYTE_MASK


class RoundEngine:
    """Table-driven AES rounds for both directions."""

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables if tables is not None else default_tables()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: Sequence[int], schedule: EncryptSchedule) -> List[int]:
        state = as_state(plaintext)
        out = self._run(state, schedule, self.tables.t_tables,
                        self.tables.sbox, ENCRYPT_SOURCES)
        return [int(w) for w in out]

    def decrypt(self, ciphertext: Sequence[int], schedule: DecryptSchedule) -> List[int]:
        state = as_state(ciphertext)
        out = self._run(state, schedule, self.tables.u_tables,
                        self.tables.inv_sbox, DECRYPT_SOURCES)
        return [int(w) for w in out]

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def _run(self, state: np.ndarray, schedule: RoundKeySchedule,
             boxes: np.ndarray, sbox: np.ndarray, sources: np.ndarray) -> np.ndarray:
        state = add_round_key(schedule.initial, state)
        for round_key in schedule.middle:
            state = self.standard_round(state, round_key, boxes, sources)
        return self.final_round(state, schedule.final, sbox, sources)

    @staticmethod
    def standard_round(state: np.ndarray, round_key: np.ndarray,
                       boxes: np.ndarray, sources: np.ndarray) -> np.ndarray:
        """Four fused lookups per column, xored together and with the round key."""
        gathered = state_bytes(state)[sources, _BYTE_POSITIONS]
        looked_up = boxes[_BYTE_POSITIONS, gathered]
        return np.bitwise_xor.reduce(looked_up, axis=1) ^ round_key

    @staticmethod
    def final_round(state: np.ndarray, round_key: np.ndarray,
                    sbox: np.ndarray, sources: np.ndarray) -> np.ndarray:
        """Substitute each gathered byte in place; no MixColumns."""
        gathered = state_bytes(state)[sources, _BYTE_POSITIONS]
        placed = sbox[gathered].astype(np.uint32) << _BYTE_SHIFTS
        return np.bitwise_xor.reduce(placed, axis=1) ^ round_key
