"""
Table Construction Module

Pre-computes every lookup table the round engine needs:

* the forward and inverse S-boxes (256 × uint8), and
* the T-boxes T0..T3 (encryption) and U-boxes U0..U3 (decryption),
  256 × uint32 each.

A T-box entry fuses SubBytes and one column of the MixColumns matrix: for an
input byte ``a`` with ``s = sbox[a]``, ``T0[a]`` packs ``[2·s, s, s, 3·s]`` and
``T1..T3`` are the same bytes rotated right by 1..3 positions. The U-boxes do
the same with the inverse S-box and the column ``[E, 9, D, B]`` of the
InvMixColumns matrix.

Tables depend only on the field definition, never on a key. They are built
once, marked read-only, and shared by every schedule and every block.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Sequence

import numpy as np

from .constants import DECRYPT_COLUMN, ENCRYPT_COLUMN
from .gf_arithmetic import multiplication_table
from .sbox_generation import generate_inverse_sbox, generate_sbox
from .word_packing import pack_byte_columns


@dataclass(frozen=True, eq=False)
class TableSet:
    """The two S-boxes plus the stacked T-box (encrypt) and U-box (decrypt) tables."""

    sbox: np.ndarray        # (256,)   uint8
    inv_sbox: np.ndarray    # (256,)   uint8
    t_tables: np.ndarray    # (4, 256) uint32, row k is T_k
    u_tables: np.ndarray    # (4, 256) uint32, row k is U_k

    @property
    def t0(self) -> np.ndarray:
        return self.t_tables[0]

    @property
    def t1(self) -> np.ndarray:
        return self.t_tables[1]

    @property
    def t2(self) -> np.ndarray:
        return self.t_tables[2]

    @property
    def t3(self) -> np.ndarray:
        return self.t_tables[3]

    @property
    def u0(self) -> np.ndarray:
        return self.u_tables[0]

    @property
    def u1(self) -> np.ndarray:
        return self.u_tables[1]

    @property
    def u2(self) -> np.ndarray:
        return self.u_tables[2]

    @property
    def u3(self) -> np.ndarray:
        return self.u_tables[3]

    def same_as(self, other: "TableSet") -> bool:
        """True when every table matches ``other`` entry for entry."""
        return (np.array_equal(self.sbox, other.sbox)
                and np.array_equal(self.inv_sbox, other.inv_sbox)
                and np.array_equal(self.t_tables, other.t_tables)
                and np.array_equal(self.u_tables, other.u_tables))


class TableBuilder:
    """Builds the S-boxes and the fused T/U lookup tables."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._precompute_all_tables()

    def _log(self, message: str):
        if self.verbose:
            print(f"[TABLES] {message}")

    def _precompute_all_tables(self):
        """Pre-compute every table used by the round engine."""
        self._log("Pre-computing all lookup tables...")
        self._compute_sbox_tables()
        self._compute_multiplication_tables()
        self._compute_encryption_tables()
        self._compute_decryption_tables()
        self._log("All tables ready")

    def _compute_sbox_tables(self):
        self._log("Generating S-boxes from the field inverse + affine map...")
        self.sbox = generate_sbox()
        self.inv_sbox = generate_inverse_sbox()

    def _compute_multiplication_tables(self):
        """One ``c·x`` table per distinct matrix coefficient."""
        coefficients = sorted(set(ENCRYPT_COLUMN) | set(DECRYPT_COLUMN))
        self.mult_tables: Dict[int, np.ndarray] = {
            c: multiplication_table(c) for c in coefficients
        }
        self._log(f"Multiplication tables for coefficients "
                  f"{', '.join(hex(c) for c in coefficients)}")

    def _fused_tables(self, substitution: np.ndarray, column: Sequence[int]) -> np.ndarray:
        """
        Stack the four rotations of one fused substitution/diffusion table.

        Row ``k`` holds, for every input byte, the word packed from the column
        products rotated right by ``k`` byte positions.
        """
        products: List[np.ndarray] = [self.mult_tables[c][substitution] for c in column]
        rows = []
        for k in range(4):
            rotated = products[-k:] + products[:-k]
            rows.append(pack_byte_columns(*rotated))
        tables = np.stack(rows).astype(np.uint32)
        tables.setflags(write=False)
        return tables

    def _compute_encryption_tables(self):
        self._log("Building T0..T3 (S-box × [2, 1, 1, 3])...")
        self.t_tables = self._fused_tables(self.sbox, ENCRYPT_COLUMN)

    def _compute_decryption_tables(self):
        self._log("Building U0..U3 (inverse S-box × [E, 9, D, B])...")
        self.u_tables = self._fused_tables(self.inv_sbox, DECRYPT_COLUMN)

    def table_set(self) -> TableSet:
        return TableSet(sbox=self.sbox, inv_sbox=self.inv_sbox,
                        t_tables=self.t_tables, u_tables=self.u_tables)


def build_tables(verbose: bool = False) -> TableSet:
    """Build a fresh ``TableSet``. Every call returns identical tables."""
    return TableBuilder(verbose=verbose).table_set()


@lru_cache(maxsize=1)
def default_tables() -> TableSet:
    """Process-wide shared tables, built on first use."""
    return build_tables()
