"""
Cipher Parameters

Fixed parameters of the Rijndael/AES block cipher (FIPS-197). Everything the
cipher needs is derived from these values; there is nothing to configure at
runtime.
"""

from typing import Dict, Tuple

# ─── GF(2^8) ──────────────────────────────────────────────────────────
# x^8 + x^4 + x^3 + x + 1
AES_MODULUS = 0x11B
# Low byte of the modulus, folded back in when a doubling overflows.
REDUCTION_BYTE = 0x1B

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFFFFFF

# ─── S-box affine maps ────────────────────────────────────────────────
SBOX_AFFINE_CONSTANT = 0x63
SBOX_AFFINE_ROTATIONS = (0, 4, 5, 6, 7)        # right rotations, summed
INV_SBOX_AFFINE_CONSTANT = 0x05
INV_SBOX_AFFINE_ROTATIONS = (2, 5, 7)

# ─── Block and key geometry ───────────────────────────────────────────
NB = 4                       # words per state
BLOCK_BYTES = 16
ROUNDS_BY_NK: Dict[int, int] = {4: 10, 6: 12, 8: 14}

# ─── Diffusion matrices ───────────────────────────────────────────────
MIX_COLUMNS: Tuple[Tuple[int, ...], ...] = (
    (0x02, 0x03, 0x01, 0x01),
    (0x01, 0x02, 0x03, 0x01),
    (0x01, 0x01, 0x02, 0x03),
    (0x03, 0x01, 0x01, 0x02),
)

INV_MIX_COLUMNS: Tuple[Tuple[int, ...], ...] = (
    (0x0E, 0x0B, 0x0D, 0x09),
    (0x09, 0x0E, 0x0B, 0x0D),
    (0x0D, 0x09, 0x0E, 0x0B),
    (0x0B, 0x0D, 0x09, 0x0E),
)

# First column of each matrix, i.e. the byte pattern of T0 / U0.
ENCRYPT_COLUMN = tuple(row[0] for row in MIX_COLUMNS)        # 2, 1, 1, 3
DECRYPT_COLUMN = tuple(row[0] for row in INV_MIX_COLUMNS)    # E, 9, D, B

# ─── Row-shift offsets ────────────────────────────────────────────────
# Byte r of output column j is read from input column (j + offset[r]) % 4.
ENCRYPT_OFFSETS = (0, 1, 2, 3)
DECRYPT_OFFSETS = (0, 3, 2, 1)
